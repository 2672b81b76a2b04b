"""Slack Web API client for lead notifications (chat.postMessage)."""
import logging
from typing import Optional

import httpx

from .errors import NotificationError

logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api"


class SlackNotifier:
    def __init__(
        self,
        token: Optional[str],
        channel_id: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.channel_id = channel_id
        self.timeout = timeout
        self._transport = transport

    async def post_message(self, text: str) -> str:
        """
        Post text to the configured channel.

        Returns:
            The Slack message timestamp ("ts").

        Raises:
            NotificationError: not configured, transport failure, or Slack answered ok=false.
        """
        if not self.token or not self.channel_id:
            raise NotificationError("Slack is not configured (SLACK_BOT_TOKEN / SLACK_CHANNEL_ID)")

        try:
            async with httpx.AsyncClient(
                base_url=SLACK_API_BASE, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    "/chat.postMessage",
                    headers={"Authorization": f"Bearer {self.token}"},
                    json={"channel": self.channel_id, "text": text},
                )
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as e:
            logger.error("SLACK: timeout posting message: %s", e)
            raise NotificationError("Slack request timed out") from e
        except httpx.HTTPError as e:
            logger.error("SLACK: HTTP error posting message: %s", e)
            raise NotificationError(f"Slack request failed: {e}") from e
        except ValueError as e:
            raise NotificationError(f"Slack returned a non-JSON response: {e}") from e

        if not body.get("ok"):
            error = body.get("error", "unknown_error")
            logger.error("SLACK: chat.postMessage rejected: %s", error)
            raise NotificationError(f"Slack error: {error}")

        return body.get("ts", "")
