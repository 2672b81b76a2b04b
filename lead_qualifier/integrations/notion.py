"""Notion client: one database page per HIGH lead, plus a database probe for diagnostics."""
import logging
from typing import Any, Optional

import httpx

from ..core.models import LeadRecord, StepResult, StepStatus
from .errors import CollaboratorError

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
# Notion caps a single rich_text item at 2000 characters and a property at 100 items.
RICH_TEXT_CHUNK = 2000
RICH_TEXT_MAX_ITEMS = 100


def _rich_text(content: str) -> list[dict]:
    chunks = [content[i:i + RICH_TEXT_CHUNK] for i in range(0, len(content), RICH_TEXT_CHUNK)] or [""]
    if len(chunks) > RICH_TEXT_MAX_ITEMS:
        logger.warning(
            "NOTION: text of %d chars truncated to %d chars",
            len(content), RICH_TEXT_CHUNK * RICH_TEXT_MAX_ITEMS,
        )
        chunks = chunks[:RICH_TEXT_MAX_ITEMS]
    return [{"text": {"content": chunk}} for chunk in chunks]


def build_page_properties(record: LeadRecord) -> dict[str, Any]:
    """Property names must match the database columns exactly."""
    properties: dict[str, Any] = {
        "Name": {"title": [{"text": {"content": f"Lead {record.lead_id}"}}]},
        "Lead ID": {"rich_text": _rich_text(record.lead_id)},
        "Label": {"select": {"name": record.label.value}},
        "Created At": {"date": {"start": record.created_at}},
        "Message": {"rich_text": _rich_text(record.message)},
        "Score (net)": {"number": record.scores.net_score},
        "Score (High)": {"number": record.scores.high_score},
        "Score (Low)": {"number": record.scores.low_score},
    }

    # Optional contact columns only when present
    if record.email:
        properties["Email"] = {"email": record.email}
    if record.phone:
        properties["Phone"] = {"phone_number": record.phone}
    if record.whatsapp:
        properties["WhatsApp"] = {"rich_text": _rich_text(record.whatsapp)}

    return properties


class NotionLeadStore:
    def __init__(
        self,
        token: Optional[str],
        database_id: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.database_id = database_id
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.token and self.database_id)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=NOTION_API_BASE,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Notion-Version": NOTION_VERSION,
            },
        )

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.is_error:
            message = body.get("message") or response.reason_phrase
            code = body.get("code", response.status_code)
            raise CollaboratorError(f"Notion error {code}: {message}")
        return body

    async def create_lead_page(self, record: LeadRecord) -> StepResult:
        """Create the lead page. SKIPPED when credentials are absent; errors propagate."""
        if not self.configured:
            return StepResult(status=StepStatus.SKIPPED, detail="notion not configured")

        try:
            async with self._client() as client:
                response = await client.post(
                    "/pages",
                    json={
                        "parent": {"database_id": self.database_id},
                        "properties": build_page_properties(record),
                    },
                )
        except httpx.HTTPError as e:
            raise CollaboratorError(f"Notion request failed: {e}") from e

        page = self._raise_for_error(response)
        return StepResult(status=StepStatus.OK, detail=page.get("id"))

    async def describe_database(self) -> dict[str, Any]:
        """Confirm the configured database id points at the intended database."""
        if not self.configured:
            raise CollaboratorError("Notion is not configured (NOTION_TOKEN / NOTION_DATABASE_ID)")

        try:
            async with self._client() as client:
                response = await client.get(f"/databases/{self.database_id}")
        except httpx.HTTPError as e:
            raise CollaboratorError(f"Notion request failed: {e}") from e

        db = self._raise_for_error(response)
        title_parts = db.get("title") or []
        title = title_parts[0].get("plain_text") if title_parts and title_parts[0].get("plain_text") else "(no title returned)"
        props = db.get("properties") or {}
        return {
            "database_id": db.get("id"),
            "title": title,
            "url": db.get("url"),
            "object": db.get("object"),
            "has_properties": bool(props),
            "property_count": len(props),
            "property_keys": list(props.keys()),
        }
