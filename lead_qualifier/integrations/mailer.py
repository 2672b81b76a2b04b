"""SMTP auto-acknowledgment for HIGH leads."""
import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from .errors import CollaboratorError

logger = logging.getLogger(__name__)

ACK_SUBJECT = "Thanks — we received your inquiry"
ACK_BODY = """Hi,

Thanks for reaching out. We've received your message and will review it shortly.

If everything looks aligned, someone from our team will follow up within one business day.

Best regards,"""


class AutoResponder:
    def __init__(
        self,
        host: Optional[str],
        port: int,
        user: Optional[str],
        password: Optional[str],
        sender: Optional[str],
        timeout: float = 20.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password and self.sender)

    def build_message(self, to_email: str) -> MIMEText:
        msg = MIMEText(ACK_BODY, "plain", "utf-8")
        msg["From"] = self.sender
        msg["To"] = to_email
        msg["Subject"] = ACK_SUBJECT
        return msg

    def _send_sync(self, to_email: str) -> None:
        msg = self.build_message(to_email)
        # Port 465 speaks implicit TLS; anything else upgrades with STARTTLS when offered.
        if self.port == 465:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
                server.login(self.user, self.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
                server.login(self.user, self.password)
                server.send_message(msg)

    async def send(self, to_email: str) -> None:
        """Send the acknowledgment. Raises CollaboratorError on any SMTP/network failure."""
        if not self.configured:
            raise CollaboratorError("SMTP is not configured (SMTP_HOST / SMTP_USER / SMTP_PASS / SMTP_FROM)")
        try:
            await asyncio.to_thread(self._send_sync, to_email)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("MAILER: failed to send auto-response to %s: %s", to_email, e)
            raise CollaboratorError(str(e) or e.__class__.__name__) from e
        logger.info("MAILER: auto-response sent to %s", to_email)
