"""Email service using MailerSend."""
import html
import logging
from typing import Optional

import httpx

from ..config import get_settings
from ..models.manual_request import ManualRequest
from .request_service import build_notification_body

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails via MailerSend API."""

    def __init__(self):
        self.settings = get_settings()
        self.api_key = self.settings.mailersend_api_key
        self.from_email = self.settings.mailersend_from_email
        self.from_name = self.settings.mailersend_from_name
        self.base_url = "https://api.mailersend.com/v1"

    def is_configured(self) -> bool:
        """Check if email service is properly configured."""
        return bool(self.api_key)

    async def send_email(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send a generic email via MailerSend. Returns True on success."""
        if not self.is_configured():
            logger.info("[Email] MailerSend not configured, skipping email send")
            return False

        payload = {
            "from": {
                "email": self.from_email,
                "name": self.from_name,
            },
            "to": [
                {
                    "email": to_email,
                    "name": to_name or to_email,
                }
            ],
            "subject": subject,
            "html": html_content,
        }
        if text_content:
            payload["text"] = text_content

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}/email",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logger.warning("[Email] Error sending to %s: %s", to_email, e)
            return False

        if response.status_code in (200, 201, 202):
            logger.info("[Email] Sent email to %s", to_email)
            return True

        logger.warning("[Email] Failed to send to %s: %s - %s", to_email, response.status_code, response.text)
        return False

    async def send_manual_request_notification(self, request: ManualRequest) -> bool:
        """Notify the portal administrator about a new manual request."""
        body = build_notification_body(request)
        admin_email = self.settings.admin_notification_email

        if not self.is_configured():
            logger.info("[Email] Manual request notification (email not configured) for %s:\n%s", admin_email, body)
            return False

        admin_url = f"{self.settings.app_base_url}/admin/requests/{request.id}/edit"
        html_content = f"""
<!DOCTYPE html>
<html>
<body style="font-family: sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <pre style="white-space: pre-wrap; font-family: inherit;">{html.escape(body)}</pre>
        <p><a href="{html.escape(admin_url)}">リクエストを確認する</a></p>
    </div>
</body>
</html>
"""
        return await self.send_email(
            to_email=admin_email,
            to_name=None,
            subject=f"【マニュアルリクエスト】{request.manual_title}",
            html_content=html_content,
            text_content=body,
        )


_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service


async def notify_manual_request(request: ManualRequest) -> None:
    """Background task: deliver the new-request notification, logging failures."""
    sent = await get_email_service().send_manual_request_notification(request)
    if not sent:
        logger.warning("[Requests] Notification for request %s was not delivered", request.id)
