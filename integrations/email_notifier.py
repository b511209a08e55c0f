"""
Email delivery of the unmatched-SKU report over SMTP/SSL.
"""

import smtplib
from email.message import EmailMessage
from email.utils import formataddr
import structlog

from integrations.notifications import REPORT_SUBJECT, format_unmatched_report
from exceptions import NotificationError

logger = structlog.get_logger(__name__)

SENDER_NAME = "Inventory Sync"


class EmailNotifier:
    """Sends one plain-text email per run."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        recipient: str,
        timeout: float = 30,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.recipient = recipient
        self.timeout = timeout

    def build_message(self, skus: list[str]) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((SENDER_NAME, self.user))
        message["To"] = self.recipient
        message["Subject"] = REPORT_SUBJECT
        message.set_content(format_unmatched_report(skus))
        return message

    def notify(self, skus: list[str]) -> None:
        """
        Email the unmatched SKUs.

        Raises:
            NotificationError: If the SMTP exchange fails
        """
        if not skus:
            return

        message = self.build_message(skus)

        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.login(self.user, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("unmatched_sku_email_failed", error=str(e))
            raise NotificationError("email", f"Failed to send email: {e}") from e

        logger.info("unmatched_sku_email_sent", count=len(skus), to=self.recipient)
