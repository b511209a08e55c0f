"""
Unmatched-SKU reporting.

A notification sink receives the ordered list of catalog SKUs that have no
supplier record. Every sink is a no-op for an empty list.
"""

from typing import Protocol
import structlog

from config.settings import Settings
from exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

REPORT_SUBJECT = "Unmatched SKUs Found in Shopify"


class NotificationSink(Protocol):
    """Anything that can report unmatched SKUs."""

    def notify(self, skus: list[str]) -> None:
        ...


def format_unmatched_report(skus: list[str]) -> str:
    """Plain-text body, one SKU per line, duplicates kept."""
    header = "The following SKUs were found in Shopify but not in your supplier inventory:"
    return header + "\n\n" + "\n".join(skus)


class LogNotifier:
    """Reports unmatched SKUs to the log only."""

    def notify(self, skus: list[str]) -> None:
        if not skus:
            return
        logger.warning("unmatched_skus", count=len(skus), skus=skus)


def build_notifier(settings: Settings) -> NotificationSink:
    """
    Pick the sink named by settings.notification_channel.

    Raises:
        ConfigurationError: If the chosen channel is missing credentials
    """
    channel = settings.notification_channel

    if channel == "email":
        if not settings.email_configured:
            raise ConfigurationError(
                "email_user/email_pass/email_to",
                "Email notifications need EMAIL_USER, EMAIL_PASS and EMAIL_TO"
            )
        from integrations.email_notifier import EmailNotifier

        return EmailNotifier(
            host=settings.email_host,
            port=settings.email_port,
            user=settings.email_user,
            password=settings.email_pass,
            recipient=settings.email_to,
            timeout=settings.request_timeout_seconds,
        )

    if channel == "telegram":
        if not settings.telegram_configured:
            raise ConfigurationError(
                "telegram_bot_token/telegram_chat_id",
                "Telegram notifications need TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID"
            )
        from integrations.telegram import TelegramNotifier

        return TelegramNotifier(
            bot_token=settings.telegram_bot_token,
            chat_id=settings.telegram_chat_id,
            timeout=settings.request_timeout_seconds,
        )

    return LogNotifier()
