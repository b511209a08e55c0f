"""
Telegram bot integration for reporting unmatched SKUs.

Sends the report as plain-text messages to a Telegram chat.
"""

import requests
import structlog

from integrations.notifications import REPORT_SUBJECT, format_unmatched_report
from exceptions import NotificationError

logger = structlog.get_logger(__name__)

# Telegram rejects longer messages
MAX_MESSAGE_LENGTH = 4096


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """
    Split text on line boundaries into chunks no longer than `limit`.

    A single line longer than the limit is hard-wrapped.
    """
    chunks = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def send_message(bot_token: str, chat_id: str, message: str, timeout: float = 10) -> None:
    """
    Send one message to Telegram.

    Args:
        bot_token: Bot API token
        chat_id: Target chat
        message: Message text (plain, no parse mode)
        timeout: HTTP timeout in seconds

    Raises:
        NotificationError: If send fails
    """
    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"

    payload = {
        "chat_id": chat_id,
        "text": message,
        "disable_web_page_preview": True,
    }

    try:
        logger.info("sending_telegram_message", chat_id=chat_id)

        response = requests.post(url, json=payload, timeout=timeout)
        response.raise_for_status()

        result = response.json()

    except requests.exceptions.RequestException as e:
        logger.error("telegram_request_failed", error=str(e))
        raise NotificationError("telegram", f"Failed to send Telegram message: {str(e)}")
    except ValueError as e:
        logger.error("telegram_invalid_response", error=str(e))
        raise NotificationError("telegram", "Telegram response is not JSON")

    if not isinstance(result, dict):
        logger.error("telegram_invalid_response", payload_type=type(result).__name__)
        raise NotificationError("telegram", "Telegram response is not an object")

    if not result.get("ok"):
        error_msg = result.get("description", "Unknown error")
        logger.error("telegram_api_error", error=error_msg)
        raise NotificationError("telegram", f"Telegram API error: {error_msg}")

    sent = result.get("result")
    logger.info(
        "telegram_message_sent",
        message_id=sent.get("message_id") if isinstance(sent, dict) else None
    )


class TelegramNotifier:
    """Posts the unmatched-SKU report to a chat."""

    def __init__(self, bot_token: str, chat_id: str, timeout: float = 10):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout

    def notify(self, skus: list[str]) -> None:
        if not skus:
            return

        text = f"{REPORT_SUBJECT}\n\n{format_unmatched_report(skus)}"
        for chunk in split_message(text):
            send_message(self.bot_token, self.chat_id, chunk, timeout=self.timeout)
