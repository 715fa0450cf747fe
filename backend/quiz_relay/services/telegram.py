import asyncio
import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_MESSAGE_LIMIT = 4096

@dataclass
class SendResult:
    destination: str
    success: bool
    detail: str | None = None
    chunks_sent: int = 0

def _accumulate(parts: list[str], sep: str, limit: int) -> list[str]:
    # greedy packing; a part longer than limit on its own is emitted as-is
    groups: list[str] = []
    current: list[str] = []
    size = 0
    for part in parts:
        if current and size + len(sep) + len(part) > limit:
            groups.append(sep.join(current))
            current, size = [], 0
        size = size + len(sep) + len(part) if current else len(part)
        current.append(part)
    if current:
        groups.append(sep.join(current))
    return groups

def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """
    Splits text into chunks of at most `limit` chars, breaking between lines
    ("\\n".join(chunks) gives the text back). A longer line is broken between
    words and its pieces join back with " ". A single word over the limit is
    kept whole rather than truncated.
    """
    if len(text) <= limit:
        return [text]

    chunks: list[str] = []
    current: list[str] = []
    size = 0
    for line in text.split("\n"):
        if len(line) > limit:
            if current:
                chunks.append("\n".join(current))
            pieces = _accumulate(line.split(" "), " ", limit)
            chunks.extend(pieces[:-1])
            # tail of a long line may share a chunk with the following lines
            current, size = [pieces[-1]], len(pieces[-1])
            continue
        if current and size + 1 + len(line) > limit:
            chunks.append("\n".join(current))
            current, size = [], 0
        size = size + 1 + len(line) if current else len(line)
        current.append(line)
    if current:
        chunks.append("\n".join(current))
    return chunks

def _error_detail(response: httpx.Response) -> str:
    try:
        description = response.json().get("description")
    except (ValueError, AttributeError):
        description = None
    return f"Telegram API error: {description or response.status_code}"

def _response_ok(response: httpx.Response) -> bool:
    try:
        return response.json().get("ok", True) is not False
    except (ValueError, AttributeError):
        return True

class TelegramClient:
    def __init__(
        self,
        bot_token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        limit: int = TELEGRAM_MESSAGE_LIMIT,
        delay: float = 0.1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.bot_token = bot_token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.limit = limit
        self.delay = delay
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.api_base}/bot{self.bot_token}/sendMessage"

    async def send(self, chat_id: str, text: str) -> SendResult:
        # Telegram rejects whitespace-only text ("message text is empty")
        chunks = [c for c in split_message(text, self.limit) if c.strip()]
        sent = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for index, chunk in enumerate(chunks):
                if index and self.delay:
                    await asyncio.sleep(self.delay)
                payload = {"chat_id": chat_id, "text": chunk, "parse_mode": "HTML"}
                try:
                    r = await client.post(self.url, json=payload)
                except httpx.HTTPError as e:
                    logger.error("Telegram send to %s failed on chunk %d/%d: %s", chat_id, index + 1, len(chunks), e)
                    return SendResult(chat_id, False, f"Telegram request failed: {e}", sent)

                if not r.is_success or not _response_ok(r):
                    detail = _error_detail(r)
                    logger.error("Telegram send to %s failed on chunk %d/%d: %s", chat_id, index + 1, len(chunks), detail)
                    return SendResult(chat_id, False, detail, sent)

                sent += 1
                logger.debug("Sent chunk %d/%d (%d chars) to %s", index + 1, len(chunks), len(chunk), chat_id)

        return SendResult(chat_id, True, chunks_sent=sent)
