"""Saved quotes kept as one JSON document, newest first.

Every create or delete rewrites the whole document. A temporary file in the
same directory is written and then moved over the document, so a reader never
sees half of a write. Mutations are serialized by an ``asyncio.Lock``; the
lock only covers this process, a second process writing the same file can
still lose updates.
"""
import asyncio
import json
import logging
import os
import tempfile
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pydantic import ValidationError

from autoquote.core.config import settings
from autoquote.core.enums import StoreOperation
from autoquote.core.metrics import saved_quotes, track_store_operation
from autoquote.schemas.quote import QuoteCreate, SavedQuote

logger = logging.getLogger(__name__)


class QuoteStoreError(Exception):
    """The quote document could not be written."""


class QuoteIdGenerator:
    """Millisecond timestamps as strings, strictly increasing per generator."""

    def __init__(self, clock=time.time_ns):
        self._clock = clock
        self._last = 0

    def next_id(self, taken: Iterable[str] = ()) -> str:
        taken = set(taken)
        candidate = max(self._clock() // 1_000_000, self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonQuoteStore:

    def __init__(self, path: str, id_generator: Optional[QuoteIdGenerator] = None):
        self.path = path
        self._ids = id_generator or QuoteIdGenerator()
        self._lock = asyncio.Lock()

    @track_store_operation(StoreOperation.LIST.value)
    async def list(self) -> List[SavedQuote]:
        quotes = await self._read()
        saved_quotes.set(len(quotes))
        return quotes

    @track_store_operation(StoreOperation.CREATE.value)
    async def create(self, record: QuoteCreate) -> SavedQuote:
        async with self._lock:
            quotes = await self._read()
            quote = SavedQuote(
                **record.model_dump(exclude={"id", "created_at"}),
                id=self._ids.next_id(q.id for q in quotes),
                created_at=utc_timestamp(),
            )
            quotes.insert(0, quote)
            await self._write(quotes)

        logger.info(f"Saved quote {quote.id} ({quote.quote_name!r})")
        return quote

    @track_store_operation(StoreOperation.DELETE.value)
    async def delete(self, quote_id: str) -> bool:
        async with self._lock:
            quotes = await self._read()
            remaining = [q for q in quotes if q.id != quote_id]
            if len(remaining) == len(quotes):
                return False
            await self._write(remaining)

        logger.info(f"Deleted quote {quote_id}")
        return True

    async def _read(self) -> List[SavedQuote]:
        return await asyncio.to_thread(self._read_document)

    async def _write(self, quotes: List[SavedQuote]) -> None:
        await asyncio.to_thread(self._write_document, quotes)
        saved_quotes.set(len(quotes))

    def _read_document(self) -> List[SavedQuote]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning(f"Quote document {self.path} unreadable, treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Quote document {self.path} is not a list, treating as empty")
            return []

        quotes = []
        for position, entry in enumerate(data):
            try:
                quotes.append(SavedQuote.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed quote at position {position} in {self.path}: {e}")
        return quotes

    def _write_document(self, quotes: List[SavedQuote]) -> None:
        document = json.dumps([q.model_dump(by_alias=True) for q in quotes], indent=2)
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".quotes-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write quote document {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise QuoteStoreError(f"Could not write {self.path}") from e


_store: Optional[JsonQuoteStore] = None


def get_quote_store() -> JsonQuoteStore:
    global _store
    if _store is None:
        _store = JsonQuoteStore(settings.QUOTES_FILE)
    return _store
