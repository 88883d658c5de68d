"""Persistent key-value storage for the watchlist."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from ..market.models import Stock

logger = logging.getLogger(__name__)

WATCHLIST_KEY = "stock-watchlist"


class PersistenceReadFailure(Exception):
    """Stored watchlist exists but could not be decoded."""


class WatchlistStorage(ABC):
    """One logical entry: the serialized watchlist.

    load() never raises. Unreadable data is logged and treated as absent, so
    a session always starts, if need be with an empty watchlist.
    """

    def load(self) -> list[Stock]:
        try:
            return self._read()
        except PersistenceReadFailure as e:
            logger.warning("Discarding stored watchlist: %s", e)
            return []

    @abstractmethod
    def _read(self) -> list[Stock]:
        """Return the stored stocks. Raise PersistenceReadFailure on bad data."""

    @abstractmethod
    def save(self, stocks: Iterable[Stock]) -> None:
        """Replace the stored watchlist."""


class MemoryStorage(WatchlistStorage):
    """Keeps the serialized watchlist in process memory."""

    def __init__(self, raw: str | None = None) -> None:
        self.raw = raw

    def _read(self) -> list[Stock]:
        if self.raw is None:
            return []
        return decode_watchlist(self.raw)

    def save(self, stocks: Iterable[Stock]) -> None:
        self.raw = encode_watchlist(stocks)


class JsonFileStorage(WatchlistStorage):
    """JSON file holding a ``{key: [stock, ...]}`` object.

    Writes go to a temporary file in the same directory and are moved into
    place, so a crash mid-write leaves the previous watchlist intact.
    """

    def __init__(self, path: str | os.PathLike, key: str = WATCHLIST_KEY) -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[Stock]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise PersistenceReadFailure(f"cannot read {self._path}: {e}") from e
        except UnicodeDecodeError as e:
            raise PersistenceReadFailure(f"{self._path} is not valid UTF-8: {e}") from e

        try:
            document = json.loads(text)
        except ValueError as e:
            raise PersistenceReadFailure(f"{self._path} is not valid JSON: {e}") from e
        if not isinstance(document, dict):
            raise PersistenceReadFailure(f"{self._path} does not hold a JSON object")
        if self._key not in document:
            return []
        return _decode_items(document[self._key])

    def save(self, stocks: Iterable[Stock]) -> None:
        document: dict = {}
        try:
            existing = json.loads(self._path.read_text(encoding="utf-8"))
            if isinstance(existing, dict):
                document = existing
        except (OSError, ValueError):  # UnicodeDecodeError is a ValueError
            pass  # Missing or corrupt: overwrite with just our entry
        document[self._key] = [stock.to_dict() for stock in stocks]

        tmp = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp, self._path)
            tmp = None
        except OSError as e:
            logger.error("Failed to save watchlist to %s: %s", self._path, e)
        finally:
            if tmp is not None:
                _discard(tmp)


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", path, e)


def encode_watchlist(stocks: Iterable[Stock]) -> str:
    return json.dumps([stock.to_dict() for stock in stocks])


def decode_watchlist(raw: str) -> list[Stock]:
    try:
        items = json.loads(raw)
    except ValueError as e:
        raise PersistenceReadFailure(f"not valid JSON: {e}") from e
    return _decode_items(items)


def _decode_items(items: object) -> list[Stock]:
    if not isinstance(items, list):
        raise PersistenceReadFailure(f"expected a JSON array, got {type(items).__name__}")
    try:
        return [Stock.from_dict(item) for item in items]
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise PersistenceReadFailure(f"malformed stock entry: {e!r}") from e
