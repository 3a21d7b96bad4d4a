"""JSON-file-backed cache provider.

Each namespace keeps its whole table in a ``dict[str, bytes]`` and mirrors
it to one JSON file.  The file is read once at startup and rewritten in full
after every insert.  There is no eviction: the table only grows.

Locking happens at two levels:

- ``_FILE_LOCK`` is a process-wide ``threading.Lock`` taken by every
  :func:`load_table` and :func:`save_table` call, whichever namespace it
  belongs to.  All cache file I/O in the process is serialized through it.
  Saves run in a worker thread via ``asyncio.to_thread``, which is why this
  is a thread lock and not an asyncio one.
- Each :class:`JsonFileCacheProvider` holds an ``asyncio.Lock`` around
  insert-then-save, so two inserts on the same namespace cannot interleave
  and the file always reflects a table state that existed in memory.

File format: a JSON object mapping key to the payload decoded as UTF-8 with
``surrogateescape``.  Bodies that are valid UTF-8 (all TMDB responses) read
as ordinary strings; anything else still round-trips byte for byte.
"""

from __future__ import annotations

import asyncio
import json
import threading
from pathlib import Path
from typing import Any

import structlog

from showtracker.interfaces.cache_provider import ICacheProvider
from showtracker.models.cache import CacheNamespace
from showtracker.utils.errors import CacheLoadError, CacheWriteError
from showtracker.utils.logging import get_logger

_FILE_LOCK = threading.Lock()

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Table persistence
# ---------------------------------------------------------------------------


def _decode_value(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode(_ENCODING, _ERRORS)
    # Payloads stored as embedded JSON documents rather than strings.
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode(
        _ENCODING, _ERRORS
    )


def load_table(path: str | Path) -> dict[str, bytes]:
    """Read a cache table from *path*.

    A missing file is an empty table.  An unreadable file, invalid JSON, or
    a JSON document that is not an object raises :class:`CacheLoadError`.
    """
    path = Path(path)
    with _FILE_LOCK:
        if not path.exists():
            return {}
        try:
            text = path.read_text(encoding=_ENCODING, errors=_ERRORS)
        except OSError as exc:
            raise CacheLoadError(
                message=f"error reading cache file {path}: {exc}",
                path=str(path),
            ) from exc

    try:
        data = json.loads(text)
    except ValueError as exc:
        raise CacheLoadError(
            message=f"cache file {path} is not valid JSON: {exc}",
            path=str(path),
        ) from exc

    if not isinstance(data, dict):
        raise CacheLoadError(
            message=f"cache file {path} must hold a JSON object, got {type(data).__name__}",
            path=str(path),
        )

    try:
        return {str(key): _decode_value(value) for key, value in data.items()}
    except (UnicodeError, TypeError) as exc:
        raise CacheLoadError(
            message=f"cache file {path} holds an undecodable entry: {exc}",
            path=str(path),
        ) from exc


def save_table(path: str | Path, table: dict[str, bytes]) -> None:
    """Write *table* to *path* as indented JSON, replacing prior contents.

    Parent directories are created as needed.  Any I/O failure raises
    :class:`CacheWriteError`.
    """
    path = Path(path)
    payload = {key: value.decode(_ENCODING, _ERRORS) for key, value in table.items()}
    text = json.dumps(payload, indent=2, ensure_ascii=False)

    with _FILE_LOCK:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding=_ENCODING, errors=_ERRORS)
        except OSError as exc:
            raise CacheWriteError(
                message=f"error writing cache file {path}: {exc}",
                path=str(path),
            ) from exc


# ---------------------------------------------------------------------------
# Namespace owner
# ---------------------------------------------------------------------------


class JsonFileCacheProvider(ICacheProvider):
    """Owner of one namespace's cache table and its JSON file.

    Parameters
    ----------
    namespace:
        Which cache domain this provider serves.
    path:
        File the table is loaded from and saved to.  Must not be shared
        with any other namespace.
    """

    def __init__(self, namespace: CacheNamespace, path: str | Path) -> None:
        self._namespace = namespace
        self._path = Path(path)
        self._table: dict[str, bytes] = {}
        self._lock = asyncio.Lock()

    @property
    def namespace(self) -> CacheNamespace:
        return self._namespace

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self, strict: bool = False) -> int:
        """Populate the table from disk and return the number of entries.

        With ``strict=False`` a :class:`CacheLoadError` is logged and the
        provider starts with an empty table.  With ``strict=True`` the error
        propagates so startup can abort.
        """
        try:
            self._table = load_table(self._path)
        except CacheLoadError as exc:
            if strict:
                raise
            _logger.warning(
                "cache_load_failed",
                namespace=self._namespace.value,
                path=str(self._path),
                error=exc.message,
            )
            self._table = {}
            return 0

        _logger.info(
            "cache_loaded",
            namespace=self._namespace.value,
            path=str(self._path),
            entries=len(self._table),
        )
        return len(self._table)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    def get(self, key: str) -> bytes | None:
        value = self._table.get(key)
        if value is not None:
            _logger.debug("cache_hit", namespace=self._namespace.value, key=key)
        else:
            _logger.debug("cache_miss", namespace=self._namespace.value, key=key)
        return value

    async def set(self, key: str, value: bytes) -> bool:
        async with self._lock:
            self._table[key] = value
            snapshot = dict(self._table)
            try:
                await asyncio.to_thread(save_table, self._path, snapshot)
            except CacheWriteError as exc:
                _logger.error(
                    "cache_save_failed",
                    namespace=self._namespace.value,
                    key=key,
                    path=str(self._path),
                    error=exc.message,
                )
                return False

        _logger.debug(
            "cache_saved",
            namespace=self._namespace.value,
            key=key,
            entries=len(snapshot),
        )
        return True

    def exists(self, key: str) -> bool:
        return key in self._table

    def size(self) -> int:
        return len(self._table)
