"""Durable key-value persistence for the bearer token and UI flags.

The API client depends only on the narrow ``CredentialStore`` protocol
(``get``/``set``/``remove``). ``FileCredentialStore`` persists to a JSON
file; ``InMemoryCredentialStore`` keeps everything in process memory.

Every operation is serialized through an ``asyncio.Lock`` so concurrent
coroutines observe last-write-wins semantics.

SECURITY: Never logs the token value.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from homekrew_api.exceptions import CredentialStoreError

logger = logging.getLogger(__name__)

_TOKEN_KEY = "authToken"
_FLAGS_KEY = "flags"


@runtime_checkable
class CredentialStore(Protocol):
    """Interface consumed by the API client."""

    async def get(self) -> str | None: ...

    async def set(self, token: str) -> None: ...

    async def remove(self) -> None: ...


class InMemoryCredentialStore:
    """Process-local credential store."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token
        self._flags: dict[str, bool] = {}
        self._lock = asyncio.Lock()

    async def get(self) -> str | None:
        async with self._lock:
            return self._token

    async def set(self, token: str) -> None:
        async with self._lock:
            self._token = token

    async def remove(self) -> None:
        async with self._lock:
            self._token = None

    async def get_flag(self, name: str, default: bool = False) -> bool:
        async with self._lock:
            return self._flags.get(name, default)

    async def set_flag(self, name: str, value: bool) -> None:
        async with self._lock:
            self._flags[name] = value


class FileCredentialStore:
    """JSON-file backed credential store.

    Parameters
    ----------
    path:
        Location of the JSON document. ``~`` is expanded and parent
        directories are created on first write.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self) -> str | None:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
        token = document.get(_TOKEN_KEY)
        return token if isinstance(token, str) else None

    async def set(self, token: str) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            document[_TOKEN_KEY] = token
            await asyncio.to_thread(self._write, document)
        logger.debug("Stored credential at %s", self._path)

    async def remove(self) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            if _TOKEN_KEY not in document:
                return
            del document[_TOKEN_KEY]
            await asyncio.to_thread(self._write, document)
        logger.info("Removed stored credential at %s", self._path)

    async def get_flag(self, name: str, default: bool = False) -> bool:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
        flags = document.get(_FLAGS_KEY)
        if not isinstance(flags, dict):
            return default
        value = flags.get(name, default)
        return value if isinstance(value, bool) else default

    async def set_flag(self, name: str, value: bool) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            flags = document.get(_FLAGS_KEY)
            if not isinstance(flags, dict):
                flags = {}
            flags[name] = bool(value)
            document[_FLAGS_KEY] = flags
            await asyncio.to_thread(self._write, document)

    def _read(self) -> dict[str, Any]:
        """Load the document; a missing or unreadable file counts as empty."""
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(
                "Unreadable credential file at %s (%s); treating as empty",
                self._path,
                exc.__class__.__name__,
            )
            return {}
        if not isinstance(raw, dict):
            logger.warning("Credential file at %s is not a JSON object; treating as empty", self._path)
            return {}
        return raw

    def _write(self, document: dict[str, Any]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise CredentialStoreError(
                f"Failed to write credential file at {self._path}"
            ) from exc
