"""JSON file configuration store with atomic replace.

The document lives in a single file (``<repo>/config``). Writes go to a
temporary sibling that is flushed, fsynced and then moved over the target
with :func:`os.replace`, so readers in other processes only ever see a
complete old or complete new document, and a failed write leaves the
original file byte-for-byte unchanged.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import orjson

from nodecfg.domain.document import Document, get_path, json_type, set_path
from nodecfg.domain.errors import StoreIOError

logger = logging.getLogger(__name__)

CONFIG_FILENAME: Final = "config"
_DUMP_OPTIONS: Final = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


class JsonFileConfigStore:
    """Configuration document persisted as a JSON object in one file.

    Args:
        path: File holding the document.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> store = JsonFileConfigStore(Path(tempfile.mkdtemp()) / "config")
        >>> store.exists()
        False
        >>> store.set({"Bootstrap": []})
        >>> store.get_path("Bootstrap")
        []
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.is_file()

    def get(self) -> Document:
        """Read and parse the document; every call returns a fresh object.

        Raises:
            StoreIOError: If the file cannot be read, is not valid JSON, or
                does not hold a JSON object.
        """
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise StoreIOError(self.location, "read", _reason(exc)) from exc
        try:
            data: Any = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise StoreIOError(self.location, "parse", str(exc)) from exc
        if not isinstance(data, dict):
            raise StoreIOError(self.location, "parse", f"expected a JSON object, found {json_type(data)}")
        return data

    def set(self, document: Mapping[str, Any]) -> None:
        """Atomically replace the stored document.

        Raises:
            StoreIOError: If serialization or any filesystem step fails. The
                previous file is left untouched in that case.
        """
        try:
            payload = orjson.dumps(dict(document), option=_DUMP_OPTIONS)
        except TypeError as exc:
            raise StoreIOError(self.location, "serialize", str(exc)) from exc

        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=directory)
        except OSError as exc:
            raise StoreIOError(self.location, "write", _reason(exc)) from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except OSError as exc:
            with contextlib.suppress(FileNotFoundError):
                tmp_path.unlink()
            raise StoreIOError(self.location, "write", _reason(exc)) from exc

        logger.debug("Configuration written", extra={"path": self.location, "bytes": len(payload)})

    def get_path(self, path: str) -> Any:
        return get_path(self.get(), path)

    def set_path(self, path: str, value: Any) -> None:
        document = self.get()
        set_path(document, path, value)
        self.set(document)


def open_json_store(repo: Path) -> JsonFileConfigStore:
    """Open the store for the repository directory ``repo``.

    Example:
        >>> from pathlib import Path
        >>> open_json_store(Path("/tmp/node")).path.name
        'config'
    """
    return JsonFileConfigStore(repo.expanduser() / CONFIG_FILENAME)


__all__ = ["CONFIG_FILENAME", "JsonFileConfigStore", "open_json_store"]
