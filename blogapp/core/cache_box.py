"""
BlogApp Client Core — Local Key-Value Cache Box
================================================

What:  A single named box of JSON values persisted to one file.
How:   The whole box is read into memory by `open()`. Reads are served from
       memory; every write rewrites the file (temp file + atomic replace)
       with aiofiles before the in-memory copy changes.
Who:   Opened once by the composition root and handed to local data sources.

File layout:
    <cache_dir>/
    └── blogs.json      ← {"<key>": <json value>, ...}

Opening never fails on a damaged file: it is logged and the box starts
empty. Write errors are not translated here. `OSError` (I/O) and
`TypeError` (unserialisable values) propagate to the data source that owns
the box.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles
import aiofiles.os

from blogapp.exceptions import CacheError

logger = logging.getLogger(__name__)


class CacheBox:
    """
    File-backed key-value box.

    Usage:
        box = await CacheBox.open("blogs", settings.cache_dir)
        await box.put("blogs", [...])
        cached = await box.get("blogs", [])
    """

    def __init__(self, name: str, directory: Union[str, Path]):
        self.name = name
        self.path = Path(directory) / f"{name}.json"
        self._data: Dict[str, Any] = {}
        self._opened = False

    @classmethod
    async def open(cls, name: str, directory: Union[str, Path]) -> "CacheBox":
        box = cls(name, directory)
        await box.load()
        return box

    @property
    def is_open(self) -> bool:
        return self._opened

    async def load(self) -> None:
        """
        Reads the box file into memory.

        A missing, unreadable or corrupted file opens as an empty box; the
        next write replaces it. Only a cache directory that cannot be
        created is fatal.

        Raises:
            CacheError: The cache directory could not be created
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cache directory %s is not usable: %s", self.path.parent, e)
            raise CacheError(
                message="Could not create the local cache directory",
                context={"box": self.name, "directory": str(self.path.parent), "error": str(e)},
            )

        data: Dict[str, Any] = {}
        if self.path.exists():
            try:
                async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                    raw = await f.read()
                if raw.strip():
                    data = json.loads(raw)
                if not isinstance(data, dict):
                    raise ValueError("top level is not a JSON object")
            except (OSError, ValueError) as e:
                logger.warning(
                    "Cache box file %s could not be read, starting empty: %s", self.path, e
                )
                data = {}

        self._data = data
        self._opened = True
        logger.info("Cache box '%s' opened with %d key(s) from %s", self.name, len(data), self.path)

    def _ensure_open(self) -> None:
        if not self._opened:
            raise RuntimeError(f"Cache box '{self.name}' is not open")

    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        self._ensure_open()
        if key not in self._data:
            return default
        # Callers get their own copy; mutating it must not touch the box
        return copy.deepcopy(self._data[key])

    async def put(self, key: str, value: Any) -> None:
        self._ensure_open()
        updated = dict(self._data)
        updated[key] = copy.deepcopy(value)
        await self._flush(updated)
        self._data = updated

    async def delete(self, key: str) -> None:
        self._ensure_open()
        if key not in self._data:
            return
        updated = dict(self._data)
        del updated[key]
        await self._flush(updated)
        self._data = updated

    async def clear(self) -> None:
        self._ensure_open()
        await self._flush({})
        self._data = {}

    def keys(self) -> List[str]:
        self._ensure_open()
        return list(self._data.keys())

    def __len__(self) -> int:
        self._ensure_open()
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        self._ensure_open()
        return key in self._data

    async def _flush(self, data: Dict[str, Any]) -> None:
        payload = json.dumps(data, ensure_ascii=False)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(payload)
        await aiofiles.os.replace(tmp_path, self.path)
        logger.debug("Cache box '%s' written (%d bytes)", self.name, len(payload))
