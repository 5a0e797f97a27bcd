"""
BlogApp Client Core — Blog Local Data Source
=============================================

What:  Offline snapshot of the last successfully fetched blog list.
How:   The whole list is stored under one key of the `blogs` cache box and
       overwritten wholesale on every save. No merging, no TTL.
Who:   Written by BlogRepositoryImpl after each online fetch; read when the
       device is offline.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from blogapp.core.cache_box import CacheBox
from blogapp.exceptions import CacheError
from blogapp.schemas.blog import Blog

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "blogs"


class BlogLocalDataSource(ABC):
    @abstractmethod
    async def upload_local_blogs(self, blogs: List[Blog]) -> None:
        """Replaces the cached snapshot with `blogs`."""

    @abstractmethod
    async def load_blogs(self) -> List[Blog]:
        """The cached snapshot, or an empty list if nothing was saved."""


class BlogLocalDataSourceImpl(BlogLocalDataSource):
    def __init__(self, box: CacheBox):
        self._box = box

    async def upload_local_blogs(self, blogs: List[Blog]) -> None:
        try:
            await self._box.put(SNAPSHOT_KEY, [blog.model_dump(mode="json") for blog in blogs])
        except (OSError, TypeError, ValueError, RuntimeError) as e:
            logger.error("Failed to write blog snapshot to '%s': %s", self._box.name, e)
            raise CacheError(
                message="Could not save blogs for offline use",
                context={"box": self._box.name, "error": str(e)},
            )
        logger.debug("Cached %d blogs", len(blogs))

    async def load_blogs(self) -> List[Blog]:
        try:
            raw = await self._box.get(SNAPSHOT_KEY, [])
            return [Blog.model_validate(item) for item in raw]
        except (OSError, TypeError, ValueError, RuntimeError) as e:
            logger.error("Failed to read blog snapshot from '%s': %s", self._box.name, e)
            raise CacheError(
                message="Could not load saved blogs",
                context={"box": self._box.name, "error": str(e)},
            )
