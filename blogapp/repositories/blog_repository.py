"""
BlogApp Client Core — Blog Repository
======================================

What:  Orchestrates the blog data sources and normalises their errors.
How:   Chooses remote or local by connectivity, runs the backend calls in a
       fixed order and turns every `ServerError` / `CacheError` into a
       `Failure`. Nothing raised below this class escapes it.
Who:   Called by the UploadBlog and GetAllBlogs use cases.

Upload flow (sequential, not transactional):
    ┌─────────────┐    ┌────────────────┐    ┌──────────────┐
    │ Build Blog  │───▶│ Upload image   │───▶│ Insert row   │
    │ (id, time)  │    │ (needs the id) │    │ (with URL)   │
    └─────────────┘    └────────────────┘    └──────────────┘

    If the insert fails after the image upload succeeded, the image object
    stays in the bucket. With `cleanup_orphaned_images` enabled the
    repository makes one best-effort attempt to remove it.

Fetch flow:
    offline → local snapshot (possibly empty), always a success
    online  → remote list → overwrite snapshot → return list
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from blogapp.core.connection_checker import ConnectionChecker
from blogapp.core.result import Either, Failure, Left, Right
from blogapp.datasources.blog_local import BlogLocalDataSource
from blogapp.datasources.blog_remote import BlogRemoteDataSource, ImageInput
from blogapp.exceptions import CacheError, ServerError
from blogapp.schemas.blog import Blog

logger = logging.getLogger(__name__)

UPLOAD_FALLBACK_MESSAGE = "An unexpected error occurred while uploading the blog"
FETCH_FALLBACK_MESSAGE = "An unexpected error occurred while fetching blogs"
CACHE_FALLBACK_MESSAGE = "Could not load saved blogs"


class BlogRepository(ABC):
    @abstractmethod
    async def upload_blog(
        self,
        image: ImageInput,
        title: str,
        content: str,
        poster_id: str,
        topics: List[str],
    ) -> Either[Failure, Blog]:
        ...

    @abstractmethod
    async def get_all_blogs(self) -> Either[Failure, List[Blog]]:
        ...


class BlogRepositoryImpl(BlogRepository):
    """
    Args:
        remote_data_source:       Supabase adapter
        local_data_source:        Offline snapshot
        connection_checker:       Online/offline oracle
        cleanup_orphaned_images:  Remove the image again when the insert fails
    """

    def __init__(
        self,
        remote_data_source: BlogRemoteDataSource,
        local_data_source: BlogLocalDataSource,
        connection_checker: ConnectionChecker,
        cleanup_orphaned_images: bool = False,
    ):
        self._remote = remote_data_source
        self._local = local_data_source
        self._connection_checker = connection_checker
        self._cleanup_orphaned_images = cleanup_orphaned_images

    async def upload_blog(
        self,
        image: ImageInput,
        title: str,
        content: str,
        poster_id: str,
        topics: List[str],
    ) -> Either[Failure, Blog]:
        blog = Blog.create(poster_id=poster_id, title=title, content=content, topics=topics)
        image_uploaded = False

        try:
            image_url = await self._remote.upload_blog_image(image=image, blog=blog)
            image_uploaded = True
            blog = blog.model_copy(update={"image_url": image_url})

            uploaded = await self._remote.upload_blog(blog)
            return Right(uploaded)

        except ServerError as e:
            if image_uploaded:
                await self._handle_orphaned_image(blog)
            return Left(Failure.from_message(e.message, UPLOAD_FALLBACK_MESSAGE))

    async def _handle_orphaned_image(self, blog: Blog) -> None:
        if not self._cleanup_orphaned_images:
            logger.warning(
                "Blog %s was not stored; its image remains in the bucket", blog.id
            )
            return
        try:
            await self._remote.delete_blog_image(blog)
        except ServerError as e:
            # The upload Failure is what the caller sees
            logger.warning("Could not remove orphaned image for blog %s: %s", blog.id, e.message)

    async def get_all_blogs(self) -> Either[Failure, List[Blog]]:
        if not await self._connection_checker.is_connected():
            logger.info("Offline, serving blogs from local cache")
            try:
                return Right(await self._local.load_blogs())
            except CacheError as e:
                return Left(Failure.from_message(e.message, CACHE_FALLBACK_MESSAGE))

        try:
            blogs = await self._remote.get_all_blogs()
        except ServerError as e:
            return Left(Failure.from_message(e.message, FETCH_FALLBACK_MESSAGE))

        try:
            await self._local.upload_local_blogs(blogs)
        except CacheError as e:
            logger.warning("Fetched blogs were not cached: %s", e.message)

        return Right(blogs)
