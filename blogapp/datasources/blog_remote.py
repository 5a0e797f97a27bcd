"""
BlogApp Client Core — Blog Remote Data Source
==============================================

What:  Thin adapter from blog operations to Supabase calls.
How:   Each method is one backend call (plus one public URL lookup for
       images) wrapped in a single error translation: whatever the client
       raises becomes a `ServerError` carrying the original message.
Who:   Used by BlogRepositoryImpl only.

Backend objects:
    table  `blogs`         ← one row per post
    table  `profiles`      ← joined for the author's display name
    bucket `blog_images`   ← one object per post, named after the post id

No retry, batching or pagination happens here.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles

from blogapp.exceptions import ServerError
from blogapp.schemas.blog import Blog

logger = logging.getLogger(__name__)

ImageInput = Union[bytes, str, Path]

# Used only when libmagic cannot be loaded
_EXTENSION_CONTENT_TYPES: Dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def guess_content_type(content: bytes, filename: Optional[str] = None) -> str:
    """
    Detects the content type from the file's header bytes.

    How:     python-magic matches the leading bytes against known file
             signatures (e.g., JPEG starts with FF D8 FF).
    Fallback: without libmagic the file extension decides, and raw bytes
             with no file name are sent as application/octet-stream.
    """
    try:
        import magic
        return magic.from_buffer(content, mime=True)
    except ImportError:
        logger.warning(
            "python-magic not available, falling back to extension-based type detection"
        )
        ext = Path(filename).suffix.lower() if filename else ""
        return _EXTENSION_CONTENT_TYPES.get(ext, "application/octet-stream")


class BlogRemoteDataSource(ABC):
    @abstractmethod
    async def upload_blog(self, blog: Blog) -> Blog:
        """Inserts the row and returns it as stored."""

    @abstractmethod
    async def upload_blog_image(self, image: ImageInput, blog: Blog) -> str:
        """Stores the image under the blog's id and returns its public URL."""

    @abstractmethod
    async def get_all_blogs(self) -> List[Blog]:
        """All blogs, each with `poster_name` from the profiles join."""

    @abstractmethod
    async def delete_blog_image(self, blog: Blog) -> None:
        """Removes the image stored for this blog."""


class BlogRemoteDataSourceImpl(BlogRemoteDataSource):
    """
    Supabase-backed implementation.

    Args:
        client:          Shared supabase AsyncClient
        blogs_table:     Row storage for posts
        profiles_table:  Joined for `poster_name`
        images_bucket:   Storage bucket for post images
    """

    def __init__(
        self,
        client: Any,
        blogs_table: str = "blogs",
        profiles_table: str = "profiles",
        images_bucket: str = "blog_images",
    ):
        self._client = client
        self._blogs_table = blogs_table
        self._profiles_table = profiles_table
        self._images_bucket = images_bucket

    async def upload_blog(self, blog: Blog) -> Blog:
        try:
            response = await self._client.table(self._blogs_table).insert(blog.to_row()).execute()
            if not response.data:
                raise ServerError(
                    f"Insert into '{self._blogs_table}' returned no row",
                    context={"blog_id": blog.id},
                )
            stored = Blog.from_row(response.data[0])
            logger.info("Blog %s stored", stored.id)
            return stored
        except Exception as e:
            logger.error("Error during blog creation: %s", e)
            raise ServerError.from_exception(e, "upload_blog")

    async def upload_blog_image(self, image: ImageInput, blog: Blog) -> str:
        try:
            if isinstance(image, bytes):
                content, filename = image, None
            else:
                async with aiofiles.open(image, "rb") as f:
                    content = await f.read()
                filename = Path(image).name

            bucket = self._client.storage.from_(self._images_bucket)
            await bucket.upload(
                path=blog.id,
                file=content,
                file_options={"content-type": guess_content_type(content, filename)},
            )
            url = await bucket.get_public_url(blog.id)
            logger.info("Image for blog %s uploaded (%d bytes)", blog.id, len(content))
            return url
        except Exception as e:
            logger.error("Error during blog image uploading: %s", e)
            raise ServerError.from_exception(e, "upload_blog_image")

    async def get_all_blogs(self) -> List[Blog]:
        try:
            response = await (
                self._client.table(self._blogs_table)
                .select(f"*, {self._profiles_table}(name)")
                .execute()
            )
            blogs = []
            for row in response.data or []:
                profile = row.get(self._profiles_table) or {}
                blogs.append(Blog.from_row(row, poster_name=profile.get("name")))
            logger.info("Fetched %d blogs", len(blogs))
            return blogs
        except Exception as e:
            logger.error("Error during blogs fetching: %s", e)
            raise ServerError.from_exception(e, "get_all_blogs")

    async def delete_blog_image(self, blog: Blog) -> None:
        try:
            await self._client.storage.from_(self._images_bucket).remove([blog.id])
            logger.info("Image for blog %s removed", blog.id)
        except Exception as e:
            logger.error("Error during blog image removal: %s", e)
            raise ServerError.from_exception(e, "delete_blog_image")
