"""Blog use cases: upload one blog, fetch all blogs."""

from dataclasses import dataclass, field
from typing import List

from blogapp.core.result import Either, Failure
from blogapp.core.usecase import NoParams, UseCase
from blogapp.datasources.blog_remote import ImageInput
from blogapp.repositories.blog_repository import BlogRepository
from blogapp.schemas.blog import Blog


@dataclass(frozen=True)
class UploadBlogParams:
    poster_id: str
    title: str
    content: str
    image: ImageInput
    topics: List[str] = field(default_factory=list)


class UploadBlog(UseCase[Blog, UploadBlogParams]):
    def __init__(self, blog_repository: BlogRepository):
        self._blog_repository = blog_repository

    async def __call__(self, params: UploadBlogParams) -> Either[Failure, Blog]:
        return await self._blog_repository.upload_blog(
            image=params.image,
            title=params.title,
            content=params.content,
            poster_id=params.poster_id,
            topics=list(params.topics),
        )


class GetAllBlogs(UseCase[List[Blog], NoParams]):
    def __init__(self, blog_repository: BlogRepository):
        self._blog_repository = blog_repository

    async def __call__(self, params: NoParams) -> Either[Failure, List[Blog]]:
        return await self._blog_repository.get_all_blogs()
