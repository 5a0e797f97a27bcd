"""
BlogApp Client Core — Blog Bloc
================================

What:  Turns blog events into blog states.
How:   Each handler emits `BlogLoading` once, awaits exactly one use case,
       and folds the result into `BlogError` or a success state.

State machine (per event):
    BlogInitial ──▶ BlogLoading ──┬──▶ BlogError(message)
                                  ├──▶ BlogUploadSuccess(blog)     (BlogUpload)
                                  └──▶ BlogsDisplaySuccess(blogs)  (BlogFetchAllBlogs)

There is no automatic retry. The presentation layer re-adds the event.
"""

from dataclasses import dataclass, field
from typing import List, Union

from blogapp.core.bloc import Bloc
from blogapp.core.usecase import NoParams
from blogapp.datasources.blog_remote import ImageInput
from blogapp.schemas.blog import Blog
from blogapp.usecases.blog import GetAllBlogs, UploadBlog, UploadBlogParams


# ── Events ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BlogUpload:
    poster_id: str
    title: str
    content: str
    image: ImageInput
    topics: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BlogFetchAllBlogs:
    pass


BlogEvent = Union[BlogUpload, BlogFetchAllBlogs]


# ── States ────────────────────────────────────────────────────────────────

class BlogState:
    """Base of every blog state."""


@dataclass(frozen=True)
class BlogInitial(BlogState):
    pass


@dataclass(frozen=True)
class BlogLoading(BlogState):
    pass


@dataclass(frozen=True)
class BlogError(BlogState):
    message: str


class BlogSuccess(BlogState):
    """Base of the two success variants."""


@dataclass(frozen=True)
class BlogUploadSuccess(BlogSuccess):
    blog: Blog


@dataclass(frozen=True)
class BlogsDisplaySuccess(BlogSuccess):
    blogs: List[Blog]


# ── Bloc ──────────────────────────────────────────────────────────────────

class BlogBloc(Bloc[BlogEvent, BlogState]):
    event_types = (BlogUpload, BlogFetchAllBlogs)

    def __init__(self, upload_blog: UploadBlog, get_all_blogs: GetAllBlogs):
        super().__init__(BlogInitial())
        self._upload_blog = upload_blog
        self._get_all_blogs = get_all_blogs

        self.on(BlogUpload, self._on_blog_upload)
        self.on(BlogFetchAllBlogs, self._on_fetch_all_blogs)
        self.verify_handlers()

    async def _on_blog_upload(self, event: BlogUpload) -> None:
        self.emit(BlogLoading())
        result = await self._upload_blog(
            UploadBlogParams(
                poster_id=event.poster_id,
                title=event.title,
                content=event.content,
                image=event.image,
                topics=list(event.topics),
            )
        )
        result.fold(
            lambda failure: self.emit(BlogError(failure.message)),
            lambda blog: self.emit(BlogUploadSuccess(blog)),
        )

    async def _on_fetch_all_blogs(self, event: BlogFetchAllBlogs) -> None:
        self.emit(BlogLoading())
        result = await self._get_all_blogs(NoParams())
        result.fold(
            lambda failure: self.emit(BlogError(failure.message)),
            lambda blogs: self.emit(BlogsDisplaySuccess(blogs)),
        )
