"""
BlogApp Client Core — Composition Root
=======================================

What:  Builds every component once, at process start, by constructor
       injection, and tears the shared resources down again.
How:   `init_dependencies()` creates the process-wide objects (Supabase
       client, httpx client, cache box), then wires each feature bottom-up:
       data sources → repository → use cases → bloc.
Who:   Called by the presentation layer's entry point, usually through the
       `lifespan()` context manager.

Object graph:
    ┌──────────────────────────────────────────────────────────┐
    │ Shared: supabase AsyncClient · httpx AsyncClient · box   │
    └──────────────────────────────────────────────────────────┘
    Auth:  AuthRemoteDataSourceImpl → AuthRepositoryImpl
           → UserSignUp / UserSignIn / CurrentUser → AuthBloc (+ AppUserCubit)
    Blog:  BlogRemoteDataSourceImpl + BlogLocalDataSourceImpl
           → BlogRepositoryImpl → UploadBlog / GetAllBlogs → BlogBloc

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate Supabase credentials (fail fast)
    3. Create shared clients and open the cache box
    4. Wire features
    Shutdown:
    1. Wait for in-flight bloc handlers and close the blocs
    2. Close the httpx client
"""

import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Optional

import httpx
from supabase import acreate_client

from blogapp.blocs.app_user import AppUserCubit
from blogapp.blocs.auth_bloc import AuthBloc
from blogapp.blocs.blog_bloc import BlogBloc
from blogapp.config import Settings, settings as default_settings
from blogapp.core.cache_box import CacheBox
from blogapp.core.connection_checker import ConnectionChecker, InternetConnectionChecker
from blogapp.datasources.auth_remote import AuthRemoteDataSourceImpl
from blogapp.datasources.blog_local import BlogLocalDataSourceImpl
from blogapp.datasources.blog_remote import BlogRemoteDataSourceImpl
from blogapp.exceptions import CacheError
from blogapp.repositories.auth_repository import AuthRepositoryImpl
from blogapp.repositories.blog_repository import BlogRepositoryImpl
from blogapp.usecases.auth import CurrentUser, UserSignIn, UserSignUp
from blogapp.usecases.blog import GetAllBlogs, UploadBlog

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Client libraries log every request at INFO
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


@dataclass
class Container:
    """Everything the presentation layer needs, built once."""

    settings: Settings
    supabase: Any
    http_client: httpx.AsyncClient
    cache_box: CacheBox
    connection_checker: ConnectionChecker
    app_user_cubit: AppUserCubit
    auth_bloc: AuthBloc
    blog_bloc: BlogBloc

    async def aclose(self) -> None:
        await self.blog_bloc.close()
        await self.auth_bloc.close()
        await self.app_user_cubit.close()
        await self.http_client.aclose()
        logger.info("Dependencies closed")


def _init_auth(
    supabase: Any,
    app_settings: Settings,
    connection_checker: ConnectionChecker,
    app_user_cubit: AppUserCubit,
) -> AuthBloc:
    remote = AuthRemoteDataSourceImpl(supabase, profiles_table=app_settings.profiles_table)
    repository = AuthRepositoryImpl(remote, connection_checker)
    return AuthBloc(
        user_sign_up=UserSignUp(repository),
        user_sign_in=UserSignIn(repository),
        current_user=CurrentUser(repository),
        app_user_cubit=app_user_cubit,
    )


def _init_blog(
    supabase: Any,
    app_settings: Settings,
    connection_checker: ConnectionChecker,
    cache_box: CacheBox,
) -> BlogBloc:
    remote = BlogRemoteDataSourceImpl(
        supabase,
        blogs_table=app_settings.blogs_table,
        profiles_table=app_settings.profiles_table,
        images_bucket=app_settings.blog_images_bucket,
    )
    local = BlogLocalDataSourceImpl(cache_box)
    repository = BlogRepositoryImpl(
        remote_data_source=remote,
        local_data_source=local,
        connection_checker=connection_checker,
        cleanup_orphaned_images=app_settings.cleanup_orphaned_images,
    )
    return BlogBloc(upload_blog=UploadBlog(repository), get_all_blogs=GetAllBlogs(repository))


async def init_dependencies(
    app_settings: Optional[Settings] = None,
    supabase_client: Optional[Any] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Container:
    """
    Build the full object graph.

    Args:
        app_settings:     Defaults to the module-level `settings`
        supabase_client:  Pre-built client (tests); created from settings if None
        http_client:      Pre-built httpx client (tests); created if None

    Raises:
        ValueError: Supabase credentials are missing and no client was given
        CacheError: The cache directory cannot be created (a damaged cache
                    file is not an error; the box starts empty)
    """
    app_settings = app_settings or default_settings

    if supabase_client is None:
        app_settings.validate_required_for_production()
        supabase_client = await acreate_client(
            app_settings.supabase_url, app_settings.supabase_anon_key
        )
        logger.info("Supabase client created for %s", app_settings.supabase_url)

    owns_http_client = http_client is None
    http_client = http_client or httpx.AsyncClient()
    try:
        cache_box = await CacheBox.open(app_settings.cache_box_name, app_settings.cache_dir)
    except CacheError as e:
        logger.error("Startup aborted, local cache unavailable: %s", e.message)
        if owns_http_client:
            await http_client.aclose()
        raise

    connection_checker = InternetConnectionChecker(
        http_client,
        app_settings.connectivity_check_urls_list,
        timeout=app_settings.connectivity_timeout,
    )
    app_user_cubit = AppUserCubit()

    return Container(
        settings=app_settings,
        supabase=supabase_client,
        http_client=http_client,
        cache_box=cache_box,
        connection_checker=connection_checker,
        app_user_cubit=app_user_cubit,
        auth_bloc=_init_auth(supabase_client, app_settings, connection_checker, app_user_cubit),
        blog_bloc=_init_blog(supabase_client, app_settings, connection_checker, cache_box),
    )


@asynccontextmanager
async def lifespan(app_settings: Optional[Settings] = None) -> AsyncGenerator[Container, None]:
    """
    Startup and shutdown around the application's run.

    Usage:
        async with lifespan() as container:
            container.blog_bloc.add(BlogFetchAllBlogs())
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level)
    logger.info("BlogApp starting up...")

    container = await init_dependencies(app_settings)
    logger.info("Dependencies ready (cache at %s)", container.cache_box.path)
    try:
        yield container
    finally:
        logger.info("BlogApp shutting down...")
        await container.aclose()
