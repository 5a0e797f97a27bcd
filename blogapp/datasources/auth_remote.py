"""
BlogApp Client Core — Auth Remote Data Source
==============================================

What:  Email/password sign-up and sign-in, the current session, and the
       signed-in user's profile row.
How:   One Supabase auth or table call per method, with any client error
       flattened into `ServerError`.
Who:   Used by AuthRepositoryImpl only.

The `profiles` table is filled by a database trigger on sign-up from the
`name` passed in the user metadata; this client only reads it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from blogapp.exceptions import ServerError
from blogapp.schemas.user import User

logger = logging.getLogger(__name__)


class AuthRemoteDataSource(ABC):
    @abstractmethod
    async def current_user_session(self) -> Optional[Any]:
        """The locally persisted auth session, or None when signed out."""

    @abstractmethod
    async def sign_up_with_email_password(self, name: str, email: str, password: str) -> User:
        ...

    @abstractmethod
    async def sign_in_with_email_password(self, email: str, password: str) -> User:
        ...

    @abstractmethod
    async def get_current_user_data(self) -> Optional[User]:
        """Profile of the session's user, or None without a session or profile."""


class AuthRemoteDataSourceImpl(AuthRemoteDataSource):
    def __init__(self, client: Any, profiles_table: str = "profiles"):
        self._client = client
        self._profiles_table = profiles_table

    async def current_user_session(self) -> Optional[Any]:
        try:
            return await self._client.auth.get_session()
        except Exception as e:
            logger.error("Error reading auth session: %s", e)
            raise ServerError.from_exception(e, "current_user_session")

    async def sign_up_with_email_password(self, name: str, email: str, password: str) -> User:
        try:
            response = await self._client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": name}},
                }
            )
            if response.user is None:
                raise ServerError("User is null!")
            user = User.from_auth_user(response.user)
            logger.info("Signed up user %s", user.id)
            return user
        except Exception as e:
            logger.error("Error during sign up: %s", e)
            raise ServerError.from_exception(e, "sign_up")

    async def sign_in_with_email_password(self, email: str, password: str) -> User:
        try:
            response = await self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
            if response.user is None:
                raise ServerError("Invalid credentials!")
            user = User.from_auth_user(response.user)
            logger.info("Signed in user %s", user.id)
            return user
        except Exception as e:
            logger.error("Error during sign in: %s", e)
            raise ServerError.from_exception(e, "sign_in")

    async def get_current_user_data(self) -> Optional[User]:
        try:
            session = await self.current_user_session()
            if session is None:
                return None

            response = await (
                self._client.table(self._profiles_table)
                .select("*")
                .eq("id", session.user.id)
                .execute()
            )
            if not response.data:
                logger.warning("No profile row for user %s", session.user.id)
                return None
            return User.from_row(response.data[0], email=session.user.email)
        except Exception as e:
            logger.error("Error during current user lookup: %s", e)
            raise ServerError.from_exception(e, "get_current_user_data")
