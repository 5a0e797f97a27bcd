"""
BlogApp Client Core — Auth Repository
======================================

What:  Sign-up, sign-in and current-user lookup as Either results.
How:   Sign-up and sign-in require connectivity. The current-user lookup
       falls back to the locally persisted session when offline, which
       yields a user with id and email but no display name.
Who:   Called by the UserSignUp, UserSignIn and CurrentUser use cases.
"""

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from blogapp.core.connection_checker import ConnectionChecker
from blogapp.core.result import Either, Failure, Left, Right
from blogapp.datasources.auth_remote import AuthRemoteDataSource
from blogapp.exceptions import ServerError
from blogapp.schemas.user import User

logger = logging.getLogger(__name__)

NO_CONNECTION_MESSAGE = "No internet connection!"
NOT_LOGGED_IN_MESSAGE = "User not logged in!"
AUTH_FALLBACK_MESSAGE = "An unknown error occurred"


class AuthRepository(ABC):
    @abstractmethod
    async def sign_up_with_email_password(
        self, name: str, email: str, password: str
    ) -> Either[Failure, User]:
        ...

    @abstractmethod
    async def sign_in_with_email_password(
        self, email: str, password: str
    ) -> Either[Failure, User]:
        ...

    @abstractmethod
    async def current_user(self) -> Either[Failure, User]:
        ...


class AuthRepositoryImpl(AuthRepository):
    def __init__(
        self,
        remote_data_source: AuthRemoteDataSource,
        connection_checker: ConnectionChecker,
    ):
        self._remote = remote_data_source
        self._connection_checker = connection_checker

    async def current_user(self) -> Either[Failure, User]:
        try:
            if not await self._connection_checker.is_connected():
                session = await self._remote.current_user_session()
                if session is None:
                    return Left(Failure(NOT_LOGGED_IN_MESSAGE))
                logger.info("Offline, using persisted session for user %s", session.user.id)
                return Right(User(id=session.user.id, name="", email=session.user.email or ""))

            user = await self._remote.get_current_user_data()
            if user is None:
                return Left(Failure(NOT_LOGGED_IN_MESSAGE))
            return Right(user)
        except ServerError as e:
            return Left(Failure.from_message(e.message, AUTH_FALLBACK_MESSAGE))

    async def sign_up_with_email_password(
        self, name: str, email: str, password: str
    ) -> Either[Failure, User]:
        return await self._get_user(
            lambda: self._remote.sign_up_with_email_password(
                name=name, email=email, password=password
            )
        )

    async def sign_in_with_email_password(
        self, email: str, password: str
    ) -> Either[Failure, User]:
        return await self._get_user(
            lambda: self._remote.sign_in_with_email_password(email=email, password=password)
        )

    async def _get_user(self, fn: Callable[[], Awaitable[User]]) -> Either[Failure, User]:
        try:
            if not await self._connection_checker.is_connected():
                return Left(Failure(NO_CONNECTION_MESSAGE))
            return Right(await fn())
        except ServerError as e:
            return Left(Failure.from_message(e.message, AUTH_FALLBACK_MESSAGE))
