"""Auth use cases: sign up, sign in, current user."""

from dataclasses import dataclass

from blogapp.core.result import Either, Failure
from blogapp.core.usecase import NoParams, UseCase
from blogapp.repositories.auth_repository import AuthRepository
from blogapp.schemas.user import User


@dataclass(frozen=True)
class UserSignUpParams:
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class UserSignInParams:
    email: str
    password: str


class UserSignUp(UseCase[User, UserSignUpParams]):
    def __init__(self, auth_repository: AuthRepository):
        self._auth_repository = auth_repository

    async def __call__(self, params: UserSignUpParams) -> Either[Failure, User]:
        return await self._auth_repository.sign_up_with_email_password(
            name=params.name,
            email=params.email,
            password=params.password,
        )


class UserSignIn(UseCase[User, UserSignInParams]):
    def __init__(self, auth_repository: AuthRepository):
        self._auth_repository = auth_repository

    async def __call__(self, params: UserSignInParams) -> Either[Failure, User]:
        return await self._auth_repository.sign_in_with_email_password(
            email=params.email,
            password=params.password,
        )


class CurrentUser(UseCase[User, NoParams]):
    def __init__(self, auth_repository: AuthRepository):
        self._auth_repository = auth_repository

    async def __call__(self, params: NoParams) -> Either[Failure, User]:
        return await self._auth_repository.current_user()
