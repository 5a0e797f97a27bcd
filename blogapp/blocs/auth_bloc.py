"""
BlogApp Client Core — Auth Bloc
================================

What:  Turns sign-up, sign-in and "is logged in?" events into auth states.
How:   Same shape as BlogBloc: Loading, one use case, fold. Every success
       also updates the app-wide AppUserCubit.
"""

import logging
from dataclasses import dataclass
from typing import Union

from blogapp.blocs.app_user import AppUserCubit
from blogapp.core.bloc import Bloc
from blogapp.core.result import Either, Failure
from blogapp.core.usecase import NoParams
from blogapp.schemas.user import User
from blogapp.usecases.auth import (
    CurrentUser,
    UserSignIn,
    UserSignInParams,
    UserSignUp,
    UserSignUpParams,
)

logger = logging.getLogger(__name__)


# ── Events ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AuthSignUp:
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class AuthSignIn:
    email: str
    password: str


@dataclass(frozen=True)
class AuthIsUserLoggedIn:
    pass


AuthEvent = Union[AuthSignUp, AuthSignIn, AuthIsUserLoggedIn]


# ── States ────────────────────────────────────────────────────────────────

class AuthState:
    pass


@dataclass(frozen=True)
class AuthInitial(AuthState):
    pass


@dataclass(frozen=True)
class AuthLoading(AuthState):
    pass


@dataclass(frozen=True)
class AuthSuccess(AuthState):
    user: User


@dataclass(frozen=True)
class AuthFailure(AuthState):
    message: str


# ── Bloc ──────────────────────────────────────────────────────────────────

class AuthBloc(Bloc[AuthEvent, AuthState]):
    event_types = (AuthSignUp, AuthSignIn, AuthIsUserLoggedIn)

    def __init__(
        self,
        user_sign_up: UserSignUp,
        user_sign_in: UserSignIn,
        current_user: CurrentUser,
        app_user_cubit: AppUserCubit,
    ):
        super().__init__(AuthInitial())
        self._user_sign_up = user_sign_up
        self._user_sign_in = user_sign_in
        self._current_user = current_user
        self._app_user_cubit = app_user_cubit

        self.on(AuthSignUp, self._on_auth_sign_up)
        self.on(AuthSignIn, self._on_auth_sign_in)
        self.on(AuthIsUserLoggedIn, self._on_auth_is_user_logged_in)
        self.verify_handlers()

    async def _on_auth_sign_up(self, event: AuthSignUp) -> None:
        self.emit(AuthLoading())
        result = await self._user_sign_up(
            UserSignUpParams(name=event.name, email=event.email, password=event.password)
        )
        self._emit_result(result)

    async def _on_auth_sign_in(self, event: AuthSignIn) -> None:
        self.emit(AuthLoading())
        result = await self._user_sign_in(
            UserSignInParams(email=event.email, password=event.password)
        )
        self._emit_result(result)

    async def _on_auth_is_user_logged_in(self, event: AuthIsUserLoggedIn) -> None:
        self.emit(AuthLoading())
        result = await self._current_user(NoParams())
        self._emit_result(result)

    def _emit_result(self, result: Either[Failure, User]) -> None:
        result.fold(
            lambda failure: self.emit(AuthFailure(failure.message)),
            self._emit_auth_success,
        )

    def _emit_auth_success(self, user: User) -> None:
        logger.info("Authenticated user %s", user.id)
        self._app_user_cubit.update_user(user)
        self.emit(AuthSuccess(user))
