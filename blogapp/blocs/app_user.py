"""App-wide holder of the signed-in user."""

from dataclasses import dataclass
from typing import Optional

from blogapp.core.bloc import StateContainer
from blogapp.schemas.user import User


class AppUserState:
    pass


@dataclass(frozen=True)
class AppUserInitial(AppUserState):
    pass


@dataclass(frozen=True)
class AppUserLoggedIn(AppUserState):
    user: User


class AppUserCubit(StateContainer[AppUserState]):
    def __init__(self):
        super().__init__(AppUserInitial())

    def update_user(self, user: Optional[User]) -> None:
        if user is None:
            self.emit(AppUserInitial())
        else:
            self.emit(AppUserLoggedIn(user))

    @property
    def current_user(self) -> Optional[User]:
        state = self.state
        return state.user if isinstance(state, AppUserLoggedIn) else None
