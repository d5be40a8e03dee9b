from __future__ import annotations
from typing import Optional

from flask import session
from flask.sessions import SessionMixin
from flask_login import login_user, logout_user

from login_backend.auth.domain.user import UserRecord
from login_backend.auth.infrastructure.user import LoginUser

# clave que usa Flask-Login para guardar el id
USER_ID_KEY = "_user_id"


class SessionContext:
    """Vista explícita de la sesión del request, en lugar del global ambiente."""

    def __init__(self, store: SessionMixin) -> None:
        self._store = store

    @property
    def external_id(self) -> Optional[str]:
        return self._store.get(USER_ID_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.external_id)

    def establish(self, record: UserRecord) -> None:
        self._store.permanent = True
        login_user(LoginUser(record))

    def destroy(self) -> None:
        logout_user()
        self._store.clear()


def current_session() -> SessionContext:
    return SessionContext(session)
