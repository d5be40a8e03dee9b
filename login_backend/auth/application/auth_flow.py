# login_backend/auth/application/auth_flow.py
from __future__ import annotations
from typing import Optional, Protocol

from login_backend.auth.domain.errors import (
    MissingCode, SessionDestroyFailed, Unauthorized, UserRecordNotFound,
)
from login_backend.auth.domain.user import UserRecord, UserStore
from login_backend.auth.infrastructure.session import SessionContext
from login_backend.infrastructure.common.logging_utils import get_logger


class ProviderClient(Protocol):
    def authorization_url(self) -> str: ...

    def exchange_code(self, code: str, redirect_uri: Optional[str] = None) -> str: ...

    def fetch_profile(self, access_token: str) -> UserRecord: ...


class AuthExchangeFlow:
    """
    Orquesta el login con Google: redirect inicial, canje del código,
    lectura del perfil, upsert del usuario y manejo de la sesión.
    No depende de Flask salvo a través del SessionContext recibido.
    """

    def __init__(self, client: ProviderClient, users: UserStore) -> None:
        self.client = client
        self.users  = users

    # 1️⃣ Start
    def start(self) -> str:
        return self.client.authorization_url()

    # 2️⃣ Callback: las dos llamadas son secuenciales, la segunda usa el token
    def callback(self, code: Optional[str], sess: SessionContext) -> UserRecord:
        if not code:
            raise MissingCode("callback sin code")
        token  = self.client.exchange_code(code)
        record = self.users.upsert(self.client.fetch_profile(token))
        sess.establish(record)
        get_logger().info("Login OK: %s", record.external_id)
        return record

    # Variante sin sesión: el front manda el code y recibe el perfil
    def exchange(self, code: Optional[str], redirect_uri: Optional[str] = None) -> UserRecord:
        if not code:
            raise MissingCode("exchange sin code")
        token = self.client.exchange_code(code, redirect_uri=redirect_uri)
        return self.client.fetch_profile(token)

    # 3️⃣ Logout
    def logout(self, sess: SessionContext) -> None:
        external_id = sess.external_id
        try:
            sess.destroy()
        except Exception as err:                         # noqa: BLE001
            raise SessionDestroyFailed(f"{type(err).__name__}: {err}") from err
        get_logger().info("Logout: %s", external_id or "-")

    # SessionGate + ProfileRead
    def require_identity(self, sess: SessionContext) -> str:
        if not sess.is_authenticated:
            raise Unauthorized("sesión sin usuario")
        return sess.external_id

    def current_profile(self, sess: SessionContext) -> UserRecord:
        external_id = self.require_identity(sess)
        record = self.users.get(external_id)
        if record is None:
            # sesión válida pero el store perdió el dato (p. ej. reinicio)
            raise UserRecordNotFound(f"sin registro para {external_id}")
        return record
