from typing import Dict, Optional
from flask_login.mixins import UserMixin

from login_backend.auth.domain.user import UserRecord


# ─────── Usuario para Flask-Login ───────
class LoginUser(UserMixin):
    def __init__(self, record: UserRecord) -> None:
        self.id     = record.external_id
        self.record = record


# ─────── Store en memoria (se pierde al reiniciar) ───────
class InMemoryUserStore:
    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}

    def get(self, external_id: str) -> Optional[UserRecord]:
        return self._users.get(external_id)

    def upsert(self, record: UserRecord) -> UserRecord:
        # last-write-wins, sin lock: la operación es idempotente por clave
        self._users[record.external_id] = record
        return record

    def clear(self) -> None:
        self._users.clear()

    def __len__(self) -> int:
        return len(self._users)
