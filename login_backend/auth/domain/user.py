from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


# ─────── Modelo de usuario ───────
@dataclass(frozen=True)
class UserRecord:
    external_id: str
    display_name: str
    email: str
    avatar_url: str = ""

    def to_json(self) -> dict[str, str]:
        return {
            "externalId":  self.external_id,
            "displayName": self.display_name,
            "email":       self.email,
            "avatarUrl":   self.avatar_url,
        }


class UserStore(Protocol):
    """Capacidad mínima de almacenamiento: leer por id y upsert."""

    def get(self, external_id: str) -> Optional[UserRecord]: ...

    def upsert(self, record: UserRecord) -> UserRecord: ...
