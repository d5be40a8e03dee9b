# login_backend/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Final, Mapping
from urllib.parse import urlsplit

# ── Raíz del proyecto ───────────────────────────────────────
PROJECT_ROOT: Final = Path(__file__).resolve().parents[1]

# ── .env opcional (solo entornos de desarrollo) ─────────────
ENV_FILE = PROJECT_ROOT / ".env"
if ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(ENV_FILE, override=False)

# ── Endpoints de Google ─────────────────────────────────────
GOOGLE_AUTHORIZE_URL: Final = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL: Final     = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL: Final  = "https://openidconnect.googleapis.com/v1/userinfo"
GOOGLE_SCOPES: Final        = "openid email profile"

SESSION_LIFETIME: Final = timedelta(hours=24)


class ConfigurationMissing(RuntimeError):
    """Falta configuración obligatoria: el proceso no debe arrancar."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(
            "Faltan variables de entorno obligatorias: " + ", ".join(keys)
        )


def _env(env: Mapping[str, str], key: str, default: str | None = None) -> str | None:
    """Lee una variable tratando los valores vacíos como ausentes."""
    val = env.get(key)
    if val is None or not val.strip():
        return default
    return val.strip()


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


@dataclass(frozen=True)
class Settings:
    google_client_id: str
    google_client_secret: str
    session_secret: str
    site_url: str = "http://localhost:5000"
    frontend_url: str = ""
    redirect_uri: str = ""
    exchange_redirect_uri: str = "postmessage"
    prompt: str = "select_account"
    success_path: str = "/dashboard"
    failure_path: str = "/login"
    logout_path: str = "/login"
    http_timeout: float = 10.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # Valores derivados de SITE_URL cuando no vienen explícitos
        site = self.site_url.rstrip("/")
        object.__setattr__(self, "site_url", site)
        object.__setattr__(self, "frontend_url", (self.frontend_url or site).rstrip("/"))
        if not self.redirect_uri:
            object.__setattr__(self, "redirect_uri", f"{site}/auth/google/callback")

    # ── Cookie de sesión ────────────────────────────────────
    @property
    def secure_cookies(self) -> bool:
        return self.site_url.lower().startswith("https://")

    @property
    def cross_site(self) -> bool:
        return _origin(self.frontend_url) != _origin(self.site_url)

    @property
    def cookie_samesite(self) -> str:
        # SameSite=None sin Secure lo rechazan los navegadores
        if self.cross_site and self.secure_cookies:
            return "None"
        return "Lax"

    def frontend(self, path: str) -> str:
        return f"{self.frontend_url}{path}"


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Construye Settings desde el entorno; aborta si falta algo obligatorio."""
    env = os.environ if env is None else env

    client_id      = _env(env, "GOOGLE_CLIENT_ID")
    client_secret  = _env(env, "GOOGLE_CLIENT_SECRET")
    session_secret = _env(env, "SESSION_SECRET") or _env(env, "SECRET_KEY")

    missing = [
        key for key, val in (
            ("GOOGLE_CLIENT_ID", client_id),
            ("GOOGLE_CLIENT_SECRET", client_secret),
            ("SESSION_SECRET", session_secret),
        ) if val is None
    ]
    if missing:
        raise ConfigurationMissing(missing)

    timeout_raw = _env(env, "OAUTH_HTTP_TIMEOUT", "10")
    try:
        timeout = float(timeout_raw)
    except ValueError as exc:
        raise ConfigurationMissing(["OAUTH_HTTP_TIMEOUT"]) from exc

    site_url = _env(env, "SITE_URL", "http://localhost:5000")
    return Settings(
        google_client_id      = client_id,
        google_client_secret  = client_secret,
        session_secret        = session_secret,
        site_url              = site_url,
        frontend_url          = _env(env, "FRONTEND_URL", site_url),
        redirect_uri          = _env(env, "GOOGLE_REDIRECT_URI", ""),
        exchange_redirect_uri = _env(env, "EXCHANGE_REDIRECT_URI", "postmessage"),
        # GOOGLE_PROMPT="" desactiva el selector de cuenta
        prompt                = env.get("GOOGLE_PROMPT", "select_account").strip(),
        success_path          = _env(env, "LOGIN_SUCCESS_PATH", "/dashboard"),
        failure_path          = _env(env, "LOGIN_FAILURE_PATH", "/login"),
        logout_path           = _env(env, "LOGOUT_REDIRECT_PATH", "/login"),
        http_timeout          = timeout,
        log_level             = _env(env, "LOG_LEVEL", "INFO").upper(),
    )


# ── Exportables ─────────────────────────────────────────────
__all__ = [
    "ConfigurationMissing", "Settings", "load_settings",
    "GOOGLE_AUTHORIZE_URL", "GOOGLE_TOKEN_URL", "GOOGLE_USERINFO_URL",
    "GOOGLE_SCOPES", "SESSION_LIFETIME",
]
