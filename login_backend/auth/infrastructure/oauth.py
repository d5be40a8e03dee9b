from __future__ import annotations
from typing import Any, Callable, Optional

import requests
from authlib.integrations.base_client import OAuthError
from authlib.integrations.requests_client import OAuth2Session

from login_backend.auth.domain.errors import ProfileFetchFailed, TokenExchangeFailed
from login_backend.auth.domain.user import UserRecord
from login_backend.config import (
    GOOGLE_AUTHORIZE_URL, GOOGLE_SCOPES, GOOGLE_TOKEN_URL, GOOGLE_USERINFO_URL, Settings,
)
from login_backend.infrastructure.common.logging_utils import get_logger


# ─────── Cliente OAuth de Google (Authlib + requests) ───────
class GoogleOAuthClient:
    """
    Las dos llamadas servidor-a-servidor del flujo: canje del código y userinfo.
    Ambas con timeout acotado; cualquier fallo se traduce al error del paso.
    """

    def __init__(
        self,
        settings: Settings,
        session_factory: Callable[..., Any] = OAuth2Session,
    ) -> None:
        self.settings = settings
        self._session_factory = session_factory

    def _session(self, **kwargs) -> Any:
        return self._session_factory(
            client_id                  = self.settings.google_client_id,
            client_secret              = self.settings.google_client_secret,
            token_endpoint_auth_method = "client_secret_post",
            **kwargs,
        )

    def authorization_url(self) -> str:
        extra = {"prompt": self.settings.prompt} if self.settings.prompt else {}
        sess = self._session(scope=GOOGLE_SCOPES, redirect_uri=self.settings.redirect_uri)
        try:
            # TODO: guardar y validar `state` en el callback (hoy se ignora)
            url, _state = sess.create_authorization_url(GOOGLE_AUTHORIZE_URL, **extra)
        finally:
            sess.close()
        return url

    def exchange_code(self, code: str, redirect_uri: Optional[str] = None) -> str:
        """Canjea el código por un access token (POST form-encoded)."""
        sess = self._session(redirect_uri=redirect_uri or self.settings.redirect_uri)
        try:
            token = sess.fetch_token(
                GOOGLE_TOKEN_URL,
                code       = code,
                grant_type = "authorization_code",
                timeout    = self.settings.http_timeout,
            )
        except OAuthError as err:
            raise TokenExchangeFailed(f"provider error: {err.error}") from err
        except (requests.RequestException, ValueError) as err:
            raise TokenExchangeFailed(f"{type(err).__name__}: {err}") from err
        finally:
            sess.close()

        access_token = (token or {}).get("access_token")
        if not access_token:
            raise TokenExchangeFailed("respuesta sin access_token")
        return access_token

    def fetch_profile(self, access_token: str) -> UserRecord:
        """GET a userinfo con el bearer token; exige un identificador estable."""
        sess = self._session(token={"access_token": access_token, "token_type": "Bearer"})
        try:
            resp = sess.get(GOOGLE_USERINFO_URL, timeout=self.settings.http_timeout)
            resp.raise_for_status()
            info = resp.json()
        except (requests.RequestException, ValueError) as err:
            raise ProfileFetchFailed(f"{type(err).__name__}: {err}") from err
        finally:
            sess.close()

        if not isinstance(info, dict):
            raise ProfileFetchFailed("userinfo no es un objeto JSON")
        external_id = str(info.get("sub") or info.get("id") or "").strip()
        if not external_id:
            raise ProfileFetchFailed("userinfo sin identificador estable")

        email = info.get("email") or ""
        get_logger().debug("userinfo recibido para %s", external_id)
        return UserRecord(
            external_id  = external_id,
            display_name = info.get("name") or email.split("@", 1)[0],
            email        = email,
            avatar_url   = info.get("picture") or "",
        )
