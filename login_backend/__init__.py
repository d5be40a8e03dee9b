from __future__ import annotations
from typing import Optional

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from login_backend.auth.application.auth_flow import AuthExchangeFlow, ProviderClient
from login_backend.auth.domain.user import UserStore
from login_backend.auth.infrastructure.oauth import GoogleOAuthClient
from login_backend.auth.infrastructure.user import InMemoryUserStore
from login_backend.config import SESSION_LIFETIME, Settings, load_settings
from login_backend.infrastructure.common.logging_utils import configure_logging
from login_backend.routes import set_routes


def create_app(
    settings: Optional[Settings] = None,
    *,
    user_store: Optional[UserStore] = None,
    oauth_client: Optional[ProviderClient] = None,
) -> Flask:
    # Sin settings explícitos se leen del entorno (ConfigurationMissing si falta algo)
    settings = settings or load_settings()

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)
    # ── Logger ───────────────────────────────────────────
    configure_logging(app, settings.log_level)

    # ── Sesión / cookie ──────────────────────────────────
    app.config["SECRET_KEY"] = settings.session_secret
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SECURE"] = settings.secure_cookies
    app.config["SESSION_COOKIE_SAMESITE"] = settings.cookie_samesite
    app.config["PREFERRED_URL_SCHEME"] = "https" if settings.secure_cookies else "http"
    app.permanent_session_lifetime = SESSION_LIFETIME
    app.extensions["login_settings"] = settings

    # ── CORS ─────────────────────────────────────────────
    CORS(app, origins=[settings.frontend_url], supports_credentials=True)

    #--- ROUTER -----------
    flow = AuthExchangeFlow(
        client = oauth_client or GoogleOAuthClient(settings),
        users  = user_store if user_store is not None else InMemoryUserStore(),
    )
    set_routes(app, flow)

    app.logger.info(
        "App lista: site=%s frontend=%s samesite=%s secure=%s",
        settings.site_url, settings.frontend_url,
        settings.cookie_samesite, settings.secure_cookies,
    )
    return app
