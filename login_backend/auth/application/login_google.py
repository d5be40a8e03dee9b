# login_backend/auth/application/login_google.py
from __future__ import annotations
from urllib.parse import urlencode

from flask import (
    Blueprint, Flask, current_app, jsonify, make_response, redirect, request, session,
)
from flask_login import LoginManager

from login_backend.auth.application.auth_flow import AuthExchangeFlow
from login_backend.auth.domain.errors import AuthFlowError, SessionDestroyFailed
from login_backend.auth.infrastructure.session import current_session
from login_backend.auth.infrastructure.user import LoginUser
from login_backend.config import Settings


# ─────── Blueprint "auth" ───────
auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def get_flow() -> AuthExchangeFlow:
    return current_app.extensions["auth_flow"]


def get_settings() -> Settings:
    return current_app.extensions["login_settings"]


def _failure_redirect(code: str):
    settings = get_settings()
    return redirect(settings.frontend(settings.failure_path) + "?" + urlencode({"error": code}))


def _clear_session_cookie(resp) -> None:
    cfg = current_app.config
    resp.delete_cookie(
        cfg["SESSION_COOKIE_NAME"],
        path     = cfg.get("SESSION_COOKIE_PATH") or "/",
        domain   = cfg.get("SESSION_COOKIE_DOMAIN") or None,
        secure   = cfg.get("SESSION_COOKIE_SECURE", False),
        httponly = True,
        samesite = cfg.get("SESSION_COOKIE_SAMESITE"),
    )


# 1️⃣ Inicia OAuth
@auth_bp.route("/google")
def login_google():
    url = get_flow().start()
    current_app.logger.debug("redirect_uri=%s", get_settings().redirect_uri)
    return redirect(url)


# 2️⃣ Callback de Google
@auth_bp.route("/google/callback")
def google_callback():
    if "error" in request.args:
        current_app.logger.warning("Google devolvió error: %s", request.args.get("error"))
    try:
        get_flow().callback(request.args.get("code"), current_session())
    except AuthFlowError as err:
        current_app.logger.warning("OAuth callback falló (%s): %s", err.code, err.detail)
        return _failure_redirect(err.code)
    except Exception as err:                             # noqa: BLE001
        current_app.logger.exception("OAuth error inesperado: %s", err)
        return _failure_redirect(AuthFlowError.code)

    settings = get_settings()
    return redirect(settings.frontend(settings.success_path))


# 3️⃣ Logout: la cookie se borra aunque falle la destrucción de la sesión
@auth_bp.route("/logout")
def logout():
    settings = get_settings()
    try:
        get_flow().logout(current_session())
        resp = redirect(settings.frontend(settings.logout_path))
    except SessionDestroyFailed as err:
        current_app.logger.error("Logout falló: %s", err.detail)
        session.clear()
        resp = make_response(jsonify(err.to_dict()), err.status)
    _clear_session_cookie(resp)
    return resp


# ─────── Inicialización de auth (application factory) ───────
def init_auth(app: Flask, flow: AuthExchangeFlow) -> None:
    app.extensions["auth_flow"] = flow

    lm = LoginManager(app)

    @lm.user_loader
    def load_user(uid: str):
        record = flow.users.get(uid)
        return LoginUser(record) if record else None
