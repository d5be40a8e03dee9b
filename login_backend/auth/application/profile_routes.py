from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from login_backend.auth.application.login_google import get_flow, get_settings
from login_backend.auth.domain.errors import AuthFlowError, MissingCode
from login_backend.auth.infrastructure.session import current_session

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.errorhandler(AuthFlowError)
def handle_auth_error(err: AuthFlowError):
    # Solo código y mensaje genérico; el detalle queda en el log
    current_app.logger.info("API %s -> %s (%s)", request.path, err.status, err.detail or err.code)
    return jsonify(err.to_dict()), err.status


@api_bp.errorhandler(Exception)
def handle_unexpected(err: Exception):
    if isinstance(err, HTTPException):
        return err
    current_app.logger.exception("API %s falló: %s", request.path, err)
    return jsonify(error="internal_error", message="Error interno"), 500


@api_bp.get("/profile")
@api_bp.get("/me")
def profile():
    record = get_flow().current_profile(current_session())
    return jsonify(record.to_json())


@api_bp.post("/exchange-code")
def exchange_code():
    """
    Variante sin sesión: el front obtiene el code (popup de Google) y lo
    manda acá. Body: {"code": "..."}  →  {"name": ..., "email": ...}
    """
    data = request.get_json(silent=True) or {}
    code = data.get("code") if isinstance(data, dict) else None
    if not isinstance(code, str) or not code.strip():
        raise MissingCode("exchange-code sin code")

    record = get_flow().exchange(code.strip(), redirect_uri=get_settings().exchange_redirect_uri)
    return jsonify(name=record.display_name, email=record.email)
