from __future__ import annotations


class AuthFlowError(Exception):
    """Error del flujo de login con un código estable y un mensaje apto para el cliente."""

    code = "auth_error"
    message = "Error de autenticación"
    status = 500

    def __init__(self, detail: str = "") -> None:
        # detail solo va al log, nunca al navegador
        self.detail = detail
        super().__init__(detail or self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.code, "message": self.message}


class MissingCode(AuthFlowError):
    code = "missing_code"
    message = "Falta el código de autorización"
    status = 400


class TokenExchangeFailed(AuthFlowError):
    code = "token_exchange_failed"
    message = "No se pudo canjear el código de autorización"
    status = 400


class ProfileFetchFailed(AuthFlowError):
    code = "profile_fetch_failed"
    message = "No se pudo obtener el perfil del usuario"
    status = 500


class Unauthorized(AuthFlowError):
    code = "unauthorized"
    message = "No autorizado"
    status = 401


class UserRecordNotFound(AuthFlowError):
    code = "user_not_found"
    message = "La sesión es válida pero el usuario ya no existe"
    status = 404


class SessionDestroyFailed(AuthFlowError):
    code = "session_destroy_failed"
    message = "No se pudo cerrar la sesión"
    status = 500
