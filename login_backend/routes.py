from flask import Flask
from login_backend.auth.application.auth_flow import AuthExchangeFlow
from login_backend.auth.application.login_google import auth_bp, init_auth
from login_backend.auth.application.profile_routes import api_bp


def set_routes(app: Flask, flow: AuthExchangeFlow) -> None:

    @app.route("/health")
    def health_check():
        return "OK"

    # Auth routes
    init_auth(app, flow)
    app.register_blueprint(auth_bp)
    # API (perfil + exchange-code)
    app.register_blueprint(api_bp)
