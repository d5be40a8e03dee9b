from __future__ import annotations
import logging
import os
import sys

from login_backend import create_app
from login_backend.config import ConfigurationMissing


def main() -> None:
    try:
        app = create_app()
    except ConfigurationMissing as err:
        # Error fatal de arranque: no se levanta el servidor
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("login-backend").critical("%s", err)
        sys.exit(1)

    port = int(os.environ.get("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG") == "1")


if __name__ == "__main__":
    main()
