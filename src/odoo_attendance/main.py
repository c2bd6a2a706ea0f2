from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.responses import register_error_handlers
from .config import get_settings_module
from .container import build_container
from .rpc.transport import Transport
from .session.store import SessionStore
from .users.controller import register as register_users


def load_settings(settings_module: Optional[str] = None) -> dict:
    module = importlib.import_module(settings_module or get_settings_module())
    return {name: getattr(module, name) for name in dir(module) if name.isupper()}


def create_app(
    settings_module: Optional[str] = None,
    *,
    transport: Optional[Transport] = None,
    store: Optional[SessionStore] = None,
) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(settings_module)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["ODOO_URL"] = settings.get("ODOO_URL", "")
    app.config["ODOO_DB"] = settings.get("ODOO_DB", "")

    container = build_container(settings=settings, transport=transport, store=store)
    app.extensions["odoo_attendance"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)

    # Pick up a session left by a previous run
    container.auth_service.restore_session()
    if app.config["DEBUG"]:
        logging.getLogger(__name__).debug(
            "settings=%s auth_state=%s", settings_module or get_settings_module(), container.auth_service.state.value
        )

    return app
