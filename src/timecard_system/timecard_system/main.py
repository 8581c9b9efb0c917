from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .api.controller import register as register_api
from .container import build_container
from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from .sheets.repository import SheetStore

logger = logging.getLogger(__name__)

CONTAINER_KEY = "timecard_container"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, store: Optional[SheetStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql"))
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("settings=%s backend=%s", settings_module, backend)

    if store is None and backend == "mysql":
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_employees(db_config)
            logger.info("demo employees ready")

    container = build_container(
        secret_key=app.secret_key,
        store=store,
        backend=backend,
        db_config=db_config,
        session_ttl_hours=float(getattr(settings, "SESSION_TTL_HOURS", 8)),
        archive_approved=bool(getattr(settings, "ARCHIVE_APPROVED_CARDS", True)),
    )
    app.extensions[CONTAINER_KEY] = container

    origins = list(getattr(settings, "ALLOWED_ORIGINS", []))
    CORS(
        app,
        resources={r"/api": {"origins": origins}, r"/exec": {"origins": origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "OPTIONS"],
    )

    register_api(app, container)

    @app.cli.command("rehash-passwords")
    def rehash_passwords_command():
        """Hash every plaintext password left in the Employees sheet."""
        count = container.credential_maintenance.rehash_all_plaintext()
        click.echo(f"Rehashed {count} password(s)")

    return app
