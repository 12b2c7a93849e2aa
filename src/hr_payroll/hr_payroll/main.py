from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_config import configure_logging, get_logger
from .core.constants import DEFAULT_PAGE_SIZE
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .container import Container, build_container
from .companies.controller import register as register_companies
from .payroll.controller import register as register_payroll
from .rate_schedules.controller import register as register_rate_schedules

logger = get_logger("app")

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def register_routes(app: Flask, container: Container) -> None:
    register_companies(app, container)
    register_rate_schedules(app, container)
    register_payroll(app, container)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.sort_keys = False

    configure_logging(
        str(getattr(settings, "LOG_LEVEL", "INFO")),
        json_format=bool(getattr(settings, "LOG_JSON", True)),
    )
    logger.info("Starting with settings=%s db=%s", settings_module, DBConfig.from_settings(db_config).describe())

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("Demo seed ready")

    container = build_container(
        db_config=db_config,
        page_size=int(getattr(settings, "DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
    )
    register_routes(app, container)

    return app
