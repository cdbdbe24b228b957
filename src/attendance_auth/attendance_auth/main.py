from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .catalogs.controller import register as register_catalogs
from .common.http import register_error_handlers
from .container import Container, build_container, build_memory_container
from .core.constants import ACTIVE_STATUS_NAME
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .persons.controller import register as register_persons

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _build_container(settings) -> Container:
    backend = StorageBackend(str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower())
    active_status_name = getattr(settings, "ACTIVE_STATUS_NAME", ACTIVE_STATUS_NAME)

    if backend is StorageBackend.MEMORY:
        logger.warning("using in-memory storage; data is lost on restart")
        return build_memory_container(active_status_name=active_status_name)

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "db=%s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    return build_container(db_config=db_config, active_status_name=active_status_name)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s", settings_module)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ADMIN_API_TOKEN"] = getattr(settings, "ADMIN_API_TOKEN", None)

    if container is None:
        container = _build_container(settings)
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            container.catalog_service.ensure_defaults()
            logger.info("catalog defaults ready")

    app.extensions["container"] = container

    register_error_handlers(app)
    register_catalogs(app, container)
    register_persons(app, container)
    register_employees(app, container)
    register_auth(app, container)
    register_attendance(app, container)

    return app
