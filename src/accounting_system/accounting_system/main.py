from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import error
from .container import Container, build_container
from .core.constants import DEFAULT_REPORT_MONTHS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .users.controller import register as register_users
from .vendors.controller import register as register_vendors
from .vouchers.controller import register as register_vouchers

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_admin_user(
            db_config,
            username=getattr(settings, "ADMIN_USERNAME", "admin"),
            password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
        )
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass `container` to run against pre-built repositories (tests);
    otherwise the MySQL container is built from the settings module.
    """

    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG", None)
        if db_config:
            logger.info(
                "settings=%s db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )
            _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            report_months=int(getattr(settings, "REPORT_DEFAULT_MONTHS", DEFAULT_REPORT_MONTHS)),
        )

    register_users(app, container)
    register_vendors(app, container)
    register_vouchers(app, container)
    register_employees(app, container)
    register_payroll(app, container)
    register_reports(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return error("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return error("Method not allowed", 405)

    return app
