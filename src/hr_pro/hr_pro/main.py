from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.datetime_utils import now_local
from .common.http import error_response
from .core.constants import API_PREFIX, DEFAULT_CURRENT_EMPLOYER, SERVICE_NAME
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import Container, build_container
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .evaluations.controller import register as register_evaluations
from .recruitment.controller import register as register_recruitment
from .trainings.controller import register as register_trainings

logger = logging.getLogger("hr_pro")

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _cors_origins(raw: str):
    if raw.strip() == "*":
        return "*"
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the API app.

    ``container`` lets callers (tests) supply their own repositories; when
    omitted the MySQL-backed container is built from the settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json.sort_keys = False

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(str(getattr(settings, "LOG_LEVEL", "INFO")))

    CORS(app, resources={rf"{API_PREFIX}/*": {"origins": _cors_origins(str(getattr(settings, "CORS_ORIGINS", "*")))}})

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            pool_size=int(getattr(settings, "DB_POOL_SIZE", 5)),
            current_employer=str(getattr(settings, "CURRENT_EMPLOYER_NAME", DEFAULT_CURRENT_EMPLOYER)),
        )

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "timestamp": now_local().isoformat(timespec="seconds"),
                "service": SERVICE_NAME,
            }
        )

    register_employees(app, container)
    register_departments(app, container)
    register_recruitment(app, container)
    register_trainings(app, container)
    register_evaluations(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return error_response("Rota não encontrada", 404, path=request.path)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return error_response("Método não permitido", 405, path=request.path)

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return error_response(e.name, e.code or 500)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return error_response("Erro interno do servidor", 500)

    return app
