from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .checkin.controller import register as register_checkin
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .dispatch.controller import register as register_dispatch
from .participants.controller import register as register_participants

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 5 * 1024 * 1024))

    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            smtp_config=getattr(settings, "SMTP_CONFIG"),
            delivery_timeout=float(getattr(settings, "DELIVERY_TIMEOUT_SECONDS", 15)),
            image_size=int(getattr(settings, "QR_IMAGE_SIZE", 256)),
            first_failure_only=bool(getattr(settings, "CSV_FIRST_ERROR_ONLY", False)),
        )

    @app.route("/health", endpoint="health")
    def health():
        if container.conn is not None and not container.conn.ping():
            return jsonify({"status": "degraded", "database": "unreachable"}), 503
        return jsonify({"status": "ok"}), 200

    register_participants(app, container)
    register_dispatch(app, container)
    register_checkin(app, container)

    return app
