from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from hrflow_attendance.config import get_settings_module
from hrflow_attendance.database.bootstrap import apply_schema
from hrflow_attendance.logging_utils import setup_json_logging
from hrflow_attendance.main import SCHEMA_PATH

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_json_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(settings.DB_CONFIG)
    statements = apply_schema(db_config, schema_path=SCHEMA_PATH)
    logger.info(
        "Applied schema.sql",
        extra={
            "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
            "statements": statements,
        },
    )


if __name__ == "__main__":
    main()
