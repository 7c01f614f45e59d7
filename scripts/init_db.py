from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.school_attendance.school_attendance.database.bootstrap import apply_schema, list_tables
from src.school_attendance.school_attendance.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    db_config = dict(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
