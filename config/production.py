import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absensi_db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
UTC_OFFSET_HOURS = int(os.getenv("UTC_OFFSET_HOURS", "8"))
LEGACY_NAME_MATCHING = bool(int(os.getenv("LEGACY_NAME_MATCHING", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
