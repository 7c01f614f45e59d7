import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absensi_db"),
}

DEBUG = True

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# School-local clock (WITA = UTC+8)
UTC_OFFSET_HOURS = int(os.getenv("UTC_OFFSET_HOURS", "8"))

# Also match leaves whose key is a person's name instead of NIY/NISN
LEGACY_NAME_MATCHING = bool(int(os.getenv("LEGACY_NAME_MATCHING", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
