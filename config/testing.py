import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absensi_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
UTC_OFFSET_HOURS = 8
LEGACY_NAME_MATCHING = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
