import os

from config import db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DATABASE_URL = os.getenv("DATABASE_URL")
DB_CONFIG = db_config_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data and the admin account on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

REPORT_DEFAULT_MONTHS = int(os.getenv("REPORT_DEFAULT_MONTHS", "6"))
