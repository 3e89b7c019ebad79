import os

from config import db_config_from_env

SECRET_KEY = "test-secret"

DATABASE_URL = os.getenv("DATABASE_URL")
DB_CONFIG = db_config_from_env(default_database="accounting_test")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

REPORT_DEFAULT_MONTHS = 6
