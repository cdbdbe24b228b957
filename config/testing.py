from .config import ACTIVE_STATUS_NAME, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORAGE_BACKEND = "memory"

ADMIN_API_TOKEN = None
LOG_LEVEL = "DEBUG"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = True
