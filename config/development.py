import os

from .config import ACTIVE_STATUS_NAME, ADMIN_API_TOKEN, LOG_LEVEL, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

# 'mysql' or 'memory'
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed default catalog values on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
