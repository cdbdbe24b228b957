import os

from .config import ACTIVE_STATUS_NAME, ADMIN_API_TOKEN, LOG_LEVEL, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

STORAGE_BACKEND = "mysql"

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
