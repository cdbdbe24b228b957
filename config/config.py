"""Settings shared by every environment module (values from the environment)."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "attendance_auth"),
    }


# Employees whose auth_users.status_name equals this value may log in.
ACTIVE_STATUS_NAME = os.getenv("ACTIVE_STATUS_NAME", "Active")

# Optional shared secret for admin endpoints (header X-Admin-Token).
ADMIN_API_TOKEN = os.getenv("ADMIN_API_TOKEN") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
