"""Recompute every auth_users row from the source tables.

Run after renaming a position/status or editing person names: those edits do
not refresh the projection on their own.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_auth.attendance_auth.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        active_status_name=getattr(settings, "ACTIVE_STATUS_NAME", "Active"),
    )
    report = container.auth_sync.rebuild_all()

    print(f"OK: synced={report.synced} pruned={report.pruned}")
    if report.failed:
        raise SystemExit(f"FAILED for employee_id(s): {', '.join(report.failed)}")


if __name__ == "__main__":
    main()
