from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_auth.attendance_auth.container import build_container
from src.attendance_auth.attendance_auth.core.enums import CatalogKind


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    container.catalog_service.ensure_defaults()

    for kind in CatalogKind:
        names = ", ".join(e.name for e in container.catalog_service.list_all(kind))
        print(f"OK: {kind.value}: {names}")


if __name__ == "__main__":
    main()
