"""Create the MySQL tables behind the sheet store and the empty working sheets.

    python scripts/init_db.py [--seed]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import click

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timecard_system.timecard_system.container import build_store
from src.timecard_system.timecard_system.database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from src.timecard_system.timecard_system.employees.sheet_employee_repository import SheetEmployeeRepository
from src.timecard_system.timecard_system.timecards.sheet_timecard_repository import SheetTimeCardRepository


@click.command()
@click.option("--seed", is_flag=True, help="Also add the demo employees.")
def main(seed: bool) -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    store = build_store(backend="mysql", db_config=db_config)
    SheetEmployeeRepository(store).ensure_sheet()
    SheetTimeCardRepository(store).ensure_sheet()
    click.echo(f"Schema ready in {db_config.get('database')} ({len(list_tables(db_config))} tables)")

    if seed:
        click.echo(f"Added {ensure_demo_employees(db_config)} demo employee(s)")


if __name__ == "__main__":
    main()
