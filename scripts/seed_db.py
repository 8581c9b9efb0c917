"""Add the demo employees (John Doe / 1234, Jane Smith / 5678) if they are missing."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import click

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timecard_system.timecard_system.database.bootstrap import ensure_demo_employees


@click.command()
def main() -> None:
    settings = importlib.import_module(get_settings_module())
    added = ensure_demo_employees(dict(settings.DB_CONFIG))
    click.echo(f"Added {added} demo employee(s) to {settings.DB_CONFIG.get('database')}")


if __name__ == "__main__":
    main()
