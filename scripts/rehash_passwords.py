"""Hash plaintext passwords still present in the Employees sheet.

Migration off the legacy mode where the Login column held plaintext. Values
that already look like SHA-256 digests are left alone.
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

from src.timecard_system.timecard_system.container import build_container


@click.command()
def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        secret_key=settings.SECRET_KEY,
        backend=settings.STORAGE_BACKEND,
        db_config=dict(settings.DB_CONFIG),
    )
    count = container.credential_maintenance.rehash_all_plaintext()
    click.echo(f"Rehashed {count} password(s)")


if __name__ == "__main__":
    main()
