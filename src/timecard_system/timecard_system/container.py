from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .api.router import RequestRouter
from .common.datetime_utils import Clock, utc_now
from .core.constants import DEFAULT_SESSION_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .employees.service import AuthService, CredentialMaintenance, EmployeeService
from .employees.sheet_employee_repository import SheetEmployeeRepository
from .sessions.service import SessionManager
from .sessions.sheet_session_repository import SheetSessionRepository
from .sheets.memory_sheet_store import InMemorySheetStore
from .sheets.mysql_sheet_store import MySQLSheetStore
from .sheets.repository import SheetStore
from .timecards.archive import EmployeeSheetArchive
from .timecards.service import TimeCardService
from .timecards.sheet_timecard_repository import SheetTimeCardRepository


@dataclass(frozen=True)
class Container:
    store: SheetStore

    employees_repo: SheetEmployeeRepository
    sessions_repo: SheetSessionRepository
    ledger: SheetTimeCardRepository

    session_manager: SessionManager
    auth_service: AuthService
    employee_service: EmployeeService
    credential_maintenance: CredentialMaintenance
    timecard_service: TimeCardService
    router: RequestRouter


def build_store(*, backend: str, db_config: Optional[dict] = None) -> SheetStore:
    if backend == "memory":
        return InMemorySheetStore()
    if backend != "mysql":
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
    config = DBConfig.from_mapping(db_config or {})
    return MySQLSheetStore(DatabaseConnection.get_instance(config))


def build_container(
    *,
    secret_key: str,
    store: Optional[SheetStore] = None,
    backend: str = "mysql",
    db_config: Optional[dict] = None,
    session_ttl_hours: float = DEFAULT_SESSION_HOURS,
    archive_approved: bool = True,
    clock: Clock = utc_now,
) -> Container:
    if store is None:
        store = build_store(backend=backend, db_config=db_config)

    employees_repo = SheetEmployeeRepository(store)
    sessions_repo = SheetSessionRepository(store)
    ledger = SheetTimeCardRepository(store, clock=clock)

    session_manager = SessionManager(sessions_repo, secret_key=secret_key, ttl_hours=session_ttl_hours, clock=clock)
    auth_service = AuthService(employees_repo, session_manager)
    employee_service = EmployeeService(employees_repo)
    credential_maintenance = CredentialMaintenance(employees_repo)
    archive = EmployeeSheetArchive(store, clock=clock) if archive_approved else None
    timecard_service = TimeCardService(ledger, archive)

    router = RequestRouter(
        employees=employee_service,
        auth=auth_service,
        sessions=session_manager,
        timecards=timecard_service,
    )

    return Container(
        store=store,
        employees_repo=employees_repo,
        sessions_repo=sessions_repo,
        ledger=ledger,
        session_manager=session_manager,
        auth_service=auth_service,
        employee_service=employee_service,
        credential_maintenance=credential_maintenance,
        timecard_service=timecard_service,
        router=router,
    )
