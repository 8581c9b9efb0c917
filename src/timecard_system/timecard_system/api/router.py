from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ..core.enums import ReadAction, WriteAction
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from ..employees.service import AuthService, EmployeeService
from ..sessions.model import SessionIdentity
from ..sessions.service import SessionManager
from ..timecards.model import TimeCardFields
from ..timecards.service import TimeCardService

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Error processing request"


@dataclass(frozen=True)
class Envelope:
    body: dict
    status: int = 200


class RequestRouter:
    """Dispatches read/write requests by action and turns every outcome into an envelope.

    This is the only place exceptions are converted; nothing raised below it
    reaches the web layer.
    """

    def __init__(
        self,
        *,
        employees: EmployeeService,
        auth: AuthService,
        sessions: SessionManager,
        timecards: TimeCardService,
    ):
        self._employees = employees
        self._auth = auth
        self._sessions = sessions
        self._timecards = timecards

        self._read_handlers: dict[ReadAction, Callable[[Mapping[str, Any], Optional[str]], dict]] = {
            ReadAction.GET_EMPLOYEE_NAMES: self._get_employee_names,
            ReadAction.GET_ALL: self._get_all,
        }
        self._write_handlers: dict[WriteAction, Callable[[Mapping[str, Any], Optional[str]], dict]] = {
            WriteAction.LOGIN: self._login,
            WriteAction.SUBMIT: self._submit,
            WriteAction.APPROVE: self._approve,
            WriteAction.UPDATE: self._update,
        }

    def handle_read(self, data: Mapping[str, Any], *, bearer: Optional[str] = None) -> Envelope:
        action = ReadAction.parse(data.get("action"))
        return self._run(self._read_handlers[action], data, self._token(data, bearer), action.value)

    def handle_write(self, data: Mapping[str, Any], *, bearer: Optional[str] = None) -> Envelope:
        action = WriteAction.parse(data.get("action"))
        return self._run(self._write_handlers[action], data, self._token(data, bearer), action.value)

    @staticmethod
    def _token(data: Mapping[str, Any], bearer: Optional[str]) -> Optional[str]:
        token = data.get("token")
        if isinstance(token, str) and token.strip():
            return token.strip()
        return bearer

    def _run(self, handler, data: Mapping[str, Any], token: Optional[str], action: str) -> Envelope:
        try:
            return Envelope({"success": True, **handler(data, token)})
        except AuthorizationError:
            return Envelope({"success": False, "error": "Unauthorized"}, 401)
        except AuthenticationError as e:
            return Envelope({"success": False, "error": str(e)}, 401)
        except ValidationError as e:
            return Envelope({"success": False, "error": str(e)}, 400)
        except NotFoundError as e:
            return Envelope({"success": False, "error": str(e)}, 404)
        except UpstreamError as e:
            logger.error("Storage failure during %s: %s", action, e)
            return Envelope({"success": False, "error": f"{GENERIC_ERROR}: storage unavailable"}, 503)
        except Exception:
            logger.exception("Unhandled error during %s", action)
            return Envelope({"success": False, "error": GENERIC_ERROR}, 500)

    def _require_session(self, token: Optional[str]) -> SessionIdentity:
        identity = self._sessions.resolve(token)
        if identity is None:
            raise AuthorizationError("Unauthorized")
        return identity

    # Read actions
    def _get_employee_names(self, data: Mapping[str, Any], token: Optional[str]) -> dict:
        return {"employees": self._employees.list_names()}

    def _get_all(self, data: Mapping[str, Any], token: Optional[str]) -> dict:
        self._require_session(token)
        return {"data": [card.to_dict() for card in self._timecards.list_all()]}

    # Write actions
    def _login(self, data: Mapping[str, Any], token: Optional[str]) -> dict:
        result = self._auth.login(
            str(data.get("username") or ""),
            str(data.get("passwordHash") or data.get("password_hash") or ""),
        )
        return {"token": result.token, "name": result.name, "role": result.role}

    def _submit(self, data: Mapping[str, Any], token: Optional[str]) -> dict:
        self._require_session(token)
        submission_id = self._timecards.submit(TimeCardFields.from_mapping(data))
        return {"message": "Time card submitted successfully", "submission_id": submission_id}

    def _approve(self, data: Mapping[str, Any], token: Optional[str]) -> dict:
        identity = self._require_session(token)
        submission_id = str(data.get("submission_id") or "")
        self._timecards.approve(submission_id, TimeCardFields.from_mapping(data))
        logger.info("Approval of %s by %r", submission_id, identity.username)
        return {"message": "Time card approved successfully"}

    def _update(self, data: Mapping[str, Any], token: Optional[str]) -> dict:
        identity = self._require_session(token)
        submission_id = str(data.get("submission_id") or "")
        self._timecards.update(submission_id, TimeCardFields.from_mapping(data))
        logger.info("Update of %s by %r", submission_id, identity.username)
        return {"message": "Time card updated successfully"}
