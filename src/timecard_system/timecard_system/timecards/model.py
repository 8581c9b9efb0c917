from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

from ..common.validators import as_text, normalize_yes_no
from ..core.constants import WORK_LOG_KEYS
from ..core.exceptions import SerializationError, ValidationError
from .codec import decode_work_log, encode_sequence, parse_string_set


@dataclass(frozen=True)
class WorkLogRow:
    """One load/delivery/job line of a time card."""

    load_time: str = ""
    del_time: str = ""
    truck_equip: str = ""
    num_loads: str = ""
    unit_meas: str = ""
    material_type: str = ""
    source_supplier: str = ""
    job_desc: str = ""
    job_num: str = ""
    job_hours: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WorkLogRow":
        return cls(**{k: as_text(data.get(k)) for k in WORK_LOG_KEYS})

    def to_dict(self) -> dict:
        return asdict(self)


TEXT_FIELDS = (
    "employee_name",
    "date",
    "day_of_week",
    "time_in",
    "time_out",
    "equipment_num",
    "beg_miles",
    "end_miles",
    "regional_beg_miles",
    "regional_end_miles",
    "total_miles",
    "fuel_gallons",
    "defect_remarks",
    "injury_details",
    "signature",
    "manager_notes",
    "invoice_num",
)
SET_FIELDS = ("truck_defects", "trailer_defects")


def _parse_work_log(value: Any) -> tuple[WorkLogRow, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, str):
        try:
            return tuple(WorkLogRow.from_mapping(r) for r in decode_work_log(value))
        except SerializationError as e:
            raise ValidationError("work_log_rows is not a valid list") from e
    if isinstance(value, Mapping):
        # Bracketed form fields may arrive as {"0": {...}, "1": {...}}.
        value = [value[k] for k in sorted(value, key=lambda k: int(k) if str(k).isdigit() else 0)]
    if not isinstance(value, (list, tuple)):
        raise ValidationError("work_log_rows must be a list")
    rows: list[WorkLogRow] = []
    for item in value:
        if not isinstance(item, Mapping):
            raise ValidationError("work_log_rows entries must be objects")
        rows.append(WorkLogRow.from_mapping(item))
    return tuple(rows)


@dataclass(frozen=True)
class TimeCardFields:
    """Every mutable business field of a time card, as sent by a client.

    `provided` names the fields the request actually carried; approve/update
    only rewrite those.
    """

    employee_name: str = ""
    date: str = ""
    day_of_week: str = ""
    time_in: str = ""
    time_out: str = ""
    equipment_num: str = ""
    beg_miles: str = ""
    end_miles: str = ""
    regional_beg_miles: str = ""
    regional_end_miles: str = ""
    total_miles: str = ""
    fuel_gallons: str = ""
    truck_defects: tuple[str, ...] = ()
    trailer_defects: tuple[str, ...] = ()
    defect_remarks: str = ""
    injured: str = "no"
    injury_details: str = ""
    signature: str = ""
    work_log_rows: tuple[WorkLogRow, ...] = ()
    manager_notes: str = ""
    invoice_num: str = ""
    provided: frozenset = field(default=frozenset(), compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TimeCardFields":
        values: dict[str, Any] = {}
        provided: set[str] = set()

        for key in TEXT_FIELDS:
            if key not in data:
                continue
            raw = data.get(key)
            if isinstance(raw, (list, tuple, dict)):
                raise ValidationError(f"{key} must be text")
            values[key] = as_text(raw)
            provided.add(key)

        for key in SET_FIELDS:
            if key in data:
                values[key] = parse_string_set(data.get(key), key)
                provided.add(key)

        if "injured" in data:
            values["injured"] = normalize_yes_no(data.get("injured"))
            provided.add("injured")

        if "work_log_rows" in data:
            values["work_log_rows"] = _parse_work_log(data.get("work_log_rows"))
            provided.add("work_log_rows")

        return cls(**values, provided=frozenset(provided))

    def to_cells(self) -> dict[str, Any]:
        """Ledger column key -> cell value, for every business field."""
        cells: dict[str, Any] = {key: getattr(self, key) for key in TEXT_FIELDS}
        cells["injured"] = self.injured
        for key in SET_FIELDS:
            cells[key] = encode_sequence(getattr(self, key))
        cells["work_log_json"] = encode_sequence(r.to_dict() for r in self.work_log_rows)
        return cells

    def provided_cells(self) -> dict[str, Any]:
        cells = self.to_cells()
        out: dict[str, Any] = {}
        for key in self.provided:
            column = "work_log_json" if key == "work_log_rows" else key
            out[column] = cells[column]
        return out


@dataclass(frozen=True)
class TimeCard:
    """One ledger row, as returned to clients."""

    row_number: int
    submission_id: str
    timestamp: str
    employee_name: str
    date: str
    day_of_week: str
    time_in: str
    time_out: str
    equipment_num: str
    beg_miles: str
    end_miles: str
    regional_beg_miles: str
    regional_end_miles: str
    total_miles: str
    fuel_gallons: str
    truck_defects: tuple[str, ...]
    trailer_defects: tuple[str, ...]
    defect_remarks: str
    injured: str
    injury_details: str
    signature: str
    work_log_rows: tuple[dict, ...]
    status: str
    manager_notes: str
    invoice_num: str

    def to_dict(self) -> dict:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["truck_defects"] = list(self.truck_defects)
        out["trailer_defects"] = list(self.trailer_defects)
        out["work_log_rows"] = [dict(r) for r in self.work_log_rows]
        return out
