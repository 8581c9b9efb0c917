from __future__ import annotations

import json

import pytest

from src.timecard_system.timecard_system.core.exceptions import ValidationError
from src.timecard_system.timecard_system.timecards.model import TimeCardFields, WorkLogRow


def test_absent_fields_default_to_empty_and_injured_no():
    fields = TimeCardFields.from_mapping({})
    assert fields.employee_name == ""
    assert fields.injured == "no"
    assert fields.work_log_rows == ()
    assert fields.provided == frozenset()


def test_numbers_are_kept_as_text():
    fields = TimeCardFields.from_mapping({"beg_miles": 10450, "fuel_gallons": 31.5})
    assert fields.beg_miles == "10450"
    assert fields.fuel_gallons == "31.5"


@pytest.mark.parametrize("raw,expected", [("yes", "yes"), ("YES", "yes"), (True, "yes"), ("on", "yes"), ("no", "no"), ("", "no"), (False, "no")])
def test_injured_is_normalised(raw, expected):
    assert TimeCardFields.from_mapping({"injured": raw}).injured == expected


def test_defects_from_comma_text_are_deduplicated_in_order():
    fields = TimeCardFields.from_mapping({"trailer_defects": "Tires, Lights,Tires, "})
    assert fields.trailer_defects == ("Tires", "Lights")


def test_defects_from_json_text():
    fields = TimeCardFields.from_mapping({"truck_defects": '["Horn", "Horn", "Mirrors"]'})
    assert fields.truck_defects == ("Horn", "Mirrors")


def test_defects_must_be_list_or_text():
    with pytest.raises(ValidationError):
        TimeCardFields.from_mapping({"truck_defects": 5})


def test_work_log_from_json_text_drops_unknown_keys():
    raw = json.dumps([{"load_time": "07:00", "bogus": "x", "num_loads": 3}])
    fields = TimeCardFields.from_mapping({"work_log_rows": raw})
    assert fields.work_log_rows == (WorkLogRow(load_time="07:00", num_loads="3"),)


def test_work_log_from_indexed_mapping_keeps_order():
    fields = TimeCardFields.from_mapping(
        {"work_log_rows": {"1": {"job_num": "B"}, "0": {"job_num": "A"}}}
    )
    assert [r.job_num for r in fields.work_log_rows] == ["A", "B"]


@pytest.mark.parametrize("bad", [42, ["not a row"], "{broken"])
def test_bad_work_log_shape_is_rejected(bad):
    with pytest.raises(ValidationError):
        TimeCardFields.from_mapping({"work_log_rows": bad})


def test_text_field_given_a_list_is_rejected():
    with pytest.raises(ValidationError):
        TimeCardFields.from_mapping({"signature": ["a", "b"]})


def test_provided_tracks_supplied_keys_only():
    fields = TimeCardFields.from_mapping({"manager_notes": "ok", "token": "t", "submission_id": "TC-1"})
    assert fields.provided == frozenset({"manager_notes"})
    assert fields.provided_cells() == {"manager_notes": "ok"}


def test_provided_cells_maps_work_log_to_its_column():
    fields = TimeCardFields.from_mapping({"work_log_rows": [{"job_hours": "2"}]})
    cells = fields.provided_cells()
    assert list(cells) == ["work_log_json"]
    assert json.loads(cells["work_log_json"])[0]["job_hours"] == "2"
