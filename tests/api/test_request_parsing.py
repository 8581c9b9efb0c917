from __future__ import annotations

import pytest
from werkzeug.datastructures import MultiDict

from src.timecard_system.timecard_system.api.request_parsing import (
    bearer_token,
    merge_request_data,
    unflatten_form,
)
from src.timecard_system.timecard_system.core.exceptions import ValidationError


def test_bracketed_work_log_rows_are_rebuilt_in_index_order():
    form = MultiDict(
        [
            ("employee_name", "Jane Doe"),
            ("work_log_rows[1][load_time]", "09:00"),
            ("work_log_rows[0][load_time]", "07:00"),
            ("work_log_rows[0][job_num]", "J-1"),
            ("work_log_rows[10][load_time]", "15:00"),
        ]
    )
    data = unflatten_form(form)
    assert data["employee_name"] == "Jane Doe"
    assert data["work_log_rows"] == [
        {"load_time": "07:00", "job_num": "J-1"},
        {"load_time": "09:00"},
        {"load_time": "15:00"},
    ]


def test_empty_brackets_build_a_list():
    form = MultiDict([("truck_defects[]", "Brakes"), ("truck_defects[]", "Horn")])
    assert unflatten_form(form) == {"truck_defects": ["Brakes", "Horn"]}


def test_repeated_plain_key_becomes_list():
    form = MultiDict([("trailer_defects", "Tires"), ("trailer_defects", "Lights"), ("signature", "x")])
    assert unflatten_form(form) == {"trailer_defects": ["Tires", "Lights"], "signature": "x"}


def test_json_body_overrides_query():
    data = merge_request_data(MultiDict({"action": "approve", "token": "q"}), raw_json='{"token": "b", "x": 1}')
    assert data == {"action": "approve", "token": "b", "x": 1}


def test_payload_field_carries_json():
    form = MultiDict({"payload": '{"action": "login", "username": "Jane Smith"}'})
    data = merge_request_data(MultiDict(), form)
    assert data == {"action": "login", "username": "Jane Smith"}


def test_payload_in_query_string_is_accepted():
    data = merge_request_data(MultiDict({"payload": '{"action": "getAll"}'}))
    assert data == {"action": "getAll"}


@pytest.mark.parametrize("raw", ["{nope", "[1, 2]"])
def test_invalid_json_body_is_a_validation_error(raw):
    with pytest.raises(ValidationError, match="Invalid request body"):
        merge_request_data(MultiDict(), raw_json=raw)


def test_invalid_payload_is_a_validation_error():
    with pytest.raises(ValidationError):
        merge_request_data(MultiDict(), MultiDict({"payload": "not json"}))


def test_bearer_token_header():
    assert bearer_token({"Authorization": "Bearer abc.def"}) == "abc.def"
    assert bearer_token({"Authorization": "Basic xyz"}) is None
    assert bearer_token({}) is None
