"""Turn an inbound request into one plain dict of fields.

Accepted shapes: a JSON body, urlencoded/multipart form fields (with bracketed
keys such as ``work_log_rows[0][load_time]`` or ``truck_defects[]`` rebuilt
into lists), or a single ``payload`` field holding JSON, which clients use to
avoid a CORS preflight. Query-string parameters are merged underneath.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional

from werkzeug.datastructures import MultiDict

from ..core.exceptions import ValidationError

_BRACKETED = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_PART = re.compile(r"\[([^\[\]]*)\]")


def _listify(node: Any) -> Any:
    if isinstance(node, dict):
        node = {k: _listify(v) for k, v in node.items()}
        if node and all(str(k).isdigit() for k in node):
            return [node[k] for k in sorted(node, key=int)]
    return node


def _insert(target: dict, base: str, parts: list[str], value: Any, counters: dict) -> None:
    node = target.setdefault(base, {})
    path = base
    for i, part in enumerate(parts):
        if not isinstance(node, dict):
            return
        if part == "":
            part = str(counters.get(path, 0))
            counters[path] = int(part) + 1
        path = f"{path}[{part}]"
        if i == len(parts) - 1:
            node[part] = value
        else:
            node = node.setdefault(part, {})


def unflatten_form(form: MultiDict) -> dict:
    out: dict[str, Any] = {}
    nested: dict[str, Any] = {}
    counters: dict[str, int] = {}

    for key in form.keys():
        values = form.getlist(key)
        m = _BRACKETED.match(key)
        if not m:
            out[key] = values if len(values) > 1 else (values[0] if values else "")
            continue
        base, brackets = m.group(1), m.group(2)
        parts = _PART.findall(brackets)
        for value in values:
            _insert(nested, base, parts, value, counters)

    for base, node in nested.items():
        out[base] = _listify(node)
    return out


def _decode_json_object(raw: Any, what: str) -> dict:
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid request body: {what} is not valid JSON") from e
    if not isinstance(value, dict):
        raise ValidationError(f"Invalid request body: {what} must be a JSON object")
    return value


def merge_request_data(
    args: MultiDict,
    form: Optional[MultiDict] = None,
    json_body: Any = None,
    *,
    raw_json: Optional[str] = None,
) -> dict:
    """Fields of a request, later sources winning: query < form/JSON body < payload."""

    data: dict[str, Any] = unflatten_form(args)

    if raw_json is not None and raw_json.strip():
        data.update(_decode_json_object(raw_json, "body"))
    elif json_body is not None:
        data.update(_decode_json_object(json_body, "body"))

    if form:
        data.update(unflatten_form(form))

    payload = data.pop("payload", None)
    if payload not in (None, ""):
        data.update(_decode_json_object(payload, "payload"))
    return data


def parse_flask_request(request) -> dict:
    raw_json = request.get_data(as_text=True) if request.is_json else None
    return merge_request_data(request.args, request.form, raw_json=raw_json)


def bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    auth = headers.get("Authorization") or ""
    scheme, _, token = auth.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None
