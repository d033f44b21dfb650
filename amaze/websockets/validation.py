"""Lightweight websocket payload validation utilities.

Minimal schema-like checking with consistent error responses. Returns
``(ok, value_or_error)`` tuples; the caller decides whether to emit an error
event.

Schema mini-language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'int', 'dict'
Extras: schema (dict) validates a nested object; error fields are dotted,
e.g. 'position.x'.

If invalid: (False, {'field': 'x', 'error': 'expected int', 'code': 'type'})
If valid: (True, normalized_data)
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    "int": int,
    "dict": dict,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {"field": field, "error": message, "code": code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail("__root__", "payload must be an object", "type")
    out = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail("__schema__", f"unsupported type {type_name}", "schema")
        if name not in payload:
            if required:
                return _fail(name, "missing required field", "required")
            continue
        value = payload[name]
        # bool is an int subclass; never accept it as a coordinate
        if not isinstance(value, PRIMITIVES[type_name]) or isinstance(value, bool):
            return _fail(name, f"expected {type_name}", "type")
        if type_name == "dict" and "schema" in extras:
            ok, nested = validate(value, extras["schema"])
            if not ok:
                nested["field"] = f"{name}.{nested['field']}"
                return False, nested
            value = nested
        out[name] = value
    return True, out


POSITION = {
    "x": ("int", True),
    "y": ("int", True),
}
MOVE = {
    "position": ("dict", True, {"schema": POSITION}),
}
