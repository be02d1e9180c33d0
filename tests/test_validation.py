"""Tests for validation error flattening."""

from api.validation import flatten_errors


def test_field_errors_use_dotted_paths():
    details = flatten_errors([
        {"loc": ("body", "messages", 0, "role"), "msg": "Input should be 'user', 'assistant' or 'system'", "type": "literal_error"},
        {"loc": ("body", "messages", 0, "role"), "msg": "second", "type": "x"},
        {"loc": ("body", "language"), "msg": "Input should be a valid string", "type": "string_type"},
    ])
    assert details["formErrors"] == []
    assert details["fieldErrors"] == {
        "messages.0.role": ["Input should be 'user', 'assistant' or 'system'", "second"],
        "language": ["Input should be a valid string"],
    }


def test_body_level_errors_are_form_errors():
    details = flatten_errors([
        {"loc": ("body",), "msg": "Field required", "type": "missing"},
        {"loc": ("body", 7), "msg": "JSON decode error", "type": "json_invalid"},
    ])
    assert details == {"formErrors": ["Field required", "JSON decode error"], "fieldErrors": {}}
