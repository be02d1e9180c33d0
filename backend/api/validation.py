"""
Request body validation errors → field-level diagnostics
"""

from typing import Any, Dict, List, Sequence


def flatten_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Group pydantic validation errors by field.

    Returns:
        {"formErrors": [...], "fieldErrors": {"messages.0.role": [...], ...}}
        Errors about the body as a whole (missing body, invalid JSON) are form errors.
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for error in errors:
        loc = list(error.get("loc") or ())
        if loc and loc[0] == "body":
            loc = loc[1:]
        message = error.get("msg", "Invalid value")

        if error.get("type") == "json_invalid" or not loc:
            form_errors.append(message)
            continue
        field_errors.setdefault(".".join(str(part) for part in loc), []).append(message)

    return {"formErrors": form_errors, "fieldErrors": field_errors}
