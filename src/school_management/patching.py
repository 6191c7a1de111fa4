"""
school_management.patching

JSON Patch (RFC 6902) support for partial entity updates.

Responsibilities:
- Match operation paths case-insensitively against an entity's JSON field names.
- Apply the patch with `jsonpatch` and report failures as client errors.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import jsonpatch
import jsonpointer

from school_management.errors import BadRequestError
from school_management.filtering import normalize_name

_POINTER_KEYS = ("path", "from")


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _normalize_pointer(pointer: Any, field_names: Iterable[str]) -> Any:
    if not isinstance(pointer, str) or not pointer.startswith("/"):
        return pointer
    head, sep, rest = pointer[1:].partition("/")
    wanted = normalize_name(_unescape(head))
    for name in field_names:
        if normalize_name(name) == wanted:
            return "/" + _escape(name) + sep + rest
    return pointer


def normalize_operations(
    operations: Sequence[Mapping[str, Any]], field_names: Iterable[str]
) -> list[dict[str, Any]]:
    names = list(field_names)
    normalized: list[dict[str, Any]] = []
    for raw in operations:
        if not isinstance(raw, Mapping):
            raise BadRequestError("Each patch operation must be a JSON object")
        op = {str(k).lower(): v for k, v in raw.items()}
        for key in _POINTER_KEYS:
            if key in op:
                op[key] = _normalize_pointer(op[key], names)
        if isinstance(op.get("op"), str):
            op["op"] = op["op"].lower()
        normalized.append(op)
    return normalized


def apply_patch(
    document: Mapping[str, Any], operations: Sequence[Mapping[str, Any]] | None
) -> dict[str, Any]:
    """
    Apply `operations` to a copy of `document` and return the result.

    Raises `BadRequestError` when the document is missing or any operation
    cannot be applied (unknown op, bad pointer, failed `test`).
    """

    if not operations:
        raise BadRequestError("Patch document is missing!")

    normalized = normalize_operations(operations, document.keys())
    try:
        patch = jsonpatch.JsonPatch(normalized)
        patched = patch.apply(dict(document))
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as e:
        raise BadRequestError(f"Invalid patch document: {e}") from e
    if not isinstance(patched, dict):
        raise BadRequestError("Invalid patch document: the patched entity must be an object")

    unknown = sorted(set(patched) - set(document))
    if unknown:
        raise BadRequestError(f"Unknown property '{unknown[0]}'")
    return patched
