"""
Flatten pydantic validation errors into a human-readable list.

Nested recipe ingredient line errors are reported per row:

    ["Satır 2 (quantity): 0.0001 veya daha büyük olmalı",
     "En az 2 karakter olmalı (name)"]
"""

from typing import Any, Iterable

from shared.config.constants import ErrorMessages

# Location segments added by FastAPI that are not part of the field path
_TRANSPORT_PREFIXES = {"body", "query", "path"}

# Array fields whose entries are reported as "Satır N"
ROW_ARRAY_FIELDS = {"ingredients"}

_MESSAGES: dict[str, str] = {
    "missing": "Zorunlu alan",
    "string_too_short": "En az {min_length} karakter olmalı",
    "string_too_long": "En fazla {max_length} karakter olmalı",
    "greater_than_equal": "{ge} veya daha büyük olmalı",
    "greater_than": "{gt} değerinden büyük olmalı",
    "less_than_equal": "{le} veya daha küçük olmalı",
    "less_than": "{lt} değerinden küçük olmalı",
    "float_parsing": "Sayı olmalı",
    "float_type": "Sayı olmalı",
    "int_parsing": "Tam sayı olmalı",
    "int_type": "Tam sayı olmalı",
    "enum": "Geçersiz seçim",
    "literal_error": "Geçersiz seçim",
    "bool_parsing": "Evet/hayır değeri olmalı",
    "extra_forbidden": "Bilinmeyen alan",
}


def _display(value: Any) -> Any:
    """Whole floats without the trailing .0: 0.0 -> 0, 0.0001 unchanged."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _message(error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "value_error" and "error" in ctx:
        return str(ctx["error"])

    template = _MESSAGES.get(error_type)
    if template is not None:
        try:
            return template.format(**{key: _display(value) for key, value in ctx.items()})
        except KeyError:
            return error.get("msg", ErrorMessages.INVALID_INPUT)
    return error.get("msg", ErrorMessages.INVALID_INPUT)


def _field_path(loc: Iterable[Any]) -> list[Any]:
    path = list(loc)
    while path and path[0] in _TRANSPORT_PREFIXES:
        path.pop(0)
    return path


def format_validation_error(error: dict[str, Any]) -> str:
    """Format a single pydantic error dict."""
    message = _message(error)
    path = _field_path(error.get("loc", ()))

    if len(path) >= 2 and path[0] in ROW_ARRAY_FIELDS and isinstance(path[1], int):
        row = path[1] + 1
        sub_key = ".".join(str(p) for p in path[2:]) or str(path[0])
        return f"Satır {row} ({sub_key}): {message}"

    if path:
        key = ".".join(str(p) for p in path)
        return f"{message} ({key})"

    return f"{ErrorMessages.INVALID_INPUT}: {message}"


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    """
    Flatten a list of pydantic error dicts (``exc.errors()``) into messages.

    Order follows the order pydantic reported them in.
    """
    return [format_validation_error(error) for error in errors]
