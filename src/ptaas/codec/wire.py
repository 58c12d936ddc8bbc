"""
JSON boundary: parsing, serialization, field naming and kind checks.

Every decoder in ``ptaas.codec`` reads raw JSON values through the helpers
here so that shape errors surface as the typed errors in ``ptaas.errors``.
"""

import json
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ptaas.errors import FieldError, MalformedInput, MissingRequiredField, TypeMismatch, UnencodablePayload

M = TypeVar("M", bound=BaseModel)

_KINDS: dict[type, str] = {
    bool: "a boolean",
    str: "a string",
    dict: "an object",
    list: "an array",
}

# pydantic error type -> expected kind
_VALIDATION_KINDS = {
    "string_type": "a string",
    "bool_type": "a boolean",
    "list_type": "an array",
    "tuple_type": "an array",
    "model_type": "an object",
    "model_attributes_type": "an object",
    "dict_type": "an object",
    "enum": "a known label",
}


def loads(text: Union[str, bytes]) -> Any:
    """Parse UTF-8 JSON text."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInput(str(e)) from e


def dumps(value: Any, indent: Optional[int] = None) -> str:
    try:
        return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise UnencodablePayload(f"Cannot encode payload: {e}") from e


class FieldNaming:
    """Maps internal snake_case field names to wire names.

    ``style`` is applied to every field (identity when omitted);
    ``overrides`` pin individual fields to an explicit wire name.
    """

    def __init__(
        self,
        style: Optional[Callable[[str], str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ):
        self._style = style
        self._overrides = dict(overrides or {})

    def wire(self, field: str) -> str:
        if field in self._overrides:
            return self._overrides[field]
        return self._style(field) if self._style else field

    def __repr__(self) -> str:
        style = getattr(self._style, "__name__", None)
        return f"FieldNaming(style={style}, overrides={self._overrides!r})"


def _kind_error(field: str, kind: type) -> TypeMismatch:
    return TypeMismatch(field, _KINDS.get(kind, kind.__name__))


def expect_object(raw: Any, field: str = "") -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise _kind_error(field, dict)
    return raw


def _check_kind(value: Any, kind: type, field: str) -> Any:
    if not isinstance(value, kind):
        raise _kind_error(field, kind)
    return value


def require(obj: Mapping[str, Any], key: str, kind: type, path: str = "") -> Any:
    field = f"{path}.{key}" if path else key
    if obj.get(key) is None:
        raise MissingRequiredField(field)
    return _check_kind(obj[key], kind, field)


def optional(obj: Mapping[str, Any], key: str, kind: type, path: str = "") -> Any:
    """Return the value at ``key``, or None when absent or null."""
    value = obj.get(key)
    if value is None:
        return None
    return _check_kind(value, kind, f"{path}.{key}" if path else key)


@contextmanager
def located(prefix: str) -> Iterator[None]:
    """Re-raise field errors from nested decoders under ``prefix``."""
    try:
        yield
    except FieldError as e:
        e.relocate(prefix)
        raise


def translate_validation_error(exc: ValidationError, field: str = "") -> FieldError:
    """Map the first pydantic error to a typed decode error.

    A null in a required field is reported as missing, same as ``require``.
    A null array element stays a type mismatch.
    """
    err = exc.errors()[0]
    loc = err["loc"]
    path = ".".join(str(part) for part in loc)
    if field:
        path = f"{field}.{path}" if path else field
    if err["type"] == "missing":
        return MissingRequiredField(path)
    if err.get("input", ...) is None and loc and isinstance(loc[-1], str):
        return MissingRequiredField(path)
    return TypeMismatch(path, _VALIDATION_KINDS.get(err["type"], err["type"]))


def decode_model(model: type[M], raw: Any, field: str = "") -> M:
    """Validate ``raw`` into ``model``, raising the typed decode errors."""
    expect_object(raw, field)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise translate_validation_error(e, field) from e


def encode_model(instance: BaseModel) -> dict[str, Any]:
    return instance.model_dump(mode="json", by_alias=True, exclude_none=True)
