"""
PTaaS error types raised by the envelope codecs.
"""

from typing import Any, Optional


class PtaasError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class DecodeError(PtaasError):
    """A payload could not be turned into a model. Always recoverable."""


class MalformedInput(DecodeError):
    def __init__(self, message: str):
        super().__init__("malformed_input", f"Not valid JSON: {message}")


class FieldError(DecodeError):
    """Decode error pinned to a dotted field path, e.g. ``error.errorType``."""

    def __init__(self, code: str, field: str, details: Optional[dict[str, Any]] = None):
        self.field = field
        super().__init__(code, self._describe(), details)

    def _describe(self) -> str:
        raise NotImplementedError

    def relocate(self, prefix: str) -> None:
        """Prefix the field path with the enclosing field name."""
        self.field = f"{prefix}.{self.field}" if self.field else prefix
        self.args = (self._describe(),)


class TypeMismatch(FieldError):
    def __init__(self, field: str, expected_kind: str):
        self.expected_kind = expected_kind
        super().__init__("type_mismatch", field)

    def _describe(self) -> str:
        return f"Field {self.field or '<root>'!r} should be {self.expected_kind}"


class MissingRequiredField(FieldError):
    def __init__(self, field: str):
        super().__init__("missing_field", field)

    def _describe(self) -> str:
        return f"Missing required field {self.field!r}"


class UnknownSymbol(DecodeError):
    def __init__(self, enum_name: str, label: str):
        super().__init__("unknown_symbol", f"Unknown {enum_name} label {label!r}",
                         {"enum": enum_name, "label": label})
        self.enum_name = enum_name
        self.label = label


class UnknownResponseType(DecodeError):
    def __init__(self, tag: str):
        super().__init__("unknown_response_type", f"Unknown response type {tag!r}", {"tag": tag})
        self.tag = tag


class EmptyEnvelope(DecodeError):
    def __init__(self, path: str = ""):
        where = f" at {path!r}" if path else ""
        super().__init__("empty_envelope", f"No variant populated{where}", {"path": path})
        self.path = path


class UnencodablePayload(PtaasError, TypeError):
    """An encoder produced a value JSON cannot represent. A programming error."""

    def __init__(self, message: str):
        super().__init__("unencodable_payload", message)


def is_forward_compatible(exc: BaseException) -> bool:
    """True for unknown-label errors a client may log and ignore."""
    return isinstance(exc, UnknownSymbol)
