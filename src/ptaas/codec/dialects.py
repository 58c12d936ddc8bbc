"""
Wire dialects of the generic envelope.

The server and the two client revisions disagree on spelling: the serde
server emits camelCase field names and camelCase labels (keeping its
``gerneralResponse`` and ``aPIKeyIsMissing`` spellings), the
json_annotation client used snake_case fields and PascalCase labels.
A ``Dialect`` pins both so neither is guessed at parse time.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from pydantic.alias_generators import to_camel, to_pascal, to_snake

from ptaas.codec.labels import SymbolTable
from ptaas.codec.wire import FieldNaming
from ptaas.models.failures import (
    AllProjectsResponseErrorType,
    AllScriptsResponseErrorType,
    APIGeneralResponseErrorType,
    APIResponseType,
    TransportFailure,
)

ENUMS: tuple[type[Enum], ...] = (
    APIResponseType,
    APIGeneralResponseErrorType,
    AllProjectsResponseErrorType,
    AllScriptsResponseErrorType,
    TransportFailure,
)


@dataclass(frozen=True)
class Dialect:
    name: str
    naming: FieldNaming
    tables: Mapping[type, SymbolTable] = field(default_factory=dict)

    def table(self, enum_cls: type[Enum]) -> SymbolTable:
        """Symbol table for ``enum_cls``; identity labels when none is pinned."""
        try:
            return self.tables[enum_cls]
        except KeyError:
            return SymbolTable(enum_cls)

    def wire(self, field_name: str) -> str:
        return self.naming.wire(field_name)


CAMEL = Dialect(
    name="camel",
    naming=FieldNaming(to_camel),
    tables={
        APIResponseType: SymbolTable(APIResponseType, {
            APIResponseType.GENERAL_RESPONSE: "gerneralResponse",
        }),
        APIGeneralResponseErrorType: SymbolTable(APIGeneralResponseErrorType, {
            APIGeneralResponseErrorType.API_KEY_IS_MISSING: "aPIKeyIsMissing",
            APIGeneralResponseErrorType.API_KEY_IS_INVALID: "aPIKeyIsInvalid",
        }),
    },
)

SNAKE = Dialect(
    name="snake",
    naming=FieldNaming(to_snake),
    tables={
        **{enum_cls: SymbolTable.styled(enum_cls, to_pascal) for enum_cls in ENUMS},
        APIGeneralResponseErrorType: SymbolTable.styled(APIGeneralResponseErrorType, to_pascal, {
            APIGeneralResponseErrorType.API_KEY_IS_MISSING: "APIKeyIsMissing",
            APIGeneralResponseErrorType.API_KEY_IS_INVALID: "APIKeyIsInvalid",
        }),
    },
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (CAMEL, SNAKE)}


def get_dialect(name: str) -> Dialect:
    try:
        return DIALECTS[name]
    except KeyError:
        raise ValueError(f"Unknown dialect {name!r}, expected one of {sorted(DIALECTS)}") from None
