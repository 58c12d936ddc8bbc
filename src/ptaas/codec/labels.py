"""
Wire labels for enumerated symbols.

A symbol's label defaults to its enum value and may be overridden per member,
so the spelling on the wire can drift from the declared name without the
enum itself changing.
"""

from enum import Enum
from typing import Any, Callable, Generic, Iterator, Mapping, Optional, TypeVar

from ptaas.errors import TypeMismatch, UnknownSymbol

E = TypeVar("E", bound=Enum)


class SymbolTable(Generic[E]):
    def __init__(self, enum_cls: type[E], overrides: Optional[Mapping[E, str]] = None):
        overrides = overrides or {}
        stray = [m for m in overrides if not isinstance(m, enum_cls)]
        if stray:
            raise ValueError(f"Overrides for {enum_cls.__name__} contain foreign members: {stray}")

        self.enum_cls = enum_cls
        self._labels: dict[E, str] = {m: overrides.get(m, m.value) for m in enum_cls}
        self._symbols: dict[str, E] = {}
        for member, label in self._labels.items():
            if label in self._symbols:
                raise ValueError(
                    f"{enum_cls.__name__}: label {label!r} used by both "
                    f"{self._symbols[label].name} and {member.name}"
                )
            self._symbols[label] = member

    @classmethod
    def styled(
        cls,
        enum_cls: type[E],
        style: Callable[[str], str],
        overrides: Optional[Mapping[E, str]] = None,
    ) -> "SymbolTable[E]":
        """Derive every label from the lower-cased member name through ``style``."""
        labels = {m: style(m.name.lower()) for m in enum_cls}
        labels.update(overrides or {})
        return cls(enum_cls, labels)

    @property
    def name(self) -> str:
        return self.enum_cls.__name__

    def label_of(self, symbol: E) -> str:
        return self._labels[symbol]

    def symbol_of(self, label: Any, field: str = "") -> E:
        if not isinstance(label, str):
            raise TypeMismatch(field, "a string")
        try:
            return self._symbols[label]
        except KeyError:
            raise UnknownSymbol(self.name, label) from None

    def labels(self) -> Iterator[str]:
        """Labels in member declaration order."""
        return iter(self._labels.values())

    def encoder(self) -> Callable[[E], str]:
        return self.label_of

    def decoder(self, field: str = "") -> Callable[[Any], E]:
        return lambda label: self.symbol_of(label, field)

    def __contains__(self, label: object) -> bool:
        return label in self._symbols

    def __repr__(self) -> str:
        return f"SymbolTable({self.name}, {self._labels!r})"
