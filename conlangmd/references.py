"""
# Conlang-Markdown: references.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Symbols for cross-references, and replacement definitions.
"""

from typing import NamedTuple, Optional

from conlangmd.exceptions import (
    DuplicateIdException,
    FrozenMutateException,
    UnrecognisedIdException,
    UnrecognisedReplacementException,
)
from conlangmd.inlines import InlineNode


class Symbol(NamedTuple):
    id_: str
    kind: str
    number_text: Optional[str]
    is_numbered: bool
    line_number: int


class SymbolMaster:
    """
    Object storing the symbols of identified blocks.

    Every id is unique.
    Once frozen (before cross-references are resolved), no more symbols may be stored.
    """
    _symbol_from_id: dict[str, Symbol]
    _is_frozen: bool

    def __init__(self):
        self._symbol_from_id = {}
        self._is_frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._is_frozen

    def freeze(self):
        self._is_frozen = True

    def store_symbol(self, symbol: Symbol):
        if self._is_frozen:
            raise FrozenMutateException('error: cannot call `store_symbol(...)` after `freeze()`')

        existing_symbol = self._symbol_from_id.get(symbol.id_)
        if existing_symbol is not None:
            raise DuplicateIdException(
                f'duplicate id `{symbol.id_}` (already used on line {existing_symbol.line_number})',
                symbol.line_number,
            )

        self._symbol_from_id[symbol.id_] = symbol

    def load_symbol(self, id_: str) -> Symbol:
        try:
            return self._symbol_from_id[id_]
        except KeyError:
            raise UnrecognisedIdException

    def has_id(self, id_: str) -> bool:
        return id_ in self._symbol_from_id

    def compute_unique_id(self, base_id: str) -> str:
        """
        Compute an unused id from a base id, by appending `-1`, `-2`, etc. if necessary.
        """
        if not self.has_id(base_id):
            return base_id

        suffix = 1
        while self.has_id(f'{base_id}-{suffix}'):
            suffix += 1

        return f'{base_id}-{suffix}'

    def symbols(self) -> list[Symbol]:
        return list(self._symbol_from_id.values())


class ReplacementDefinition(NamedTuple):
    identifier: str
    content: list[InlineNode]
    line_number: int


class ReplacementMaster:
    """
    Object storing replacement definitions.

    A later definition of an identifier overrides an earlier one.
    """
    _definition_from_identifier: dict[str, ReplacementDefinition]
    _is_frozen: bool

    def __init__(self):
        self._definition_from_identifier = {}
        self._is_frozen = False

    def freeze(self):
        self._is_frozen = True

    def store_definition(self, definition: ReplacementDefinition):
        if self._is_frozen:
            raise FrozenMutateException('error: cannot call `store_definition(...)` after `freeze()`')

        self._definition_from_identifier[definition.identifier] = definition

    def load_definition(self, identifier: str) -> ReplacementDefinition:
        try:
            return self._definition_from_identifier[identifier]
        except KeyError:
            raise UnrecognisedReplacementException

    def has_identifier(self, identifier: str) -> bool:
        return identifier in self._definition_from_identifier
