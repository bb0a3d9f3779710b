"""
# Conlang-Markdown: document.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The document tree.
"""

import warnings
from typing import Optional

from conlangmd.bases import Block
from conlangmd.blocks import Heading
from conlangmd.exceptions import ConlangMarkdownException, ConlangMarkdownWarning
from conlangmd.references import ReplacementMaster, SymbolMaster


class Document:
    """
    A document: blocks in order, plus everything collected while building and resolving them.

    - `symbol_master`: ids of headings, tables, glosses and tables of contents
    - `replacement_master`: replacement definitions
    - `metadata`: document control values (`title`, `author`, etc.)
    - `errors`: fatal errors (the document must not be output if there are any)
    - `warnings`: recoverable problems
    """
    _blocks: list[Block]
    _symbol_master: SymbolMaster
    _replacement_master: ReplacementMaster
    _value_from_control_name: dict[str, str]
    _errors: list[ConlangMarkdownException]
    _warnings: list[ConlangMarkdownWarning]

    def __init__(self):
        self._blocks = []
        self._symbol_master = SymbolMaster()
        self._replacement_master = ReplacementMaster()
        self._value_from_control_name = {}
        self._errors = []
        self._warnings = []

    @property
    def blocks(self) -> list[Block]:
        return self._blocks

    @property
    def symbol_master(self) -> SymbolMaster:
        return self._symbol_master

    @property
    def replacement_master(self) -> ReplacementMaster:
        return self._replacement_master

    @property
    def errors(self) -> list[ConlangMarkdownException]:
        return self._errors

    @property
    def warnings(self) -> list[ConlangMarkdownWarning]:
        return self._warnings

    @property
    def has_errors(self) -> bool:
        return len(self._errors) > 0

    def append_block(self, block: Block):
        self._blocks.append(block)

    def headings(self) -> list[Heading]:
        return [block for block in self._blocks if isinstance(block, Heading)]

    def set_metadata(self, name: str, value: str):
        self._value_from_control_name[name] = value

    def get_metadata(self, name: str) -> Optional[str]:
        return self._value_from_control_name.get(name)

    def record_error(self, error: ConlangMarkdownException):
        self._errors.append(error)

    def record_warning(self, warning: ConlangMarkdownWarning):
        self._warnings.append(warning)
        warnings.warn(warning, stacklevel=2)
