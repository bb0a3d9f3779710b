"""
# Conlang-Markdown: builder.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Document building: numbering, id assignment, and layout, in a single forward pass.
"""

from typing import Callable, Optional

from conlangmd.bases import Block, ReferenceableBlock
from conlangmd.blocks import (
    BulletOrNumberedList,
    DocumentControl,
    Gloss,
    Heading,
    ReplacementDefinitionSet,
    Table,
    TableOfContents,
)
from conlangmd.constants import MAX_HEADING_LEVEL, VERBOSE_MODE_DIVIDER_SYMBOL_COUNT
from conlangmd.document import Document
from conlangmd.exceptions import DuplicateIdException
from conlangmd.glosses import layout_gloss
from conlangmd.inlines import InlineNode, compute_plain_text
from conlangmd.references import Symbol
from conlangmd.tables import layout_table
from conlangmd.utilities import collapse_whitespace


class CounterState:
    """
    Counters for headings (levels 1 to 6), tables, and glosses.

    Advancing the heading counter for level «n» resets the counters for deeper levels.
    """
    _heading_counters: list[int]
    _table_counter: int
    _gloss_counter: int

    def __init__(self):
        self._heading_counters = [0] * MAX_HEADING_LEVEL
        self._table_counter = 0
        self._gloss_counter = 0

    @property
    def heading_counters(self) -> tuple[int, ...]:
        return tuple(self._heading_counters)

    def advance_heading(self, level: int) -> str:
        self._heading_counters[level - 1] += 1
        for deeper_index in range(level, MAX_HEADING_LEVEL):
            self._heading_counters[deeper_index] = 0

        return '.'.join(str(counter) for counter in self._heading_counters[:level])

    def advance_table(self) -> str:
        self._table_counter += 1
        return str(self._table_counter)

    def advance_gloss(self) -> str:
        self._gloss_counter += 1
        return str(self._gloss_counter)


class DocumentBuilder:
    """
    Object adding parsed blocks to a document, in document order.

    For each block:
    - numbered blocks get their number from the counter state;
    - referenceable blocks get an id, which is registered in the symbol master;
    - tables of contents and lists with an explicit id have it registered too (for uniqueness);
    - replacement definitions are registered in the replacement master;
    - document control values are recorded as metadata;
    - tables and glosses are laid out.
    Identity errors are recorded on the document rather than raised,
    so that building always runs to completion.
    """
    _document: Document
    _counter_state: CounterState
    _verbose_mode_enabled: bool

    def __init__(self, document: Optional[Document] = None, verbose_mode_enabled: bool = False):
        if document is None:
            document = Document()
        self._document = document
        self._counter_state = CounterState()
        self._verbose_mode_enabled = verbose_mode_enabled

    @property
    def document(self) -> Document:
        return self._document

    @property
    def counter_state(self) -> CounterState:
        return self._counter_state

    def add_block(self, block: Block):
        if isinstance(block, ReferenceableBlock):
            self._number(block)
            self._identify(block)
        elif isinstance(block, TableOfContents):
            self._identify_unreferenceable(block)
        elif isinstance(block, BulletOrNumberedList):
            self._identify_unreferenceable(block)
            for sublist in block.sublists():
                self._identify_unreferenceable(sublist)
        elif isinstance(block, ReplacementDefinitionSet):
            for definition in block.definitions:
                self._document.replacement_master.store_definition(definition)
        elif isinstance(block, DocumentControl):
            self._document.set_metadata(block.name, block.value)

        if isinstance(block, Table):
            block.layout = layout_table(block, self._document.record_warning)
        elif isinstance(block, Gloss):
            block.layout = layout_gloss(block)

        self._document.append_block(block)

        if self._verbose_mode_enabled:
            DocumentBuilder.print_block(block)

    def finish(self) -> Document:
        """
        Freeze the symbol and replacement masters, ready for resolution.

        In verbose mode, the symbol table is printed.
        """
        self._document.symbol_master.freeze()
        self._document.replacement_master.freeze()

        if self._verbose_mode_enabled:
            DocumentBuilder.print_symbols(self._document.symbol_master.symbols())

        return self._document

    def _number(self, block: ReferenceableBlock):
        if not block.is_numbered:
            return

        if isinstance(block, Heading):
            block.number_text = self._counter_state.advance_heading(block.level)
        elif isinstance(block, Table):
            block.number_text = self._counter_state.advance_table()
        elif isinstance(block, Gloss):
            block.number_text = self._counter_state.advance_gloss()

    def _identify(self, block: ReferenceableBlock):
        symbol_master = self._document.symbol_master
        explicit_id = block.explicit_id

        if explicit_id is None:
            default_id = DocumentBuilder.compute_default_id(block, self._load_replacement_content)
            id_ = symbol_master.compute_unique_id(default_id)
        else:
            id_ = explicit_id

        block.id_ = id_

        try:
            symbol_master.store_symbol(
                Symbol(
                    id_=id_,
                    kind=block.kind,
                    number_text=block.number_text,
                    is_numbered=block.is_numbered,
                    line_number=block.line_number,
                )
            )
        except DuplicateIdException as exception:
            self._document.record_error(exception)

    def _identify_unreferenceable(self, block: Block):
        """
        Register the explicit id (if any) of a block that cannot be referenced.
        """
        explicit_id = block.explicit_id
        if explicit_id is None:
            return

        block.id_ = explicit_id

        try:
            self._document.symbol_master.store_symbol(
                Symbol(
                    id_=explicit_id,
                    kind=block.kind,
                    number_text=None,
                    is_numbered=False,
                    line_number=block.line_number,
                )
            )
        except DuplicateIdException as exception:
            self._document.record_error(exception)

    def _load_replacement_content(self, identifier: str) -> Optional[list[InlineNode]]:
        replacement_master = self._document.replacement_master
        if not replacement_master.has_identifier(identifier):
            return None

        return replacement_master.load_definition(identifier).content

    @staticmethod
    def compute_default_id(
        block: ReferenceableBlock,
        load_replacement_content: Optional[Callable[[str], Optional[list[InlineNode]]]] = None,
    ) -> str:
        """
        Compute the default id (before uniqueness suffixing) of a referenceable block.

        This is `«kind»-«title»` (whitespace runs in the title become hyphens),
        else `«kind»-«number»` for an untitled numbered block,
        else `«kind»-nonumber`.
        Replacements in the title are expanded if `load_replacement_content` loads them
        (in the builder, if they are defined earlier in the document).
        """
        title_id = collapse_whitespace(compute_plain_text(block.title, load_replacement_content), separator='-')
        if title_id != '':
            return f'{block.kind}-{title_id}'

        if block.number_text is not None:
            return f'{block.kind}-{block.number_text}'

        return f'{block.kind}-nonumber'

    @staticmethod
    def print_block(block: Block):
        print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BLOCK {block.kind} (line {block.line_number})')
        print(f'id: {block.id_}')
        print(f'number: {block.number_text}')
        print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT)
        print('\n')

    @staticmethod
    def print_symbols(symbols: list[Symbol]):
        print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' SYMBOLS ({len(symbols)})')
        for symbol in symbols:
            print(f'{symbol.id_}: {symbol.kind} {symbol.number_text} (line {symbol.line_number})')
        print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT)
        print('\n')
