"""
# Conlang-Markdown: blocks.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Block nodes.
"""

from typing import Any, Iterator, Optional

from conlangmd.bases import Block, ReferenceableBlock
from conlangmd.constants import DEFAULT_TOC_MAX_LEVEL, MAX_HEADING_LEVEL
from conlangmd.exceptions import FrozenMutateException
from conlangmd.inlines import InlineNode
from conlangmd.parameters import ParameterSet, extract_positive_integer
from conlangmd.references import ReplacementDefinition


class Heading(ReferenceableBlock):
    """
    A heading `#`{1,6}, whose level is the number of hashes.

    Flags:
    - `nonumber`: neither numbered nor advancing the heading counters
    - `notoc`: left out of tables of contents
    """
    _level: int

    def __init__(self, level: int, title: list[InlineNode], parameters: Optional[ParameterSet], line_number: int):
        super().__init__(title, parameters, line_number)
        self._level = level

    @property
    def kind(self) -> str:
        return 'heading'

    @property
    def level(self) -> int:
        return self._level

    @property
    def is_in_contents(self) -> bool:
        return not self._parameters.has_flag('notoc')


class Paragraph(Block):
    _content: list[InlineNode]

    def __init__(self, content: list[InlineNode], line_number: int):
        super().__init__(None, line_number)
        self._content = content

    @property
    def kind(self) -> str:
        return 'paragraph'

    @property
    def content(self) -> list[InlineNode]:
        return self._content

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        yield self._line_number, self._content


class ListItem:
    _content: list[InlineNode]
    _line_number: int
    _sublist: Optional['BulletOrNumberedList']

    def __init__(self, content: list[InlineNode], line_number: int,
                 sublist: Optional['BulletOrNumberedList'] = None):
        self._content = content
        self._line_number = line_number
        self._sublist = sublist

    @property
    def content(self) -> list[InlineNode]:
        return self._content

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def sublist(self) -> Optional['BulletOrNumberedList']:
        return self._sublist


class BulletOrNumberedList(Block):
    """
    A list of items `- «item»` (bulleted) or `! «item»` (numbered).

    Parameters attached to the first marker (`-[«parameters»] «item»`) apply to the whole list.
    Flags:
    - `ordered`: numbered, whatever the marker
    """
    _items: list[ListItem]
    _is_ordered: bool

    def __init__(self, items: list[ListItem], is_ordered: bool, parameters: Optional[ParameterSet], line_number: int):
        super().__init__(parameters, line_number)
        self._items = items
        self._is_ordered = is_ordered

    @property
    def kind(self) -> str:
        return 'list'

    @property
    def items(self) -> list[ListItem]:
        return self._items

    @property
    def is_ordered(self) -> bool:
        return self._is_ordered or self._parameters.has_flag('ordered')

    def sublists(self) -> Iterator['BulletOrNumberedList']:
        for item in self._items:
            if item.sublist is not None:
                yield item.sublist
                yield from item.sublist.sublists()

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        for item in self._items:
            yield item.line_number, item.content
            if item.sublist is not None:
                yield from item.sublist.inline_sequences()


class TableOfContents(Block):
    """
    A table of contents `:toc:`.

    Lists headings up to level `maxlevel` (default 6).
    """
    _title: list[InlineNode]
    _max_level: int

    def __init__(self, title: list[InlineNode], parameters: Optional[ParameterSet], line_number: int):
        super().__init__(parameters, line_number)
        self._title = title
        self._max_level = extract_positive_integer(
            self._parameters, 'maxlevel',
            default=DEFAULT_TOC_MAX_LEVEL,
            maximum=MAX_HEADING_LEVEL,
        )

    @property
    def kind(self) -> str:
        return 'toc'

    @property
    def title(self) -> list[InlineNode]:
        return self._title

    @property
    def max_level(self) -> int:
        return self._max_level

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        yield self._line_number, self._title


class TableColumn:
    """
    Column parameters, from the column specification `|[«parameters»] [...]`.
    """
    _parameters: ParameterSet

    def __init__(self, parameters: ParameterSet):
        self._parameters = parameters

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def is_header(self) -> bool:
        return self._parameters.has_flag('header')

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._parameters.class_names


class TableCell:
    """
    A table cell `|[rows=«r», cols=«c», «class»] «content»`.

    A cell is blank if it has neither content nor parameters.
    """
    _content: list[InlineNode]
    _parameters: ParameterSet
    _line_number: int
    _is_blank: bool
    _row_span: int
    _column_span: int

    def __init__(self, content: list[InlineNode], parameters: ParameterSet, line_number: int, is_blank: bool):
        self._content = content
        self._parameters = parameters
        self._line_number = line_number
        self._is_blank = is_blank
        self._row_span = extract_positive_integer(parameters, 'rows', default=1)
        self._column_span = extract_positive_integer(parameters, 'cols', default=1)

    @property
    def content(self) -> list[InlineNode]:
        return self._content

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def is_blank(self) -> bool:
        return self._is_blank

    @property
    def row_span(self) -> int:
        return self._row_span

    @property
    def column_span(self) -> int:
        return self._column_span

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._parameters.class_names


class TableRow:
    """
    A table row `::[header, «class»] |«cell» |«cell» [...]`.
    """
    _cells: list[TableCell]
    _parameters: ParameterSet
    _line_number: int

    def __init__(self, cells: list[TableCell], parameters: ParameterSet, line_number: int):
        self._cells = cells
        self._parameters = parameters
        self._line_number = line_number

    @property
    def cells(self) -> list[TableCell]:
        return self._cells

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def is_header(self) -> bool:
        return self._parameters.has_flag('header')

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._parameters.class_names


class LaidOutBlock(ReferenceableBlock):
    """
    A referenceable block whose layout is computed by the document builder.
    """
    _layout: Optional[Any]

    def __init__(self, title: list[InlineNode], parameters: Optional[ParameterSet], line_number: int):
        super().__init__(title, parameters, line_number)
        self._layout = None

    @property
    def layout(self) -> Optional[Any]:
        return self._layout

    @layout.setter
    def layout(self, value: Any):
        if self._layout is not None:
            raise FrozenMutateException('error: cannot set `layout` more than once')

        self._layout = value


class Table(LaidOutBlock):
    _rows: list[TableRow]
    _columns: list[TableColumn]

    def __init__(self, title: list[InlineNode], parameters: Optional[ParameterSet], line_number: int,
                 rows: list[TableRow], columns: list[TableColumn]):
        super().__init__(title, parameters, line_number)
        self._rows = rows
        self._columns = columns

    @property
    def kind(self) -> str:
        return 'table'

    @property
    def rows(self) -> list[TableRow]:
        return self._rows

    @property
    def columns(self) -> list[TableColumn]:
        return self._columns

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        yield from super().inline_sequences()
        for row in self._rows:
            for cell in row.cells:
                yield cell.line_number, cell.content


class GlossLine:
    """
    A gloss line `::[nosplit, «class»] «text»`.

    A split line holds one word per whitespace-separated token
    (`raw_tokens` are kept for deciding spacing between words);
    a `nosplit` line holds its content whole.
    """
    _parameters: ParameterSet
    _line_number: int
    _raw_tokens: list[str]
    _words: list[list[InlineNode]]
    _content: list[InlineNode]

    def __init__(self, parameters: ParameterSet, line_number: int, raw_tokens: Optional[list[str]] = None,
                 words: Optional[list[list[InlineNode]]] = None, content: Optional[list[InlineNode]] = None):
        self._parameters = parameters
        self._line_number = line_number
        self._raw_tokens = list(raw_tokens or [])
        self._words = list(words or [])
        self._content = list(content or [])

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def is_nosplit(self) -> bool:
        return self._parameters.has_flag('nosplit')

    @property
    def raw_tokens(self) -> list[str]:
        return self._raw_tokens

    @property
    def words(self) -> list[list[InlineNode]]:
        return self._words

    @property
    def content(self) -> list[InlineNode]:
        return self._content

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._parameters.class_names


class Gloss(LaidOutBlock):
    _lines: list[GlossLine]

    def __init__(self, title: list[InlineNode], parameters: Optional[ParameterSet], line_number: int,
                 lines: list[GlossLine]):
        super().__init__(title, parameters, line_number)
        self._lines = lines

    @property
    def kind(self) -> str:
        return 'gloss'

    @property
    def lines(self) -> list[GlossLine]:
        return self._lines

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        yield from super().inline_sequences()
        for line in self._lines:
            if line.is_nosplit:
                yield line.line_number, line.content
            else:
                for word in line.words:
                    yield line.line_number, word


class ReplacementDefinitionSet(Block):
    """
    Replacement definitions `:replace:`, one `:«identifier»: «content»` per line.
    """
    _definitions: list[ReplacementDefinition]

    def __init__(self, definitions: list[ReplacementDefinition], line_number: int):
        super().__init__(None, line_number)
        self._definitions = definitions

    @property
    def kind(self) -> str:
        return 'replace'

    @property
    def definitions(self) -> list[ReplacementDefinition]:
        return self._definitions


class DocumentControl(Block):
    """
    Document control `:«name»: «value»`, for the standalone document wrapper.
    """
    _name: str
    _value: str

    def __init__(self, name: str, value: str, line_number: int):
        super().__init__(None, line_number)
        self._name = name
        self._value = value

    @property
    def kind(self) -> str:
        return 'control'

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> str:
        return self._value
