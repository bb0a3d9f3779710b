"""
# Conlang-Markdown: block_parser.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Block classification and parsing.

A block is classified by its first line:
````
#[«parameters»] «title»                   heading (1 to 6 hashes)
:toc:[«parameters»] «title»               table of contents
:table:[«parameters»] «title»             table
:gloss:[«parameters»] «title»             gloss
:replace:                                 replacement definitions
:title: «value»                           document control (also `:author:`, etc.)
-[«parameters»] «item»                    bulleted list
![«parameters»] «item»                    numbered list
«anything else»                           paragraph
````
"""

import re
from typing import NamedTuple, Optional

from conlangmd.blocks import (
    Block,
    BulletOrNumberedList,
    DocumentControl,
    Gloss,
    GlossLine,
    Heading,
    ListItem,
    Paragraph,
    ReplacementDefinitionSet,
    Table,
    TableCell,
    TableColumn,
    TableOfContents,
    TableRow,
)
from conlangmd.constants import (
    BLOCK_DIRECTIVE_NAMES,
    CONTROL_DIRECTIVE_NAMES,
    DEFAULT_TOC_TITLE,
    INLINE_DIRECTIVE_NAMES,
    MAX_HEADING_LEVEL,
)
from conlangmd.exceptions import (
    AmbiguousIndentException,
    DuplicateReplacementException,
    HeadingLevelTooDeepException,
    MalformedBlockException,
    ParseException,
)
from conlangmd.glosses import tokenize_gloss_line, validate_nosplit_placement
from conlangmd.idioms import (
    build_block_directive_regex,
    build_heading_regex,
    build_list_item_regex,
    build_replacement_definition_regex,
    build_sub_line_regex,
)
from conlangmd.inline_parser import parse_inline
from conlangmd.inlines import InlineNode, Text
from conlangmd.parameters import PARAMETER_SCHEMA_FROM_DIRECTIVE, ParameterSet, extract_parameter_source, parse_parameters
from conlangmd.references import ReplacementDefinition
from conlangmd.segmenter import RawBlock
from conlangmd.utilities import compute_indentation, split_unescaped


HEADING_PATTERN_COMPILED = re.compile(
    pattern=build_heading_regex(),
    flags=re.ASCII | re.VERBOSE,
)
BLOCK_DIRECTIVE_PATTERN_COMPILED = re.compile(
    pattern=build_block_directive_regex(BLOCK_DIRECTIVE_NAMES + CONTROL_DIRECTIVE_NAMES),
    flags=re.ASCII | re.VERBOSE,
)
LIST_ITEM_PATTERN_COMPILED = re.compile(
    pattern=build_list_item_regex(),
    flags=re.ASCII | re.VERBOSE,
)
SUB_LINE_PATTERN_COMPILED = re.compile(
    pattern=build_sub_line_regex(),
    flags=re.ASCII | re.VERBOSE,
)
REPLACEMENT_DEFINITION_PATTERN_COMPILED = re.compile(
    pattern=build_replacement_definition_regex(),
    flags=re.ASCII | re.VERBOSE,
)

RESERVED_REPLACEMENT_IDENTIFIERS = INLINE_DIRECTIVE_NAMES + BLOCK_DIRECTIVE_NAMES + CONTROL_DIRECTIVE_NAMES


def parse_block(raw_block: RawBlock) -> Block:
    """
    Classify and parse a block.

    Errors without a more precise line number are located at the start of the block.
    """
    try:
        return _parse_block(raw_block)
    except ParseException as exception:
        raise exception.locate(raw_block.start_line_number)


def _parse_block(raw_block: RawBlock) -> Block:
    lines = raw_block.lines
    start_line_number = raw_block.start_line_number
    first_line = lines[0]

    heading_match = HEADING_PATTERN_COMPILED.match(first_line)
    if heading_match is not None:
        return parse_heading(raw_block, heading_match)

    directive_match = BLOCK_DIRECTIVE_PATTERN_COMPILED.match(first_line)
    if directive_match is not None:
        directive_name = directive_match.group('directive_name')
        directive_end = directive_match.end()

        if directive_name == 'toc':
            return parse_table_of_contents(raw_block, directive_end)
        if directive_name == 'table':
            return parse_table(raw_block, directive_end)
        if directive_name == 'gloss':
            return parse_gloss(raw_block, directive_end)
        if directive_name == 'replace':
            return parse_replacement_definitions(raw_block, directive_end)

        value = raw_block.text[directive_end:].strip()
        return DocumentControl(directive_name, value, start_line_number)

    if LIST_ITEM_PATTERN_COMPILED.fullmatch(first_line) is not None:
        return parse_list(raw_block)

    return Paragraph(parse_inline(raw_block.text, start_line_number), start_line_number)


def parse_inline_remainder(text: str, position: int, start_line_number: int) -> list[InlineNode]:
    """
    Parse inline content from `position` onwards, stripped of surrounding whitespace.
    """
    remainder = text[position:]
    content_position = position + len(remainder) - len(remainder.lstrip())
    line_number = start_line_number + text.count('\n', 0, content_position)

    return parse_inline(remainder.strip(), line_number)


def parse_directive_parameters(string: str, position: int, directive_name: str) -> tuple[ParameterSet, int]:
    source, end_position = extract_parameter_source(string, position)
    parameters = parse_parameters(source, PARAMETER_SCHEMA_FROM_DIRECTIVE[directive_name])

    return parameters, end_position


def parse_heading(raw_block: RawBlock, heading_match: re.Match) -> Heading:
    text = raw_block.text
    start_line_number = raw_block.start_line_number

    level = len(heading_match.group('opening_hashes'))
    if level > MAX_HEADING_LEVEL:
        raise HeadingLevelTooDeepException(
            f'heading level {level} too deep (at most {MAX_HEADING_LEVEL} hashes)',
            start_line_number,
        )

    parameters, title_position = parse_directive_parameters(text, heading_match.end(), 'heading')
    title = parse_inline_remainder(text, title_position, start_line_number)

    return Heading(level, title, parameters, start_line_number)


def parse_table_of_contents(raw_block: RawBlock, directive_end: int) -> TableOfContents:
    text = raw_block.text
    start_line_number = raw_block.start_line_number

    parameters, title_position = parse_directive_parameters(text, directive_end, 'toc')
    title = parse_inline_remainder(text, title_position, start_line_number)
    if not title:
        title = [Text(DEFAULT_TOC_TITLE)]

    return TableOfContents(title, parameters, start_line_number)


def parse_table(raw_block: RawBlock, directive_end: int) -> Table:
    """
    Parse a table.

    Sub-lines are
    - rows `::[«row parameters»] «cell» |[«cell parameters»] «cell» [...]`, or
    - the column specification `|[«column parameters»] |[«column parameters»] [...]` (at most one).
    """
    first_line = raw_block.lines[0]
    start_line_number = raw_block.start_line_number

    parameters, title_position = parse_directive_parameters(first_line, directive_end, 'table')
    title = parse_inline_remainder(first_line, title_position, start_line_number)

    rows = []
    columns: Optional[list[TableColumn]] = None

    for line_offset, line in enumerate(raw_block.lines[1:], start=1):
        line_number = start_line_number + line_offset
        try:
            sub_line_match = SUB_LINE_PATTERN_COMPILED.fullmatch(line)
            if sub_line_match is not None:
                rows.append(parse_table_row(sub_line_match.group('remainder'), line_number))
                continue

            if columns is not None:
                raise MalformedBlockException('more than one column specification in table')
            columns = parse_table_columns(line)
        except ParseException as exception:
            raise exception.locate(line_number)

    return Table(title, parameters, start_line_number, rows, columns or [])


def parse_table_row(remainder: str, line_number: int) -> TableRow:
    row_parameters, cells_position = parse_directive_parameters(remainder, 0, 'table-row')
    pieces = split_unescaped(remainder[cells_position:], '|')

    cells = []
    leading_piece = pieces[0].strip()
    if leading_piece != '':
        cells.append(TableCell(parse_inline(leading_piece, line_number), ParameterSet(), line_number, is_blank=False))

    cell_pieces = pieces[1:]
    if len(cell_pieces) > 1 and cell_pieces[-1].strip() == '':
        cell_pieces = cell_pieces[:-1]

    for piece in cell_pieces:
        cell_parameters, content_position = parse_directive_parameters(piece, 0, 'table-cell')
        content_source = piece[content_position:].strip()
        is_blank = content_source == '' and cell_parameters.is_empty()
        content = parse_inline(content_source, line_number)
        cells.append(TableCell(content, cell_parameters, line_number, is_blank))

    return TableRow(cells, row_parameters, line_number)


def parse_table_columns(line: str) -> list[TableColumn]:
    pieces = split_unescaped(line, '|')

    if pieces[0].strip() != '' or len(pieces) == 1:
        raise MalformedBlockException(
            'table sub-line must be a row (starting with `::`) or a column specification (starting with `|`)'
        )

    columns = []
    for piece in pieces[1:]:
        column_parameters, end_position = parse_directive_parameters(piece, 0, 'table-column')
        if piece[end_position:].strip() != '':
            raise MalformedBlockException('column specification must contain only parameters')
        columns.append(TableColumn(column_parameters))

    return columns


def parse_gloss(raw_block: RawBlock, directive_end: int) -> Gloss:
    """
    Parse a gloss.

    Sub-lines `::[«line parameters»] «text»` start gloss lines;
    other lines continue the previous gloss line (or the title, before any gloss line).
    """
    lines = raw_block.lines
    start_line_number = raw_block.start_line_number

    parameters, title_position = parse_directive_parameters(lines[0], directive_end, 'gloss')
    title_source = lines[0][title_position:]

    gloss_line_sources: list[tuple[str, int]] = []
    for line_offset, line in enumerate(lines[1:], start=1):
        sub_line_match = SUB_LINE_PATTERN_COMPILED.fullmatch(line)
        if sub_line_match is not None:
            gloss_line_sources.append((sub_line_match.group('remainder'), start_line_number + line_offset))
        elif gloss_line_sources:
            previous_source, previous_line_number = gloss_line_sources[-1]
            gloss_line_sources[-1] = (previous_source + '\n' + line, previous_line_number)
        else:
            title_source += '\n' + line

    title = parse_inline_remainder(title_source, 0, start_line_number)

    gloss_lines = []
    for source, line_number in gloss_line_sources:
        try:
            gloss_lines.append(parse_gloss_line(source, line_number))
        except ParseException as exception:
            raise exception.locate(line_number)

    validate_nosplit_placement(gloss_lines)

    return Gloss(title, parameters, start_line_number, gloss_lines)


def parse_gloss_line(source: str, line_number: int) -> GlossLine:
    line_parameters, text_position = parse_directive_parameters(source, 0, 'gloss-line')
    text = source[text_position:]

    if line_parameters.has_flag('nosplit'):
        return GlossLine(line_parameters, line_number, content=parse_inline(text.strip(), line_number))

    raw_tokens = tokenize_gloss_line(text)
    words = [parse_inline(token, line_number) for token in raw_tokens]

    return GlossLine(line_parameters, line_number, raw_tokens=raw_tokens, words=words)


def parse_replacement_definitions(raw_block: RawBlock, directive_end: int) -> ReplacementDefinitionSet:
    """
    Parse replacement definitions `:«identifier»: «content»`.

    Lines not starting a definition continue the previous one.
    """
    start_line_number = raw_block.start_line_number
    definition_lines = [(raw_block.lines[0][directive_end:], start_line_number)]
    definition_lines.extend(
        (line, start_line_number + line_offset)
        for line_offset, line in enumerate(raw_block.lines[1:], start=1)
    )

    definition_sources: list[tuple[str, str, int]] = []
    for line, line_number in definition_lines:
        stripped_line = line.strip()
        if stripped_line == '':
            continue

        definition_match = REPLACEMENT_DEFINITION_PATTERN_COMPILED.fullmatch(stripped_line)
        if definition_match is not None:
            identifier = definition_match.group('identifier')
            if identifier in RESERVED_REPLACEMENT_IDENTIFIERS:
                raise MalformedBlockException(f'cannot define replacement for directive `:{identifier}:`', line_number)
            if any(identifier == source[0] for source in definition_sources):
                raise DuplicateReplacementException(f'duplicate replacement `:{identifier}:` in block', line_number)
            definition_sources.append((identifier, definition_match.group('content'), line_number))
        elif definition_sources:
            identifier, content_source, definition_line_number = definition_sources[-1]
            definition_sources[-1] = (identifier, content_source + '\n' + stripped_line, definition_line_number)
        else:
            raise MalformedBlockException('expected replacement definition `:«identifier»: «content»`', line_number)

    definitions = [
        ReplacementDefinition(identifier, parse_inline(content_source.strip(), line_number), line_number)
        for identifier, content_source, line_number in definition_sources
    ]

    return ReplacementDefinitionSet(definitions, start_line_number)


class ListEntry(NamedTuple):
    indentation: int
    is_ordered: bool
    parameters: ParameterSet
    content_source: str
    line_number: int


def parse_list(raw_block: RawBlock) -> BulletOrNumberedList:
    """
    Parse a (possibly nested) list.

    An item indented the same as the current level is a sibling.
    An item indented at least two spaces deeper opens a nested list under the previous item.
    Indenting by one space, indenting with tabs,
    or dedenting to an indentation matching no open level is ambiguous.
    Lines not starting an item continue the previous item.
    Parameters `[«parameters»]` directly after the marker of the first item of a list
    (or nested list) apply to that list, and are not allowed on later items.
    """
    entries: list[ListEntry] = []

    for line_offset, line in enumerate(raw_block.lines):
        line_number = raw_block.start_line_number + line_offset
        list_item_match = LIST_ITEM_PATTERN_COMPILED.fullmatch(line)

        if list_item_match is None:
            previous_entry = entries[-1]
            entries[-1] = previous_entry._replace(content_source=previous_entry.content_source + '\n' + line.strip())
            continue

        indentation_string = list_item_match.group('indentation')
        if '\t' in indentation_string:
            raise AmbiguousIndentException('tab in list item indentation', line_number)

        content_source = list_item_match.group('content')
        parameters = ParameterSet()
        if list_item_match.start('content') == list_item_match.end('marker'):
            try:
                parameters, content_position = parse_directive_parameters(content_source, 0, 'list')
            except ParseException as exception:
                raise exception.locate(line_number)
            content_source = content_source[content_position:]

        entries.append(
            ListEntry(
                indentation=compute_indentation(line),
                is_ordered=list_item_match.group('marker') == '!',
                parameters=parameters,
                content_source=content_source,
                line_number=line_number,
            )
        )

    bullet_or_numbered_list, next_index = build_list(entries, 0)
    if next_index < len(entries):
        raise AmbiguousIndentException(
            'list item dedented past the first item',
            entries[next_index].line_number,
        )

    return bullet_or_numbered_list


def build_list(entries: list[ListEntry], start_index: int) -> tuple[BulletOrNumberedList, int]:
    """
    Build the list whose first item is `entries[start_index]`, returning the index just after it.
    """
    first_entry = entries[start_index]
    indentation = first_entry.indentation
    item_entries: list[ListEntry] = []
    sublist_from_item_index: dict[int, BulletOrNumberedList] = {}
    index = start_index

    while index < len(entries):
        entry = entries[index]

        if entry.indentation == indentation:
            if index > start_index and not entry.parameters.is_empty():
                raise MalformedBlockException(
                    'list parameters allowed only on the first item of a list',
                    entry.line_number,
                )
            item_entries.append(entry)
            index += 1
            continue

        if entry.indentation < indentation:
            break

        item_index = len(item_entries) - 1
        if entry.indentation - indentation < 2:
            raise AmbiguousIndentException(
                'list item indented by one space (indent nested items by at least two spaces)',
                entry.line_number,
            )
        if item_index in sublist_from_item_index:
            raise AmbiguousIndentException('list item indentation matches no open list level', entry.line_number)

        sublist, index = build_list(entries, index)
        sublist_from_item_index[item_index] = sublist

    items = [
        ListItem(
            content=parse_inline(item_entry.content_source.strip(), item_entry.line_number),
            line_number=item_entry.line_number,
            sublist=sublist_from_item_index.get(item_index),
        )
        for item_index, item_entry in enumerate(item_entries)
    ]

    bullet_or_numbered_list = BulletOrNumberedList(
        items, first_entry.is_ordered, first_entry.parameters, first_entry.line_number,
    )

    return bullet_or_numbered_list, index
