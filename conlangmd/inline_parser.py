"""
# Conlang-Markdown: inline_parser.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Inline parsing.

Delimiters:
````
*«emphasis»*      **«strong»**
_«italic»_        __«bold»__
^^«small caps»^^  `«span»`
````
Each closing delimiter may be immediately followed by `[«parameters»]`.
Underscores between letters or digits (as in `file_name`) are literal.
A span may not directly contain a span with the same delimiter,
since e.g. `*` and `**` share a prefix;
wrap the inner span in braces `{ }` to nest it.

Directives:
````
:ref:[«id»]
:link:[«url», title=«title»]
:«identifier»:
````
where the last form is the use of a replacement definition.
A backslash makes the next character literal.
"""

import re
from typing import Optional, Type

from conlangmd.exceptions import (
    AmbiguousNestingException,
    DanglingEscapeException,
    ParseException,
    UnterminatedSpanException,
)
from conlangmd.idioms import build_directive_usage_regex
from conlangmd.inlines import (
    SPAN_CLASS_FROM_MARKER,
    FormattingSpan,
    InlineNode,
    Link,
    Reference,
    Replacement,
    Text,
)
from conlangmd.parameters import PARAMETER_SCHEMA_FROM_DIRECTIVE, ParameterSet, extract_parameter_source, parse_parameters


MARKER_CHARACTERS = '*_^`'
DIRECTIVE_USAGE_PATTERN_COMPILED = re.compile(
    pattern=build_directive_usage_regex(),
    flags=re.ASCII | re.VERBOSE,
)


class InlineParser:
    """
    Recursive descent parser turning text into inline nodes.

    `line_number` is the line on which `text` starts,
    so that errors may be reported against the whole input.
    """
    _text: str
    _line_number: int
    _position: int
    _group_depth: int

    def __init__(self, text: str, line_number: int = 1):
        self._text = text
        self._line_number = line_number
        self._position = 0
        self._group_depth = 0

    def parse(self) -> list[InlineNode]:
        self._position = 0
        self._group_depth = 0

        return self._parse_sequence(enclosing_marker=None, is_group=False, opening_position=0)

    def _parse_sequence(self, enclosing_marker: Optional[str], is_group: bool,
                        opening_position: int) -> list[InlineNode]:
        text = self._text
        nodes: list[InlineNode] = []
        buffer: list[str] = []

        while self._position < len(text):
            position = self._position
            character = text[position]

            if character == '\\':
                if position + 1 >= len(text):
                    self._raise(DanglingEscapeException, 'dangling backslash at end of text', position)
                buffer.append(text[position + 1])
                self._position += 2
                continue

            if character == '{':
                InlineParser._flush(nodes, buffer)
                InlineParser._extend(nodes, self._parse_group())
                continue

            if character == '}':
                if is_group:
                    InlineParser._flush(nodes, buffer)
                    self._position += 1
                    return nodes

                if self._group_depth > 0:
                    self._raise(
                        UnterminatedSpanException,
                        f'unterminated `{enclosing_marker}` (expected `{enclosing_marker}` before `}}`)',
                        opening_position,
                    )

                buffer.append(character)
                self._position += 1
                continue

            if character in MARKER_CHARACTERS:
                run_end = position
                while run_end < len(text) and text[run_end] == character:
                    run_end += 1
                run = text[position:run_end]

                if run == '^':
                    buffer.append(character)
                    self._position += 1
                    continue

                if character == '_' and self._is_intraword(position, run_end):
                    buffer.append(run)
                    self._position = run_end
                    continue

                if run == enclosing_marker:
                    if self._is_opening_flanked(position, run_end):
                        self._raise(
                            AmbiguousNestingException,
                            f'ambiguous nesting of `{run}` directly inside `{run}` (wrap the inner span in `{{ }}`)',
                            position,
                        )
                    InlineParser._flush(nodes, buffer)
                    return nodes

                if run not in SPAN_CLASS_FROM_MARKER:
                    self._raise(AmbiguousNestingException, f'ambiguous delimiter run `{run}`', position)

                InlineParser._flush(nodes, buffer)
                nodes.append(self._parse_span(run))
                continue

            if character == ':' and not self._follows_alphanumeric(position):
                directive_match = DIRECTIVE_USAGE_PATTERN_COMPILED.match(text, position)
                if directive_match is not None:
                    InlineParser._flush(nodes, buffer)
                    self._position = directive_match.end()
                    nodes.append(self._parse_directive(directive_match.group('directive_name'), position))
                    continue

            buffer.append(character)
            self._position += 1

        if is_group:
            self._raise(UnterminatedSpanException, 'unterminated group (expected `}`)', opening_position)

        if enclosing_marker is not None:
            self._raise(
                UnterminatedSpanException,
                f'unterminated `{enclosing_marker}` (expected closing `{enclosing_marker}`)',
                opening_position,
            )

        InlineParser._flush(nodes, buffer)

        return nodes

    def _parse_span(self, marker: str) -> FormattingSpan:
        opening_position = self._position
        self._position += len(marker)
        children = self._parse_sequence(enclosing_marker=marker, is_group=False, opening_position=opening_position)
        self._position += len(marker)
        parameters = self._parse_trailing_parameters('span')

        return SPAN_CLASS_FROM_MARKER[marker](children, parameters)

    def _parse_group(self) -> list[InlineNode]:
        opening_position = self._position
        self._position += 1
        self._group_depth += 1
        nodes = self._parse_sequence(enclosing_marker=None, is_group=True, opening_position=opening_position)
        self._group_depth -= 1

        return nodes

    def _parse_directive(self, directive_name: str, opening_position: int) -> InlineNode:
        if directive_name == 'ref':
            return Reference(self._parse_trailing_parameters('ref', opening_position))

        if directive_name == 'link':
            parameters = self._parse_trailing_parameters('link', opening_position)
            title = parameters.get('title')
            if title is None:
                return Link(parameters)

            title_line_number = self._compute_line_number(opening_position)
            return Link(parameters, InlineParser(title, title_line_number).parse())

        return Replacement(directive_name)

    def _parse_trailing_parameters(self, directive_name: str, opening_position: Optional[int] = None) -> ParameterSet:
        if opening_position is None:
            opening_position = self._position

        try:
            source, end_position = extract_parameter_source(self._text, self._position)
            parameters = parse_parameters(source, PARAMETER_SCHEMA_FROM_DIRECTIVE[directive_name])
        except ParseException as exception:
            raise exception.locate(self._compute_line_number(opening_position))

        self._position = end_position

        return parameters

    def _is_opening_flanked(self, run_start: int, run_end: int) -> bool:
        text = self._text
        is_preceded_by_whitespace = run_start == 0 or text[run_start - 1].isspace()
        is_followed_by_content = run_end < len(text) and not text[run_end].isspace()

        return is_preceded_by_whitespace and is_followed_by_content

    def _follows_alphanumeric(self, position: int) -> bool:
        return position > 0 and self._text[position - 1].isalnum()

    def _is_intraword(self, run_start: int, run_end: int) -> bool:
        return self._follows_alphanumeric(run_start) and run_end < len(self._text) and self._text[run_end].isalnum()

    def _compute_line_number(self, position: int) -> int:
        return self._line_number + self._text.count('\n', 0, position)

    def _raise(self, exception_class: Type[ParseException], message: str, position: int):
        raise exception_class(message, self._compute_line_number(position))

    @staticmethod
    def _flush(nodes: list[InlineNode], buffer: list[str]):
        if buffer:
            InlineParser._extend(nodes, [Text(''.join(buffer))])
            buffer.clear()

    @staticmethod
    def _extend(nodes: list[InlineNode], new_nodes: list[InlineNode]):
        for node in new_nodes:
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(nodes[-1].content + node.content)
            else:
                nodes.append(node)


def parse_inline(text: str, line_number: int = 1) -> list[InlineNode]:
    """
    Parse inline content.
    """
    return InlineParser(text, line_number).parse()
