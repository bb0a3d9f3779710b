"""
# Conlang-Markdown: glosses.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Gloss layout.

A gloss consists of
````
«preamble»     (`nosplit` lines)
«split lines»  (aligned word by word)
«postamble»    (`nosplit` lines)
````
Words are aligned into columns, one word from each split line.
Adjacent columns are separated by a space, except where the head (first split) line
has a word ending in `-` followed by a word, or a word followed by a word starting with `-`.
"""

from typing import NamedTuple, Optional

from conlangmd.blocks import Gloss, GlossLine
from conlangmd.exceptions import MisplacedNosplitLineException
from conlangmd.inlines import InlineNode


def tokenize_gloss_line(text: str) -> list[str]:
    """
    Split a gloss line into tokens on whitespace.

    Whitespace inside braces `{...}`, or escaped by a backslash, does not split.
    Braces and backslashes are kept, for the inline parser.
    """
    tokens = []
    token = ''
    depth = 0
    index = 0

    while index < len(text):
        character = text[index]

        if character == '\\':
            token += text[index:index + 2]
            index += 2
            continue

        if character == '{':
            depth += 1
        elif character == '}':
            depth = max(depth - 1, 0)
        elif character.isspace() and depth == 0:
            if token:
                tokens.append(token)
                token = ''
            index += 1
            continue

        token += character
        index += 1

    if token:
        tokens.append(token)

    return tokens


def needs_space_between(left_token: str, right_token: str) -> bool:
    """
    Determine whether a space separates two adjacent gloss words.

    No space if the left word ends with `-` (a prefix) or the right word starts with `-` (a suffix).
    Group braces are ignored.
    """
    if left_token.rstrip('{}').endswith('-'):
        return False

    if right_token.lstrip('{}').startswith('-'):
        return False

    return True


def validate_nosplit_placement(lines: list[GlossLine]):
    """
    Ensure `nosplit` lines are only a prefix and/or a suffix of the gloss lines.
    """
    split_line_indices = [index for index, line in enumerate(lines) if not line.is_nosplit]
    if not split_line_indices:
        return

    first_split_index = split_line_indices[0]
    last_split_index = split_line_indices[-1]

    for line in lines[first_split_index:last_split_index + 1]:
        if line.is_nosplit:
            raise MisplacedNosplitLineException(
                '`nosplit` line between split lines (must come before or after all of them)',
                line.line_number,
            )


class GlossColumn(NamedTuple):
    index: int
    has_space_before: bool
    words: list[Optional[list[InlineNode]]]


class GlossLayout(NamedTuple):
    preamble: list[GlossLine]
    split_lines: list[GlossLine]
    columns: list[GlossColumn]
    postamble: list[GlossLine]


def layout_gloss(gloss: Gloss) -> GlossLayout:
    """
    Compute the word columns of a gloss.

    Lines shorter than the longest split line have no word (None) in the trailing columns.
    """
    lines = gloss.lines
    validate_nosplit_placement(lines)

    split_line_indices = [index for index, line in enumerate(lines) if not line.is_nosplit]
    if not split_line_indices:
        return GlossLayout(preamble=list(lines), split_lines=[], columns=[], postamble=[])

    first_split_index = split_line_indices[0]
    last_split_index = split_line_indices[-1]
    preamble = lines[:first_split_index]
    split_lines = lines[first_split_index:last_split_index + 1]
    postamble = lines[last_split_index + 1:]

    head_tokens = split_lines[0].raw_tokens
    column_count = max(len(line.words) for line in split_lines)

    columns = []
    for index in range(column_count):
        if index == 0:
            has_space_before = False
        elif index < len(head_tokens):
            has_space_before = needs_space_between(head_tokens[index - 1], head_tokens[index])
        else:
            has_space_before = True

        words = [
            line.words[index] if index < len(line.words) else None
            for line in split_lines
        ]
        columns.append(GlossColumn(index, has_space_before, words))

    return GlossLayout(preamble, split_lines, columns, postamble)
