"""
# Conlang-Markdown: segmenter.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Block segmentation.
"""

import re
from typing import Iterable, NamedTuple


class RawBlock(NamedTuple):
    lines: tuple[str, ...]
    start_line_number: int

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)


def is_whitespace_only(line: str) -> bool:
    return re.fullmatch(pattern=r'[\s]*', string=line) is not None


def split_lines(text: str) -> list[str]:
    """
    Split text into lines, normalising CRLF and CR line endings.
    """
    text = text.replace('\r\n', '\n').replace('\r', '\n')

    return text.split('\n')


def segment_blocks(lines: Iterable[str]) -> list[RawBlock]:
    """
    Segment lines into blocks separated by whitespace-only lines.

    Line numbers are 1-based.
    Trailing line endings on individual lines are stripped.
    """
    blocks = []
    current_lines: list[str] = []
    start_line_number = 0

    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip('\r\n')

        if is_whitespace_only(line):
            if current_lines:
                blocks.append(RawBlock(tuple(current_lines), start_line_number))
                current_lines = []
            continue

        if not current_lines:
            start_line_number = line_number
        current_lines.append(line)

    if current_lines:
        blocks.append(RawBlock(tuple(current_lines), start_line_number))

    return blocks
