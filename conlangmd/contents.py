"""
# Conlang-Markdown: contents.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Table of contents building.
"""

from typing import NamedTuple

from conlangmd.blocks import Heading


class ContentsEntry(NamedTuple):
    heading: Heading
    children: list['ContentsEntry']


def build_contents_tree(headings: list[Heading], max_level: int) -> list['ContentsEntry']:
    """
    Build the tree of headings listed in a table of contents.

    Headings flagged `notoc`, or deeper than `max_level`, are left out.
    A heading is nested under the closest preceding listed heading of a shallower level.
    """
    root_entries: list[ContentsEntry] = []
    open_entries: list[ContentsEntry] = []

    for heading in headings:
        if not heading.is_in_contents or heading.level > max_level:
            continue

        entry = ContentsEntry(heading, [])

        while open_entries and open_entries[-1].heading.level >= heading.level:
            open_entries.pop()

        if open_entries:
            open_entries[-1].children.append(entry)
        else:
            root_entries.append(entry)

        open_entries.append(entry)

    return root_entries
