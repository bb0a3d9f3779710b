"""
# Conlang-Markdown: test_contents.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `contents.py`.
"""

import unittest

from conlangmd.block_parser import parse_block
from conlangmd.contents import build_contents_tree
from conlangmd.segmenter import segment_blocks, split_lines


def parse_headings(clmd: str):
    return [parse_block(raw_block) for raw_block in segment_blocks(split_lines(clmd))]


def summarise(entries):
    return [
        (entry.heading.level, summarise(entry.children))
        for entry in entries
    ]


class TestContents(unittest.TestCase):
    def test_build_contents_tree(self):
        headings = parse_headings('# A\n\n## A1\n\n### A1a\n\n##[notoc] Hidden\n\n# B\n\n### B deep')

        entries = build_contents_tree(headings, max_level=6)
        self.assertEqual(
            summarise(entries),
            [
                (1, [(2, [(3, [])])]),
                (1, [(3, [])]),
            ],
        )
        self.assertEqual(entries[1].children[0].heading, headings[5])

    def test_max_level(self):
        headings = parse_headings('# A\n\n## A1\n\n### A1a\n\n# B')

        self.assertEqual(
            summarise(build_contents_tree(headings, max_level=2)),
            [(1, [(2, [])]), (1, [])],
        )
        self.assertEqual(summarise(build_contents_tree(headings, max_level=1)), [(1, []), (1, [])])

    def test_starting_below_top_level(self):
        headings = parse_headings('### Deep\n\n# Shallow\n\n## Middle')

        self.assertEqual(
            summarise(build_contents_tree(headings, max_level=6)),
            [(3, []), (1, [(2, [])])],
        )

    def test_empty(self):
        self.assertEqual(build_contents_tree([], max_level=6), [])


if __name__ == '__main__':
    unittest.main()
