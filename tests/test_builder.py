"""
# Conlang-Markdown: test_builder.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `builder.py`.
"""

import contextlib
import io
import unittest
import warnings

from conlangmd.block_parser import parse_block
from conlangmd.builder import CounterState, DocumentBuilder
from conlangmd.exceptions import ConlangMarkdownWarning, DuplicateIdException, FrozenMutateException
from conlangmd.glosses import GlossLayout
from conlangmd.references import Symbol
from conlangmd.segmenter import segment_blocks, split_lines


def build(clmd: str, verbose_mode_enabled: bool = False) -> DocumentBuilder:
    builder = DocumentBuilder(verbose_mode_enabled=verbose_mode_enabled)

    with warnings.catch_warnings():
        warnings.simplefilter('ignore', category=ConlangMarkdownWarning)
        for raw_block in segment_blocks(split_lines(clmd)):
            builder.add_block(parse_block(raw_block))

    return builder


class TestCounterState(unittest.TestCase):
    def test_advance_heading(self):
        counter_state = CounterState()

        self.assertEqual(counter_state.advance_heading(1), '1')
        self.assertEqual(counter_state.advance_heading(2), '1.1')
        self.assertEqual(counter_state.advance_heading(2), '1.2')
        self.assertEqual(counter_state.advance_heading(3), '1.2.1')
        self.assertEqual(counter_state.advance_heading(1), '2')
        self.assertEqual(counter_state.advance_heading(2), '2.1')
        self.assertEqual(counter_state.heading_counters, (2, 1, 0, 0, 0, 0))

    def test_advance_table_and_gloss(self):
        counter_state = CounterState()

        self.assertEqual(counter_state.advance_table(), '1')
        self.assertEqual(counter_state.advance_gloss(), '1')
        self.assertEqual(counter_state.advance_table(), '2')
        self.assertEqual(counter_state.heading_counters, (0, 0, 0, 0, 0, 0))


class TestDocumentBuilder(unittest.TestCase):
    def test_heading_numbers_and_ids(self):
        document = build('# Title\n\n## Sub\n\n# Title\n\n#[nonumber] Preface\n\n## Sub').document
        first_title, first_sub, second_title, preface, second_sub = document.blocks

        self.assertEqual(first_title.id_, 'heading-Title')
        self.assertEqual(second_title.id_, 'heading-Title-1')
        self.assertEqual(first_sub.id_, 'heading-Sub')
        self.assertEqual(second_sub.id_, 'heading-Sub-1')

        self.assertEqual(first_title.number_text, '1')
        self.assertEqual(first_sub.number_text, '1.1')
        self.assertEqual(second_title.number_text, '2')
        self.assertIsNone(preface.number_text)
        self.assertEqual(preface.id_, 'heading-Preface')
        self.assertEqual(second_sub.number_text, '2.1')

        symbol_master = document.symbol_master
        self.assertTrue(symbol_master.has_id('heading-Title'))
        self.assertTrue(symbol_master.has_id('heading-Title-1'))
        self.assertEqual(symbol_master.load_symbol('heading-Preface').is_numbered, False)
        self.assertEqual(symbol_master.load_symbol('heading-Sub-1').number_text, '2.1')

    def test_default_ids_without_title(self):
        document = build(':table:\n\n:table:[nonumber]\n\n:gloss:\n\n:table:').document
        self.assertEqual(
            [block.id_ for block in document.blocks],
            ['table-1', 'table-nonumber', 'gloss-1', 'table-2'],
        )

    def test_default_id_from_formatted_title(self):
        document = build('# The *Sound*\n  Changes').document
        self.assertEqual(document.blocks[0].id_, 'heading-The-Sound-Changes')

    def test_default_id_expands_earlier_replacements(self):
        clmd = ':replace:\n:n: *Ngatha*\n:full: the :n: language\n\n# About :full:\n\n# Using :later:'
        document = build(clmd).document

        self.assertEqual(document.blocks[1].id_, 'heading-About-the-Ngatha-language')
        self.assertEqual(document.blocks[2].id_, 'heading-Using-later')

    def test_default_id_with_replacement_cycle(self):
        document = build(':replace:\n:a: x :b:\n:b: y :a:\n\n# :a:').document
        self.assertEqual(document.blocks[1].id_, 'heading-x-y-a')

    def test_explicit_ids(self):
        document = build('#[id=intro] Introduction\n\n:table:[id=vowels] Vowels\n\n:toc:[id=contents]').document

        self.assertEqual([block.id_ for block in document.blocks], ['intro', 'vowels', 'contents'])
        self.assertEqual(document.symbol_master.load_symbol('contents').kind, 'toc')
        self.assertFalse(document.has_errors)

    def test_list_ids(self):
        document = build('-[id=steps] a\n  -[id=substeps] b\n\n# Title\n\n-[id=steps] c').document
        first_list, _, second_list = document.blocks

        self.assertEqual(first_list.id_, 'steps')
        self.assertEqual(first_list.items[0].sublist.id_, 'substeps')
        self.assertEqual(document.symbol_master.load_symbol('substeps').kind, 'list')
        self.assertFalse(document.symbol_master.load_symbol('steps').is_numbered)

        self.assertEqual(len(document.errors), 1)
        self.assertIsInstance(document.errors[0], DuplicateIdException)
        self.assertEqual(document.errors[0].line_number, 6)
        self.assertEqual(second_list.id_, 'steps')

    def test_table_of_contents_without_id(self):
        document = build(':toc:').document
        self.assertIsNone(document.blocks[0].id_)
        self.assertEqual(document.symbol_master.symbols(), [])

    def test_duplicate_explicit_id(self):
        document = build('# Title\n\n#[id=heading-Title] Other').document

        self.assertEqual(len(document.errors), 1)
        self.assertIsInstance(document.errors[0], DuplicateIdException)
        self.assertEqual(document.errors[0].line_number, 3)
        self.assertEqual(document.blocks[1].id_, 'heading-Title')

    def test_default_id_avoids_explicit_id(self):
        document = build('#[id=heading-Title] First\n\n# Title').document

        self.assertEqual(document.blocks[1].id_, 'heading-Title-1')
        self.assertFalse(document.has_errors)

    def test_replacements_and_metadata(self):
        document = build(':replace:\n:name: Ngatha\n\n:title: A Grammar\n\n:lang: x-ngatha').document

        self.assertTrue(document.replacement_master.has_identifier('name'))
        self.assertEqual(document.get_metadata('title'), 'A Grammar')
        self.assertEqual(document.get_metadata('lang'), 'x-ngatha')
        self.assertIsNone(document.get_metadata('author'))

    def test_layouts(self):
        document = build(':table:\n:: |a\n\n:gloss:\n:: a b\n:: c d').document
        table, gloss = document.blocks

        self.assertEqual(len(table.layout), 1)
        self.assertIsInstance(gloss.layout, GlossLayout)
        self.assertEqual(len(gloss.layout.columns), 2)

    def test_table_layout_warnings_recorded(self):
        document = build(':table:\n:: |[rows=2] a\n:: |b').document
        self.assertEqual(len(document.warnings), 1)

    def test_finish(self):
        builder = build('# Title')
        document = builder.finish()

        self.assertTrue(document.symbol_master.is_frozen)
        self.assertRaises(
            FrozenMutateException,
            document.symbol_master.store_symbol, Symbol('x', 'heading', None, False, 1),
        )

    def test_verbose_mode(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            build('# Title', verbose_mode_enabled=True)

        self.assertIn('BLOCK heading (line 1)', output.getvalue())
        self.assertIn('id: heading-Title', output.getvalue())
        self.assertNotIn('SYMBOLS', output.getvalue())

    def test_verbose_mode_symbol_table(self):
        with contextlib.redirect_stdout(io.StringIO()):
            builder = build('# Title\n\n:table:[nonumber] Vowels', verbose_mode_enabled=True)

        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            builder.finish()

        self.assertIn('SYMBOLS (2)', output.getvalue())
        self.assertIn('heading-Title: heading 1 (line 1)', output.getvalue())
        self.assertIn('table-Vowels: table None (line 3)', output.getvalue())


if __name__ == '__main__':
    unittest.main()
