"""
# Conlang-Markdown: test_block_parser.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `block_parser.py`.
"""

import unittest

from conlangmd.block_parser import parse_block
from conlangmd.blocks import (
    BulletOrNumberedList,
    DocumentControl,
    Gloss,
    Heading,
    Paragraph,
    ReplacementDefinitionSet,
    Table,
    TableOfContents,
)
from conlangmd.exceptions import (
    AmbiguousIndentException,
    DuplicateReplacementException,
    HeadingLevelTooDeepException,
    InvalidParameterValueException,
    MalformedBlockException,
    MisplacedNosplitLineException,
    UnknownParameterException,
    UnterminatedSpanException,
)
from conlangmd.inlines import Emphasis, Replacement, Text
from conlangmd.segmenter import RawBlock


def parse_lines(*lines: str, start_line_number: int = 1):
    return parse_block(RawBlock(tuple(lines), start_line_number))


class TestBlockParser(unittest.TestCase):
    def test_paragraph(self):
        paragraph = parse_lines('Some *text*', 'over two lines.')
        self.assertIsInstance(paragraph, Paragraph)
        self.assertEqual(
            paragraph.content,
            [Text('Some '), Emphasis([Text('text')]), Text('\nover two lines.')],
        )

        self.assertIsInstance(parse_lines(':name: is a replacement'), Paragraph)
        self.assertIsInstance(parse_lines('#hashtag'), Paragraph)
        self.assertIsInstance(parse_lines('-5 degrees'), Paragraph)

    def test_heading(self):
        heading = parse_lines('## Sound Changes')
        self.assertIsInstance(heading, Heading)
        self.assertEqual(heading.level, 2)
        self.assertEqual(heading.title, [Text('Sound Changes')])
        self.assertTrue(heading.is_numbered)
        self.assertTrue(heading.is_in_contents)

        flagged_heading = parse_lines('#[nonumber, notoc, id=intro, lead] Introduction')
        self.assertFalse(flagged_heading.is_numbered)
        self.assertFalse(flagged_heading.is_in_contents)
        self.assertEqual(flagged_heading.explicit_id, 'intro')
        self.assertEqual(flagged_heading.class_names, ('lead',))

        self.assertEqual(parse_lines('######').title, [])
        self.assertRaises(HeadingLevelTooDeepException, parse_lines, '####### Too deep')

    def test_table_of_contents(self):
        table_of_contents = parse_lines(':toc:')
        self.assertIsInstance(table_of_contents, TableOfContents)
        self.assertEqual(table_of_contents.title, [Text('Table of Contents')])
        self.assertEqual(table_of_contents.max_level, 6)

        custom_table_of_contents = parse_lines(':toc:[maxlevel=2] Contents')
        self.assertEqual(custom_table_of_contents.title, [Text('Contents')])
        self.assertEqual(custom_table_of_contents.max_level, 2)

        with self.assertRaises(InvalidParameterValueException) as context:
            parse_lines(':toc:[maxlevel=9]', start_line_number=4)
        self.assertEqual(context.exception.line_number, 4)

    def test_table(self):
        table = parse_lines(
            ':table:[nonumber] Vowels',
            '|[header] |',
            '::[header] | |Front |Back',
            ':: |High |i |u',
            '::[low] Low |[cols=2] a',
        )
        self.assertIsInstance(table, Table)
        self.assertFalse(table.is_numbered)
        self.assertEqual(table.title, [Text('Vowels')])

        self.assertEqual(len(table.columns), 2)
        self.assertTrue(table.columns[0].is_header)
        self.assertFalse(table.columns[1].is_header)

        self.assertEqual(len(table.rows), 3)
        header_row, high_row, low_row = table.rows
        self.assertTrue(header_row.is_header)
        self.assertEqual(len(header_row.cells), 3)
        self.assertTrue(header_row.cells[0].is_blank)
        self.assertEqual(header_row.cells[1].content, [Text('Front')])

        self.assertEqual([cell.content for cell in high_row.cells], [[Text('High')], [Text('i')], [Text('u')]])
        self.assertEqual(high_row.line_number, 4)

        self.assertEqual(low_row.class_names, ('low',))
        self.assertEqual(low_row.cells[0].content, [Text('Low')])
        self.assertEqual(low_row.cells[1].column_span, 2)
        self.assertFalse(low_row.cells[1].is_blank)

    def test_table_trailing_pipe(self):
        table = parse_lines(':table:', ':: |a |b |')
        self.assertEqual(len(table.rows[0].cells), 2)

    def test_table_errors(self):
        self.assertRaises(MalformedBlockException, parse_lines, ':table:', '|[header]', '|[header]')
        self.assertRaises(MalformedBlockException, parse_lines, ':table:', 'stray text')
        self.assertRaises(MalformedBlockException, parse_lines, ':table:', '|[header] content')

        with self.assertRaises(InvalidParameterValueException) as context:
            parse_lines(':table:', ':: |a', ':: |[rows=x] b', start_line_number=5)
        self.assertEqual(context.exception.line_number, 7)

    def test_gloss(self):
        gloss = parse_lines(
            ':gloss: Plurals',
            '::[nosplit] *Ngatha*',
            ':: ngatha-{ma ra} wuru',
            '   -ta',
            '::[translation] dog-PL run',
            '::[nosplit] The dogs run.',
        )
        self.assertIsInstance(gloss, Gloss)
        self.assertEqual(gloss.title, [Text('Plurals')])
        self.assertEqual(len(gloss.lines), 4)

        preamble_line, head_line, translation_line, postamble_line = gloss.lines
        self.assertTrue(preamble_line.is_nosplit)
        self.assertEqual(preamble_line.content, [Emphasis([Text('Ngatha')])])
        self.assertEqual(head_line.raw_tokens, ['ngatha-{ma ra}', 'wuru', '-ta'])
        self.assertEqual(head_line.words[0], [Text('ngatha-ma ra')])
        self.assertEqual(translation_line.class_names, ('translation',))
        self.assertEqual(len(translation_line.words), 2)
        self.assertTrue(postamble_line.is_nosplit)

    def test_gloss_misplaced_nosplit(self):
        with self.assertRaises(MisplacedNosplitLineException) as context:
            parse_lines(':gloss:', ':: a b', '::[nosplit] free', ':: c d', start_line_number=10)
        self.assertEqual(context.exception.line_number, 12)

    def test_replacement_definitions(self):
        definition_set = parse_lines(
            ':replace:',
            ':name: *Ngatha*',
            ':tongue: the :name:',
            '  language',
        )
        self.assertIsInstance(definition_set, ReplacementDefinitionSet)
        name_definition, tongue_definition = definition_set.definitions
        self.assertEqual(name_definition.identifier, 'name')
        self.assertEqual(name_definition.content, [Emphasis([Text('Ngatha')])])
        self.assertEqual(name_definition.line_number, 2)
        self.assertEqual(tongue_definition.content, [Text('the '), Replacement('name'), Text('\nlanguage')])

    def test_replacement_definition_errors(self):
        self.assertRaises(DuplicateReplacementException, parse_lines, ':replace:', ':a: x', ':a: y')
        self.assertRaises(MalformedBlockException, parse_lines, ':replace:', ':ref: x')
        self.assertRaises(MalformedBlockException, parse_lines, ':replace:', ':title: Ngatha')
        self.assertRaises(MalformedBlockException, parse_lines, ':replace:', ':lang: Ngatha')
        self.assertRaises(MalformedBlockException, parse_lines, ':replace:', ':gloss: x')
        self.assertRaises(MalformedBlockException, parse_lines, ':replace:', 'no definition')

    def test_document_control(self):
        control = parse_lines(':title: A Grammar of', 'Ngatha')
        self.assertIsInstance(control, DocumentControl)
        self.assertEqual(control.name, 'title')
        self.assertEqual(control.value, 'A Grammar of\nNgatha')

    def test_list(self):
        bullet_list = parse_lines(
            '- first',
            '  continued',
            '- second',
            '  ! nested one',
            '  ! nested two',
            '- third',
        )
        self.assertIsInstance(bullet_list, BulletOrNumberedList)
        self.assertFalse(bullet_list.is_ordered)
        self.assertEqual(len(bullet_list.items), 3)

        first_item, second_item, third_item = bullet_list.items
        self.assertEqual(first_item.content, [Text('first\ncontinued')])
        self.assertIsNone(first_item.sublist)
        self.assertTrue(second_item.sublist.is_ordered)
        self.assertEqual([item.content for item in second_item.sublist.items], [[Text('nested one')], [Text('nested two')]])
        self.assertEqual(third_item.line_number, 6)

        numbered_list = parse_lines('! a', '    - deep', '! b')
        self.assertTrue(numbered_list.is_ordered)
        self.assertEqual(len(numbered_list.items[0].sublist.items), 1)

    def test_list_parameters(self):
        bullet_list = parse_lines('-[ordered, id=steps, compact] first', '  ![class=inner] nested', '- second')
        self.assertTrue(bullet_list.is_ordered)
        self.assertEqual(bullet_list.explicit_id, 'steps')
        self.assertEqual(bullet_list.class_names, ('compact',))
        self.assertEqual(bullet_list.items[0].content, [Text('first')])

        sublist = bullet_list.items[0].sublist
        self.assertEqual(sublist.class_names, ('inner',))
        self.assertIsNone(sublist.explicit_id)
        self.assertEqual(list(bullet_list.sublists()), [sublist])

        bracketed_list = parse_lines('- [citation needed]')
        self.assertTrue(bracketed_list.parameters.is_empty())
        self.assertEqual(bracketed_list.items[0].content, [Text('[citation needed]')])

    def test_list_parameter_errors(self):
        with self.assertRaises(MalformedBlockException) as context:
            parse_lines('- a', '-[class=x] b', start_line_number=7)
        self.assertEqual(context.exception.line_number, 8)

        with self.assertRaises(UnknownParameterException) as context:
            parse_lines('- a', '  -[maxlevel=2] b', start_line_number=3)
        self.assertEqual(context.exception.line_number, 4)

    def test_list_ambiguous_indentation(self):
        with self.assertRaises(AmbiguousIndentException) as context:
            parse_lines('- a', ' - b', start_line_number=3)
        self.assertEqual(context.exception.line_number, 4)

        self.assertRaises(AmbiguousIndentException, parse_lines, '- a', '\t- b')
        self.assertRaises(AmbiguousIndentException, parse_lines, '- a', '    - b', '  - c')
        self.assertRaises(AmbiguousIndentException, parse_lines, '  - a', '- b')

    def test_inline_errors_are_located(self):
        with self.assertRaises(UnterminatedSpanException) as context:
            parse_lines('# Title', 'more *title', start_line_number=20)
        self.assertEqual(context.exception.line_number, 21)


if __name__ == '__main__':
    unittest.main()
