"""
# Conlang-Markdown: test_renderer.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `renderer.py`.
"""

import unittest
import warnings

from conlangmd.core import build_document
from conlangmd.exceptions import ConlangMarkdownWarning
from conlangmd.inlines import Text
from conlangmd.renderer import HtmlRenderer, render_inline


def render(clmd: str) -> str:
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', category=ConlangMarkdownWarning)
        document = build_document(clmd)

    return HtmlRenderer(document).render()


class TestInlineRendering(unittest.TestCase):
    def test_text_is_escaped(self):
        self.assertEqual(render_inline([Text('a < b & "c"')]), 'a &lt; b &amp; &quot;c&quot;')

    def test_span_classes(self):
        self.assertEqual(
            render('Normal text, `conlang text` `custom classes`[my-class another-class].'),
            '<p>Normal text, <span class="conlang">conlang text</span> '
            '<span class="my-class another-class">custom classes</span>.</p>\n',
        )

    def test_formatting(self):
        self.assertEqual(
            render('*a* **b** _c_ __d__ ^^e^^ ^^f^^[g] *h*[i]'),
            '<p><em>a</em> <strong>b</strong> <i>c</i> <b>d</b> <span class="small-caps">e</span> '
            '<span class="small-caps g">f</span> <em class="i">h</em></p>\n',
        )

    def test_references(self):
        self.assertEqual(
            render('# Title\n\nSee :ref:[heading-Title, class=x], :ref:[nowhere].'),
            '<h1 id="heading-Title"><span class="secnum">1</span> Title</h1>\n'
            '<p>See <a class="reference x" href="#heading-Title">section 1</a>, '
            '<span class="undefined-reference">#nowhere</span>.</p>\n',
        )
        self.assertEqual(
            render(':toc:[id=contents]\n\n:ref:[contents]').split('\n')[-2],
            '<p><span class="unreferenceable-block">#contents</span></p>',
        )

    def test_replacements(self):
        self.assertEqual(
            render(':replace:\n:name: *Ngatha*\n\nThe :name: language, :other:.'),
            '<p>The <em>Ngatha</em> language, <span class="undefined-replace">:other:</span>.</p>\n',
        )

    def test_links(self):
        self.assertEqual(
            render(':link:[https://example.com/?a=1&b=2, title=*Example*] :link:[https://example.com, external]'),
            '<p><a href="https://example.com/?a=1&amp;b=2"><em>Example</em></a> '
            '<a href="https://example.com" class="external">https://example.com</a></p>\n',
        )


class TestHtmlRenderer(unittest.TestCase):
    def test_empty_document(self):
        self.assertEqual(render(''), '')
        self.assertEqual(render(':replace:\n:a: b\n\n:title: Nothing shown'), '')

    def test_headings(self):
        self.assertEqual(
            render('# Title\n\n#[nonumber, lead] Preface\n\n###### Deep'),
            '<h1 id="heading-Title"><span class="secnum">1</span> Title</h1>\n'
            '<h1 id="heading-Preface" class="lead">Preface</h1>\n'
            '<h6 id="heading-Deep"><span class="secnum">1.0.0.0.0.1</span> Deep</h6>\n',
        )

    def test_list(self):
        self.assertEqual(
            render('- a\n  ! b\n- c'),
            '<ul>\n'
            '<li>a\n'
            '<ol>\n'
            '<li>b</li>\n'
            '</ol>\n'
            '</li>\n'
            '<li>c</li>\n'
            '</ul>\n',
        )

    def test_list_parameters(self):
        self.assertEqual(
            render('-[ordered, id=steps, class=compact] first\n  -[sounds] b\n  - c\n- second'),
            '<ol id="steps" class="compact">\n'
            '<li>first\n'
            '<ul class="sounds">\n'
            '<li>b</li>\n'
            '<li>c</li>\n'
            '</ul>\n'
            '</li>\n'
            '<li>second</li>\n'
            '</ol>\n',
        )

    def test_table_of_contents(self):
        self.assertEqual(
            render(':toc:\n\n# A\n\n## A1\n\n#[nonumber] B').split('\n<h1')[0],
            '<div class="toc"><p class="toc-heading">Table of Contents</p>\n'
            '<ol>\n'
            '<li><a href="#heading-A"><span class="secnum">1</span> A</a>\n'
            '<ol>\n'
            '<li><a href="#heading-A1"><span class="secnum">1.1</span> A1</a></li>\n'
            '</ol>\n'
            '</li>\n'
            '<li class="nonumber"><a href="#heading-B">B</a></li>\n'
            '</ol>\n'
            '</div>',
        )

    def test_empty_table_of_contents(self):
        self.assertEqual(
            render(':toc:[id=contents, wide] Contents'),
            '<div id="contents" class="toc wide"><p class="toc-heading">Contents</p>\n</div>\n',
        )

    def test_table(self):
        self.assertEqual(
            render(':table: Vowels\n::[header] |Front |Back\n:: |i |u'),
            '<table id="table-Vowels">\n'
            '<caption><span class="table-heading-prefix">Table 1:</span> Vowels</caption>\n'
            '<tr><th scope="col">Front</th><th scope="col">Back</th></tr>\n'
            '<tr><td>i</td><td>u</td></tr>\n'
            '</table>\n',
        )

    def test_table_spans(self):
        self.assertEqual(
            render(':table:[nonumber]\n:: |[rows=2, cols=2] a |b\n:: | | |c'),
            '<table id="table-nonumber">\n'
            '<caption><span class="table-heading-prefix">Table:</span></caption>\n'
            '<tr><td rowspan="2" colspan="2">a</td><td>b</td></tr>\n'
            '<tr><td>c</td></tr>\n'
            '</table>\n',
        )

    def test_gloss(self):
        self.assertEqual(
            render(
                ':gloss: Plurals\n'
                '::[nosplit] *Ngatha*\n'
                ':: ta- wuru ngka\n'
                '::[translation] PFX- run here\n'
                '::[nosplit] The dogs run here.'
            ),
            '<div id="gloss-Plurals" class="gloss">'
            '<p class="gloss-heading"><span class="gloss-heading-prefix">Gloss 1:</span> Plurals</p>\n'
            '<p class="preamble"><em>Ngatha</em></p>\n'
            '<div class="gloss-body">'
            '<dl><dt>ta-</dt><dd class="translation">PFX-</dd></dl>'
            '<dl><dt>wuru</dt><dd class="translation">run</dd></dl>'
            ' <dl><dt>ngka</dt><dd class="translation">here</dd></dl>'
            '</div>\n'
            '<p class="postamble">The dogs run here.</p>\n'
            '</div>\n',
        )

    def test_render_standalone(self):
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', category=ConlangMarkdownWarning)
            document = build_document(':title: A <Grammar>\n\n:author: Someone\n\nText.')

        self.assertEqual(
            HtmlRenderer(document).render_standalone(),
            '<!DOCTYPE html>\n'
            '<html lang="en">\n'
            '  <head>\n'
            '    <meta charset="utf-8">\n'
            '    <meta name="viewport" content="width=device-width, initial-scale=1">\n'
            '    <meta name="author" content="Someone">\n'
            '    <title>A &lt;Grammar&gt;</title>\n'
            '  </head>\n'
            '  <body>\n'
            '<p>Text.</p>\n'
            '  </body>\n'
            '</html>\n',
        )

    def test_render_standalone_metadata(self):
        document = build_document(':lang: x-ngatha\n\n:description: A sketch\n\n:stylesheet: style.css')
        standalone_html = HtmlRenderer(document).render_standalone()

        self.assertIn('<html lang="x-ngatha">', standalone_html)
        self.assertIn('<meta name="description" content="A sketch">', standalone_html)
        self.assertIn('<title>Title</title>', standalone_html)
        self.assertIn('<link rel="stylesheet" href="style.css">', standalone_html)


if __name__ == '__main__':
    unittest.main()
