"""
# Conlang-Markdown: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

CLMD_FILE_EXTENSION = '.clmd'

MAX_HEADING_LEVEL = 6
DEFAULT_TOC_MAX_LEVEL = 6
DEFAULT_TOC_TITLE = 'Table of Contents'
DEFAULT_DOCUMENT_TITLE = 'Title'
DEFAULT_DOCUMENT_LANG = 'en'

DEFAULT_SPAN_CLASS = 'conlang'
SMALL_CAPS_CLASS = 'small-caps'
REFERENCE_CLASS = 'reference'
UNDEFINED_REFERENCE_CLASS = 'undefined-reference'
UNREFERENCEABLE_BLOCK_CLASS = 'unreferenceable-block'
UNDEFINED_REPLACEMENT_CLASS = 'undefined-replace'
REPLACEMENT_CYCLE_CLASS = 'replacement-cycle'

VIEWPORT_CONTENT = 'width=device-width, initial-scale=1'

BLOCK_DIRECTIVE_NAMES = (
    'toc',
    'table',
    'gloss',
    'replace',
)
CONTROL_DIRECTIVE_NAMES = (
    'title',
    'author',
    'description',
    'stylesheet',
    'lang',
)
INLINE_DIRECTIVE_NAMES = (
    'ref',
    'link',
)

KIND_WORD_FROM_KIND = {
    'heading': 'section',
    'table': 'table',
    'gloss': 'gloss',
}
HEADING_PREFIX_FROM_KIND = {
    'table': 'Table',
    'gloss': 'Gloss',
}

CLMD_SYNTAX_HELP = '''\
In CLMD, blocks are separated by whitespace-only lines.
The first line of a block determines its kind:
(1) a heading (`#` to `######`, then `[«parameters»]` and/or whitespace);
(2) a table of contents (`:toc:`);
(3) a table (`:table:`), with rows `::[«parameters»] |[«parameters»] «cell» [...]`
    and at most one column specification `|[«parameters»] [...]`;
(4) a gloss (`:gloss:`), with lines `::[«parameters»] «words»`;
(5) replacement definitions (`:replace:`), with lines `:«identifier»: «content»`;
(6) document control (`:title:`, `:author:`, `:description:`, `:stylesheet:`, `:lang:`);
(7) a list (`- «item»` for bullets, `! «item»` for numbers, `-[«parameters»] «item»` on the first item),
    nested by indenting at least two spaces deeper;
(8) anything else is a paragraph.
Inline formatting: `*em*`, `**strong**`, `_italic_`, `__bold__`, `^^small caps^^`, `` `span` ``,
`:«identifier»:` for replacements, `:ref:[«id»]`, `:link:[«url», title=«text»]`.
Wrap a span in `{ }` to nest it inside a span with the same delimiter.
Underscores inside a word are literal; a backslash makes any other delimiter literal (`\\*`).
'''
