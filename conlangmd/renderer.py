"""
# Conlang-Markdown: renderer.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

HTML rendering of a built and resolved document.
"""

from typing import Optional

from conlangmd.bases import Block
from conlangmd.blocks import (
    BulletOrNumberedList,
    Gloss,
    GlossLine,
    Heading,
    LaidOutBlock,
    Paragraph,
    Table,
    TableOfContents,
)
from conlangmd.constants import (
    DEFAULT_DOCUMENT_LANG,
    DEFAULT_DOCUMENT_TITLE,
    HEADING_PREFIX_FROM_KIND,
    REFERENCE_CLASS,
    REPLACEMENT_CYCLE_CLASS,
    UNDEFINED_REFERENCE_CLASS,
    UNDEFINED_REPLACEMENT_CLASS,
    UNREFERENCEABLE_BLOCK_CLASS,
    VIEWPORT_CONTENT,
)
from conlangmd.contents import ContentsEntry, build_contents_tree
from conlangmd.document import Document
from conlangmd.glosses import GlossLayout
from conlangmd.idioms import build_attributes_sequence, build_class_value
from conlangmd.inlines import (
    REFERENCE_RESOLVED,
    REFERENCE_UNREFERENCEABLE,
    REPLACEMENT_CYCLIC,
    REPLACEMENT_EXPANDED,
    FormattingSpan,
    InlineNode,
    Link,
    Reference,
    Replacement,
    Text,
)
from conlangmd.tables import LaidOutRow, PlacedCell
from conlangmd.utilities import escape_html, merge_class_names


def render_inline(nodes: list[InlineNode]) -> str:
    return ''.join(render_inline_node(node) for node in nodes)


def render_marker(class_name: str, marker_text: str) -> str:
    return f'<span class="{class_name}">{escape_html(marker_text)}</span>'


def render_inline_node(node: InlineNode) -> str:
    if isinstance(node, Text):
        return escape_html(node.content)

    if isinstance(node, FormattingSpan):
        attributes_sequence = build_attributes_sequence({'class': build_class_value(node.compute_class_names())})
        return f'<{node.tag_name}{attributes_sequence}>{render_inline(node.children)}</{node.tag_name}>'

    if isinstance(node, Reference):
        resolution = node.resolution
        if resolution is None or resolution.status not in (REFERENCE_RESOLVED, REFERENCE_UNREFERENCEABLE):
            return render_marker(UNDEFINED_REFERENCE_CLASS, f'#{node.target_id}')
        if resolution.status == REFERENCE_UNREFERENCEABLE:
            return render_marker(UNREFERENCEABLE_BLOCK_CLASS, f'#{node.target_id}')

        attributes_sequence = build_attributes_sequence({
            'class': build_class_value(merge_class_names([REFERENCE_CLASS], node.parameters.class_names)),
            'href': f'#{node.target_id}',
        })
        return f'<a{attributes_sequence}>{escape_html(resolution.text)}</a>'

    if isinstance(node, Replacement):
        if node.status == REPLACEMENT_EXPANDED:
            return render_inline(node.expansion or [])
        if node.status == REPLACEMENT_CYCLIC:
            return render_marker(REPLACEMENT_CYCLE_CLASS, f':{node.identifier}:')
        return render_marker(UNDEFINED_REPLACEMENT_CLASS, f':{node.identifier}:')

    if isinstance(node, Link):
        attributes_sequence = build_attributes_sequence({
            'href': node.url,
            'class': build_class_value(node.parameters.class_names),
        })
        if node.title is None:
            content = escape_html(node.url)
        else:
            content = render_inline(node.title)
        return f'<a{attributes_sequence}>{content}</a>'

    raise TypeError(f'error: unrenderable inline node {node!r}')


class HtmlRenderer:
    """
    Object rendering a document as an HTML fragment, or as a standalone HTML document.
    """
    _document: Document

    def __init__(self, document: Document):
        self._document = document

    def render(self) -> str:
        rendered_blocks = []
        for block in self._document.blocks:
            html = self.render_block(block)
            if html is not None:
                rendered_blocks.append(html)

        return '\n'.join(rendered_blocks) + '\n' if rendered_blocks else ''

    def render_standalone(self) -> str:
        """
        Render a standalone HTML document, using document control values for the head.
        """
        document = self._document
        lang = document.get_metadata('lang') or DEFAULT_DOCUMENT_LANG
        title = document.get_metadata('title') or DEFAULT_DOCUMENT_TITLE
        author = document.get_metadata('author')
        description = document.get_metadata('description')
        stylesheet = document.get_metadata('stylesheet')

        head_lines = [
            '<meta charset="utf-8">',
            f'<meta name="viewport" content="{VIEWPORT_CONTENT}">',
        ]
        if author:
            head_lines.append(f'<meta{build_attributes_sequence({"name": "author", "content": author})}>')
        if description:
            head_lines.append(f'<meta{build_attributes_sequence({"name": "description", "content": description})}>')
        head_lines.append(f'<title>{escape_html(title)}</title>')
        if stylesheet:
            head_lines.append(f'<link{build_attributes_sequence({"rel": "stylesheet", "href": stylesheet})}>')

        head = ''.join(f'    {head_line}\n' for head_line in head_lines)

        return (
            '<!DOCTYPE html>\n'
            f'<html{build_attributes_sequence({"lang": lang})}>\n'
            '  <head>\n'
            f'{head}'
            '  </head>\n'
            '  <body>\n'
            f'{self.render()}'
            '  </body>\n'
            '</html>\n'
        )

    def render_block(self, block: Block) -> Optional[str]:
        """
        Render a block, or return None for blocks without output (definitions and document control).
        """
        if isinstance(block, Heading):
            return self.render_heading(block)
        if isinstance(block, Paragraph):
            return f'<p>{render_inline(block.content)}</p>'
        if isinstance(block, BulletOrNumberedList):
            return self.render_list(block)
        if isinstance(block, TableOfContents):
            return self.render_table_of_contents(block)
        if isinstance(block, Table):
            return self.render_table(block)
        if isinstance(block, Gloss):
            return self.render_gloss(block)

        return None

    @staticmethod
    def render_heading(heading: Heading) -> str:
        tag_name = f'h{heading.level}'
        attributes_sequence = build_attributes_sequence({
            'id': heading.id_,
            'class': build_class_value(heading.class_names),
        })

        if heading.number_text is None:
            section_number = ''
        else:
            section_number = f'<span class="secnum">{heading.number_text}</span> '

        return f'<{tag_name}{attributes_sequence}>{section_number}{render_inline(heading.title)}</{tag_name}>'

    @staticmethod
    def render_list(bullet_or_numbered_list: BulletOrNumberedList) -> str:
        tag_name = 'ol' if bullet_or_numbered_list.is_ordered else 'ul'
        attributes_sequence = build_attributes_sequence({
            'id': bullet_or_numbered_list.id_,
            'class': build_class_value(bullet_or_numbered_list.class_names),
        })
        lines = [f'<{tag_name}{attributes_sequence}>']

        for item in bullet_or_numbered_list.items:
            content = render_inline(item.content)
            if item.sublist is None:
                lines.append(f'<li>{content}</li>')
            else:
                lines.append(f'<li>{content}')
                lines.append(HtmlRenderer.render_list(item.sublist))
                lines.append('</li>')

        lines.append(f'</{tag_name}>')

        return '\n'.join(lines)

    def render_table_of_contents(self, table_of_contents: TableOfContents) -> str:
        attributes_sequence = build_attributes_sequence({
            'id': table_of_contents.id_,
            'class': build_class_value(merge_class_names(['toc'], table_of_contents.class_names)),
        })
        lines = [
            f'<div{attributes_sequence}>'
            f'<p class="toc-heading">{render_inline(table_of_contents.title)}</p>'
        ]

        entries = build_contents_tree(self._document.headings(), table_of_contents.max_level)
        if entries:
            lines.append(HtmlRenderer.render_contents_entries(entries))

        lines.append('</div>')

        return '\n'.join(lines)

    @staticmethod
    def render_contents_entries(entries: list[ContentsEntry]) -> str:
        lines = ['<ol>']

        for entry in entries:
            heading = entry.heading
            if heading.number_text is None:
                opening_tag = '<li class="nonumber">'
                section_number = ''
            else:
                opening_tag = '<li>'
                section_number = f'<span class="secnum">{heading.number_text}</span> '

            link = (
                f'<a{build_attributes_sequence({"href": f"#{heading.id_}"})}>'
                f'{section_number}{render_inline(heading.title)}</a>'
            )

            if entry.children:
                lines.append(f'{opening_tag}{link}')
                lines.append(HtmlRenderer.render_contents_entries(entry.children))
                lines.append('</li>')
            else:
                lines.append(f'{opening_tag}{link}</li>')

        lines.append('</ol>')

        return '\n'.join(lines)

    @staticmethod
    def render_block_heading_prefix(block: LaidOutBlock) -> str:
        prefix = HEADING_PREFIX_FROM_KIND[block.kind]
        if block.number_text is not None:
            prefix = f'{prefix} {block.number_text}'

        title = render_inline(block.title)
        heading_prefix = f'<span class="{block.kind}-heading-prefix">{prefix}:</span>'
        if title == '':
            return heading_prefix

        return f'{heading_prefix} {title}'

    @staticmethod
    def render_table(table: Table) -> str:
        attributes_sequence = build_attributes_sequence({
            'id': table.id_,
            'class': build_class_value(table.class_names),
        })
        lines = [
            f'<table{attributes_sequence}>',
            f'<caption>{HtmlRenderer.render_block_heading_prefix(table)}</caption>',
        ]

        laid_out_rows: list[LaidOutRow] = table.layout or []
        for laid_out_row in laid_out_rows:
            row_attributes_sequence = build_attributes_sequence({
                'class': build_class_value(laid_out_row.row.class_names),
            })
            cells = ''.join(HtmlRenderer.render_table_cell(placed_cell) for placed_cell in laid_out_row.placed_cells)
            lines.append(f'<tr{row_attributes_sequence}>{cells}</tr>')

        lines.append('</table>')

        return '\n'.join(lines)

    @staticmethod
    def render_table_cell(placed_cell: PlacedCell) -> str:
        tag_name = 'th' if placed_cell.is_header else 'td'
        attributes_sequence = build_attributes_sequence({
            'scope': placed_cell.scope,
            'rowspan': str(placed_cell.row_span) if placed_cell.row_span > 1 else None,
            'colspan': str(placed_cell.column_span) if placed_cell.column_span > 1 else None,
            'class': build_class_value(placed_cell.class_names),
        })

        return f'<{tag_name}{attributes_sequence}>{render_inline(placed_cell.cell.content)}</{tag_name}>'

    @staticmethod
    def render_gloss(gloss: Gloss) -> str:
        attributes_sequence = build_attributes_sequence({
            'id': gloss.id_,
            'class': build_class_value(merge_class_names(['gloss'], gloss.class_names)),
        })
        lines = [
            f'<div{attributes_sequence}>'
            f'<p class="gloss-heading">{HtmlRenderer.render_block_heading_prefix(gloss)}</p>'
        ]

        layout: Optional[GlossLayout] = gloss.layout
        if layout is not None:
            for line in layout.preamble:
                lines.append(HtmlRenderer.render_nosplit_line(line, 'preamble'))

            if layout.columns:
                lines.append(f'<div class="gloss-body">{HtmlRenderer.render_gloss_columns(layout)}</div>')

            for line in layout.postamble:
                lines.append(HtmlRenderer.render_nosplit_line(line, 'postamble'))

        lines.append('</div>')

        return '\n'.join(lines)

    @staticmethod
    def render_nosplit_line(line: GlossLine, class_name: str) -> str:
        attributes_sequence = build_attributes_sequence({
            'class': build_class_value(merge_class_names([class_name], line.class_names)),
        })

        return f'<p{attributes_sequence}>{render_inline(line.content)}</p>'

    @staticmethod
    def render_gloss_columns(layout: GlossLayout) -> str:
        """
        Render gloss columns as definition lists, the head line's word as the term.
        """
        rendered_columns = ''

        for column in layout.columns:
            if column.has_space_before:
                rendered_columns += ' '

            rendered_columns += '<dl>'
            for line_index, (line, word) in enumerate(zip(layout.split_lines, column.words)):
                tag_name = 'dt' if line_index == 0 else 'dd'
                attributes_sequence = build_attributes_sequence({'class': build_class_value(line.class_names)})
                content = render_inline(word) if word is not None else ''
                rendered_columns += f'<{tag_name}{attributes_sequence}>{content}</{tag_name}>'
            rendered_columns += '</dl>'

        return rendered_columns
