"""
# Conlang-Markdown: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core conversion logic.

CLMD is converted in four passes:
1. the text is segmented into blocks on whitespace-only lines;
2. each block is parsed (classified, then inline-parsed);
3. the parsed blocks are built into a document (numbering, ids, layout);
4. cross-references and replacement uses are resolved.
The resolved document is then rendered as HTML.

For the CLMD syntax, see the constant `CLMD_SYNTAX_HELP` in `constants.py`.
"""

from conlangmd.block_parser import parse_block
from conlangmd.builder import DocumentBuilder
from conlangmd.document import Document
from conlangmd.exceptions import ConversionException, ParseException
from conlangmd.renderer import HtmlRenderer
from conlangmd.resolver import ReferenceResolver
from conlangmd.segmenter import segment_blocks, split_lines


def build_document(clmd: str, verbose_mode_enabled: bool = False) -> Document:
    """
    Build and resolve a document from CLMD.

    A block with a parse error is skipped, and the error recorded,
    so that every error in the document is reported at once.
    """
    builder = DocumentBuilder(verbose_mode_enabled=verbose_mode_enabled)
    document = builder.document

    for raw_block in segment_blocks(split_lines(clmd)):
        try:
            block = parse_block(raw_block)
        except ParseException as exception:
            document.record_error(exception)
            continue

        builder.add_block(block)

    builder.finish()
    ReferenceResolver(document).resolve()

    return document


def render_document(document: Document, standalone: bool = False) -> str:
    renderer = HtmlRenderer(document)

    if standalone:
        return renderer.render_standalone()

    return renderer.render()


def conlang_to_html(clmd: str, standalone: bool = False, verbose_mode_enabled: bool = False) -> str:
    """
    Convert CLMD to HTML.

    Raises `ConversionException` (listing every error) if the document has errors.
    """
    document = build_document(clmd, verbose_mode_enabled)

    if document.has_errors:
        raise ConversionException(document.errors)

    return render_document(document, standalone)
