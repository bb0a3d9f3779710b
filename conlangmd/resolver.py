"""
# Conlang-Markdown: resolver.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Cross-reference and replacement resolution.

Runs after the whole document has been built (and the masters frozen),
so that references may point forwards.
"""

import copy

from conlangmd.constants import KIND_WORD_FROM_KIND
from conlangmd.document import Document
from conlangmd.exceptions import (
    ReferenceToUnnumberedWarning,
    ReplacementCycleException,
    UnknownReferenceWarning,
    UnknownReplacementWarning,
    UnrecognisedIdException,
    UnrecognisedReplacementException,
    UnreferenceableTargetWarning,
)
from conlangmd.inlines import (
    REFERENCE_RESOLVED,
    REFERENCE_UNKNOWN,
    REFERENCE_UNREFERENCEABLE,
    REPLACEMENT_CYCLIC,
    REPLACEMENT_EXPANDED,
    REPLACEMENT_UNDEFINED,
    InlineNode,
    Reference,
    ReferenceResolution,
    Replacement,
    walk,
)


class ReferenceResolver:
    """
    Object resolving every reference and replacement use in a document.

    ## References

    `:ref:[«id»]` resolves to `«kind word» «number»` (e.g. `section 1.2`, `table 3`),
    or just `«kind word»` if the target is unnumbered (with a warning).
    Unknown ids, and ids of blocks that cannot be referenced (tables of contents, lists),
    resolve to a marker (with a warning).

    ## Replacements

    `:«identifier»:` expands to a copy of the definition's content,
    itself resolved recursively.
    Each definition is resolved once, and its expansion shared by every use.
    A replacement used (directly or indirectly) within its own definition is a cycle,
    which is recorded as an error once and expanded no further.
    """
    _document: Document
    _reported_cycles: set[frozenset[str]]
    _expansion_from_identifier: dict[str, list[InlineNode]]

    def __init__(self, document: Document):
        self._document = document
        self._reported_cycles = set()
        self._expansion_from_identifier = {}

    def resolve(self):
        for block in self._document.blocks:
            for line_number, nodes in block.inline_sequences():
                self._resolve_nodes(nodes, line_number, chain=())

    def _resolve_nodes(self, nodes: list[InlineNode], line_number: int, chain: tuple[str, ...]):
        for node in walk(nodes):
            if isinstance(node, Reference):
                self._resolve_reference(node, line_number)
            elif isinstance(node, Replacement):
                self._resolve_replacement(node, line_number, chain)

    def _resolve_reference(self, reference: Reference, line_number: int):
        target_id = reference.target_id

        try:
            symbol = self._document.symbol_master.load_symbol(target_id)
        except UnrecognisedIdException:
            self._document.record_warning(UnknownReferenceWarning(f'unknown reference `#{target_id}`', line_number))
            reference.resolution = ReferenceResolution(REFERENCE_UNKNOWN, f'#{target_id}')
            return

        kind_word = KIND_WORD_FROM_KIND.get(symbol.kind)
        if kind_word is None:
            self._document.record_warning(
                UnreferenceableTargetWarning(f'cannot reference `#{target_id}` ({symbol.kind})', line_number)
            )
            reference.resolution = ReferenceResolution(REFERENCE_UNREFERENCEABLE, f'#{target_id}')
            return

        if not symbol.is_numbered:
            self._document.record_warning(
                ReferenceToUnnumberedWarning(f'reference to unnumbered {symbol.kind} `#{target_id}`', line_number)
            )
            reference.resolution = ReferenceResolution(REFERENCE_RESOLVED, kind_word)
            return

        reference.resolution = ReferenceResolution(REFERENCE_RESOLVED, f'{kind_word} {symbol.number_text}')

    def _resolve_replacement(self, replacement: Replacement, line_number: int, chain: tuple[str, ...]):
        identifier = replacement.identifier
        replacement_master = self._document.replacement_master

        if identifier in chain:
            cycle = chain[chain.index(identifier):]
            cycle_members = frozenset(cycle)
            if cycle_members not in self._reported_cycles:
                self._reported_cycles.add(cycle_members)
                cycle_description = ' -> '.join(f':{member}:' for member in cycle + (identifier,))
                self._document.record_error(
                    ReplacementCycleException(
                        f'replacement cycle {cycle_description}',
                        replacement_master.load_definition(identifier).line_number,
                    )
                )
            replacement.settle(REPLACEMENT_CYCLIC)
            return

        try:
            definition = replacement_master.load_definition(identifier)
        except UnrecognisedReplacementException:
            self._document.record_warning(
                UnknownReplacementWarning(f'undefined replacement `:{identifier}:`', line_number)
            )
            replacement.settle(REPLACEMENT_UNDEFINED)
            return

        expansion = self._expansion_from_identifier.get(identifier)
        if expansion is None:
            expansion = copy.deepcopy(definition.content)
            self._resolve_nodes(expansion, definition.line_number, chain + (identifier,))
            self._expansion_from_identifier[identifier] = expansion

        replacement.settle(REPLACEMENT_EXPANDED, expansion)
