"""
# Conlang-Markdown: inlines.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Inline content nodes.

Inline content is a list of nodes, each of which is
- `Text` (a literal run),
- a formatting span (`Emphasis`, `Strong`, `Italic`, `Bold`, `SmallCaps`, `Span`),
- `Reference` (`:ref:[«id»]`),
- `Replacement` (`:«identifier»:`), or
- `Link` (`:link:[«url», title=«title»]`).
References and replacements carry deferred fields filled in by the resolver.
"""

import abc
from typing import Callable, Iterator, NamedTuple, Optional

from conlangmd.constants import DEFAULT_SPAN_CLASS, SMALL_CAPS_CLASS
from conlangmd.exceptions import FrozenMutateException
from conlangmd.parameters import ParameterSet
from conlangmd.utilities import merge_class_names


class InlineNode(abc.ABC):
    """
    Base class for an inline node.
    """

    @abc.abstractmethod
    def __eq__(self, other: object) -> bool:
        raise NotImplementedError


class Text(InlineNode):
    _content: str

    def __init__(self, content: str):
        self._content = content

    @property
    def content(self) -> str:
        return self._content

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented

        return self._content == other._content

    def __repr__(self) -> str:
        return f'Text({self._content!r})'


class FormattingSpan(InlineNode, abc.ABC):
    """
    Base class for a delimited formatting span.
    """
    _children: list[InlineNode]
    _parameters: ParameterSet

    def __init__(self, children: list[InlineNode], parameters: Optional[ParameterSet] = None):
        self._children = list(children)
        if parameters is None:
            parameters = ParameterSet()
        self._parameters = parameters

    @property
    @abc.abstractmethod
    def marker(self) -> str:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def tag_name(self) -> str:
        raise NotImplementedError

    @property
    def children(self) -> list[InlineNode]:
        return self._children

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    def compute_class_names(self) -> list[str]:
        return list(self._parameters.class_names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormattingSpan):
            return NotImplemented

        return (
            type(self) is type(other)
            and self._children == other._children
            and self._parameters == other._parameters
        )

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._children!r}, {self._parameters!r})'


class Emphasis(FormattingSpan):
    @property
    def marker(self) -> str:
        return '*'

    @property
    def tag_name(self) -> str:
        return 'em'


class Strong(FormattingSpan):
    @property
    def marker(self) -> str:
        return '**'

    @property
    def tag_name(self) -> str:
        return 'strong'


class Italic(FormattingSpan):
    @property
    def marker(self) -> str:
        return '_'

    @property
    def tag_name(self) -> str:
        return 'i'


class Bold(FormattingSpan):
    @property
    def marker(self) -> str:
        return '__'

    @property
    def tag_name(self) -> str:
        return 'b'


class SmallCaps(FormattingSpan):
    @property
    def marker(self) -> str:
        return '^^'

    @property
    def tag_name(self) -> str:
        return 'span'

    def compute_class_names(self) -> list[str]:
        return merge_class_names([SMALL_CAPS_CLASS], self._parameters.class_names)


class Span(FormattingSpan):
    """
    A generic span, delimited by backticks.

    Class names given in parameters replace the default class `conlang`.
    """

    @property
    def marker(self) -> str:
        return '`'

    @property
    def tag_name(self) -> str:
        return 'span'

    def compute_class_names(self) -> list[str]:
        if self._parameters.class_names:
            return list(self._parameters.class_names)

        return [DEFAULT_SPAN_CLASS]


SPAN_CLASS_FROM_MARKER = {
    '*': Emphasis,
    '**': Strong,
    '_': Italic,
    '__': Bold,
    '^^': SmallCaps,
    '`': Span,
}


class ReferenceResolution(NamedTuple):
    status: str
    text: str


REFERENCE_RESOLVED = 'resolved'
REFERENCE_UNKNOWN = 'unknown'
REFERENCE_UNREFERENCEABLE = 'unreferenceable'


class Reference(InlineNode):
    """
    A cross-reference to a numbered block.

    `resolution` is deferred, and may be set only once.
    """
    _parameters: ParameterSet
    _resolution: Optional[ReferenceResolution]

    def __init__(self, parameters: ParameterSet):
        self._parameters = parameters
        self._resolution = None

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def target_id(self) -> str:
        return self._parameters.get('ref', '')

    @property
    def resolution(self) -> Optional[ReferenceResolution]:
        return self._resolution

    @resolution.setter
    def resolution(self, value: ReferenceResolution):
        if self._resolution is not None:
            raise FrozenMutateException('error: cannot set `resolution` more than once')

        self._resolution = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented

        return self._parameters == other._parameters

    def __repr__(self) -> str:
        return f'Reference({self._parameters!r})'


REPLACEMENT_EXPANDED = 'expanded'
REPLACEMENT_UNDEFINED = 'undefined'
REPLACEMENT_CYCLIC = 'cyclic'


class Replacement(InlineNode):
    """
    A use of a replacement definition.

    `expansion` and `status` are deferred, and may be set only once.
    """
    _identifier: str
    _status: Optional[str]
    _expansion: Optional[list[InlineNode]]

    def __init__(self, identifier: str):
        self._identifier = identifier
        self._status = None
        self._expansion = None

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def status(self) -> Optional[str]:
        return self._status

    @property
    def expansion(self) -> Optional[list[InlineNode]]:
        return self._expansion

    @property
    def is_cyclic(self) -> bool:
        return self._status == REPLACEMENT_CYCLIC

    def settle(self, status: str, expansion: Optional[list[InlineNode]] = None):
        if self._status is not None:
            raise FrozenMutateException('error: cannot call `settle(...)` more than once')

        self._status = status
        self._expansion = expansion

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Replacement):
            return NotImplemented

        return self._identifier == other._identifier

    def __repr__(self) -> str:
        return f'Replacement({self._identifier!r})'


class Link(InlineNode):
    """
    A hyperlink, whose title is inline content (the URL is shown if there is no title).
    """
    _parameters: ParameterSet
    _title: Optional[list[InlineNode]]

    def __init__(self, parameters: ParameterSet, title: Optional[list[InlineNode]] = None):
        self._parameters = parameters
        self._title = title

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def url(self) -> str:
        return self._parameters.get('url', '')

    @property
    def title(self) -> Optional[list[InlineNode]]:
        return self._title

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented

        return self._parameters == other._parameters and self._title == other._title

    def __repr__(self) -> str:
        return f'Link({self._parameters!r}, {self._title!r})'


def walk(nodes: list[InlineNode]) -> Iterator[InlineNode]:
    """
    Yield nodes depth-first in document order, descending into spans and link titles.

    Replacement expansions are not descended into.
    """
    for node in nodes:
        yield node

        if isinstance(node, FormattingSpan):
            yield from walk(node.children)
        elif isinstance(node, Link) and node.title is not None:
            yield from walk(node.title)


def compute_plain_text(
    nodes: list[InlineNode],
    load_replacement_content: Optional[Callable[[str], Optional[list[InlineNode]]]] = None,
    replacement_chain: tuple[str, ...] = (),
) -> str:
    """
    Compute the plain text of inline content, without any markup.

    An unexpanded replacement contributes the plain text of the content
    returned by `load_replacement_content` (if given and not `None`),
    else its identifier.
    Unresolved references contribute their ids.
    """
    plain_text = ''

    for node in nodes:
        if isinstance(node, Text):
            plain_text += node.content
        elif isinstance(node, FormattingSpan):
            plain_text += compute_plain_text(node.children, load_replacement_content, replacement_chain)
        elif isinstance(node, Link):
            if node.title is None:
                plain_text += node.url
            else:
                plain_text += compute_plain_text(node.title, load_replacement_content, replacement_chain)
        elif isinstance(node, Reference):
            resolution = node.resolution
            if resolution is None:
                plain_text += node.target_id
            else:
                plain_text += resolution.text
        elif isinstance(node, Replacement):
            plain_text += compute_replacement_plain_text(node, load_replacement_content, replacement_chain)

    return plain_text


def compute_replacement_plain_text(
    replacement: Replacement,
    load_replacement_content: Optional[Callable[[str], Optional[list[InlineNode]]]],
    replacement_chain: tuple[str, ...],
) -> str:
    if replacement.expansion is not None:
        return compute_plain_text(replacement.expansion)

    identifier = replacement.identifier
    if load_replacement_content is None or identifier in replacement_chain:
        return identifier

    content = load_replacement_content(identifier)
    if content is None:
        return identifier

    return compute_plain_text(content, load_replacement_content, replacement_chain + (identifier,))
