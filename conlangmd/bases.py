"""
# Conlang-Markdown: bases.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Base classes for CLMD blocks.
"""

import abc
from typing import Iterator, Optional

from conlangmd.exceptions import FrozenMutateException
from conlangmd.inlines import InlineNode
from conlangmd.parameters import ParameterSet


class Block(abc.ABC):
    """
    Base class for a block.

    Every block records the line on which it starts.
    `id_` and `number_text` are assigned once, by the document builder.
    """
    _parameters: ParameterSet
    _line_number: int
    _id: Optional[str]
    _number_text: Optional[str]

    def __init__(self, parameters: Optional[ParameterSet], line_number: int):
        if parameters is None:
            parameters = ParameterSet()
        self._parameters = parameters
        self._line_number = line_number
        self._id = None
        self._number_text = None

    @property
    @abc.abstractmethod
    def kind(self) -> str:
        raise NotImplementedError

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._parameters.class_names

    @property
    def explicit_id(self) -> Optional[str]:
        return self._parameters.get('id')

    @property
    def id_(self) -> Optional[str]:
        return self._id

    @id_.setter
    def id_(self, value: str):
        if self._id is not None:
            raise FrozenMutateException('error: cannot set `id_` more than once')

        self._id = value

    @property
    def number_text(self) -> Optional[str]:
        return self._number_text

    @number_text.setter
    def number_text(self, value: str):
        if self._number_text is not None:
            raise FrozenMutateException('error: cannot set `number_text` more than once')

        self._number_text = value

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        """
        Yield (line number, inline content) for each inline sequence rendered with the block.
        """
        yield from ()


class ReferenceableBlock(Block, abc.ABC):
    """
    Base class for a block that is numbered and may be referenced by `:ref:`.

    Numbering is suppressed by the `nonumber` flag.
    """
    _title: list[InlineNode]

    def __init__(self, title: list[InlineNode], parameters: Optional[ParameterSet], line_number: int):
        super().__init__(parameters, line_number)
        self._title = title

    @property
    def title(self) -> list[InlineNode]:
        return self._title

    @property
    def is_numbered(self) -> bool:
        return not self._parameters.has_flag('nonumber')

    def inline_sequences(self) -> Iterator[tuple[int, list[InlineNode]]]:
        yield self._line_number, self._title
