"""
# Conlang-Markdown: parameters.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Parameter lists.

A parameter list is a bracketed, comma-separated list of tokens
immediately following a directive or delimiter:
````
[«flag», «key»=«value», «key»="«quoted, value»", «class» «class» [...]]
````
What a token means depends on the directive it is attached to,
see `PARAMETER_SCHEMA_FROM_DIRECTIVE`.
"""

import re
from typing import Iterable, NamedTuple, Optional

from conlangmd.exceptions import (
    DuplicateParameterException,
    InvalidParameterValueException,
    MissingParameterException,
    UnknownParameterException,
    UnterminatedParameterListException,
)
from conlangmd.idioms import build_named_parameter_regex
from conlangmd.utilities import merge_class_names


class ParameterSchema(NamedTuple):
    flag_names: frozenset[str]
    key_names: frozenset[str]
    positional_key: Optional[str] = None
    required_keys: frozenset[str] = frozenset()


PARAMETER_SCHEMA_FROM_DIRECTIVE = {
    'heading': ParameterSchema(
        flag_names=frozenset({'nonumber', 'notoc'}),
        key_names=frozenset({'id', 'class'}),
    ),
    'toc': ParameterSchema(
        flag_names=frozenset(),
        key_names=frozenset({'maxlevel', 'id', 'class'}),
    ),
    'table': ParameterSchema(
        flag_names=frozenset({'nonumber'}),
        key_names=frozenset({'id', 'class'}),
    ),
    'table-row': ParameterSchema(
        flag_names=frozenset({'header'}),
        key_names=frozenset({'class'}),
    ),
    'table-column': ParameterSchema(
        flag_names=frozenset({'header'}),
        key_names=frozenset({'class'}),
    ),
    'table-cell': ParameterSchema(
        flag_names=frozenset(),
        key_names=frozenset({'rows', 'cols', 'class'}),
    ),
    'gloss': ParameterSchema(
        flag_names=frozenset({'nonumber'}),
        key_names=frozenset({'id', 'class'}),
    ),
    'gloss-line': ParameterSchema(
        flag_names=frozenset({'nosplit'}),
        key_names=frozenset({'class'}),
    ),
    'list': ParameterSchema(
        flag_names=frozenset({'ordered'}),
        key_names=frozenset({'id', 'class'}),
    ),
    'span': ParameterSchema(
        flag_names=frozenset(),
        key_names=frozenset({'class'}),
    ),
    'ref': ParameterSchema(
        flag_names=frozenset(),
        key_names=frozenset({'ref', 'class'}),
        positional_key='ref',
        required_keys=frozenset({'ref'}),
    ),
    'link': ParameterSchema(
        flag_names=frozenset(),
        key_names=frozenset({'url', 'title', 'class'}),
        positional_key='url',
        required_keys=frozenset({'url'}),
    ),
}

NAMED_PARAMETER_PATTERN_COMPILED = re.compile(
    pattern=build_named_parameter_regex(),
    flags=re.ASCII | re.VERBOSE,
)


class ParameterSet:
    """
    The parsed parameters of a directive or delimiter.

    Consists of
    - flag names (e.g. `nonumber`),
    - a mapping from key to value (e.g. `maxlevel` to `3`), and
    - class names, in order of appearance.
    """
    _flag_names: frozenset[str]
    _value_from_key: dict[str, str]
    _class_names: tuple[str, ...]

    def __init__(self, flag_names: Optional[Iterable[str]] = None,
                 value_from_key: Optional[dict[str, str]] = None,
                 class_names: Optional[Iterable[str]] = None):
        self._flag_names = frozenset(flag_names or ())
        self._value_from_key = dict(value_from_key or {})
        self._class_names = tuple(merge_class_names(class_names or ()))

    @property
    def flag_names(self) -> frozenset[str]:
        return self._flag_names

    @property
    def value_from_key(self) -> dict[str, str]:
        return dict(self._value_from_key)

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._class_names

    def has_flag(self, flag_name: str) -> bool:
        return flag_name in self._flag_names

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._value_from_key.get(key, default)

    def is_empty(self) -> bool:
        return (
            len(self._flag_names) == 0
            and len(self._value_from_key) == 0
            and len(self._class_names) == 0
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented

        return (
            self._flag_names == other._flag_names
            and self._value_from_key == other._value_from_key
            and self._class_names == other._class_names
        )

    def __repr__(self) -> str:
        return (
            f'ParameterSet(flag_names={sorted(self._flag_names)!r}, '
            f'value_from_key={self._value_from_key!r}, '
            f'class_names={list(self._class_names)!r})'
        )


def extract_parameter_source(string: str, position: int) -> tuple[Optional[str], int]:
    """
    Extract the source of a parameter list starting at `position`.

    Returns («source», «end_position») where «source» is the text between the brackets
    and «end_position» is just after the closing bracket.
    If there is no parameter list at `position`, returns (None, «position»).
    Nested brackets, double-quoted strings and backslash escapes are honoured.
    """
    if position >= len(string) or string[position] != '[':
        return None, position

    depth = 0
    is_quoted = False
    index = position

    while index < len(string):
        character = string[index]

        if character == '\\':
            index += 2
            continue

        if is_quoted:
            if character == '"':
                is_quoted = False
        elif character == '"':
            is_quoted = True
        elif character == '[':
            depth += 1
        elif character == ']':
            depth -= 1
            if depth == 0:
                return string[position + 1:index], index + 1

        index += 1

    raise UnterminatedParameterListException('unterminated parameter list (expected `]`)')


def split_parameter_tokens(source: str) -> list[str]:
    """
    Split parameter list source on commas outside of double quotes and brackets.
    """
    tokens = []
    token_start = 0
    depth = 0
    is_quoted = False
    index = 0

    while index < len(source):
        character = source[index]

        if character == '\\':
            index += 2
            continue

        if is_quoted:
            if character == '"':
                is_quoted = False
        elif character == '"':
            is_quoted = True
        elif character == '[':
            depth += 1
        elif character == ']':
            depth -= 1
        elif character == ',' and depth == 0:
            tokens.append(source[token_start:index])
            token_start = index + 1

        index += 1

    tokens.append(source[token_start:])

    return tokens


def unquote_parameter_value(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1].replace('\\"', '"')

    return value


def parse_parameters(source: Optional[str], schema: ParameterSchema) -> ParameterSet:
    """
    Parse parameter list source according to a directive's schema.

    Each token is one of:
    - `«key»=«value»`, where «key» must be recognised by the schema
      (except for `class`, whose value is split into class names);
    - a flag recognised by the schema;
    - the first unnamed token, for directives with a positional key
      (`:ref:[«id»]` is `:ref:[ref=«id»]`, `:link:[«url»]` is `:link:[url=«url»]`);
    - otherwise, whitespace-separated class names.
    Repeating a key is an error, even if the earlier occurrence was positional.
    """
    flag_names: set[str] = set()
    value_from_key: dict[str, str] = {}
    class_names: list[str] = []
    seen_keys: set[str] = set()

    if source is not None:
        for token in split_parameter_tokens(source):
            token = token.strip()
            if token == '':
                continue

            named_parameter_match = NAMED_PARAMETER_PATTERN_COMPILED.fullmatch(token)
            if named_parameter_match is not None:
                key = named_parameter_match.group('name')
                value = unquote_parameter_value(named_parameter_match.group('value').strip())

                if key in seen_keys:
                    raise DuplicateParameterException(f'duplicate parameter `{key}`')
                seen_keys.add(key)

                if key == 'class':
                    class_names.extend(value.split())
                elif key in schema.key_names:
                    value_from_key[key] = value
                else:
                    raise UnknownParameterException(f'unrecognised parameter `{key}`')
                continue

            if token in schema.flag_names:
                flag_names.add(token)
                continue

            positional_key = schema.positional_key
            if positional_key is not None and positional_key not in seen_keys:
                seen_keys.add(positional_key)
                value_from_key[positional_key] = unquote_parameter_value(token)
                continue

            class_names.extend(unquote_parameter_value(token).split())

    for required_key in sorted(schema.required_keys):
        if required_key not in value_from_key:
            raise MissingParameterException(f'missing parameter `{required_key}`')

    return ParameterSet(flag_names, value_from_key, class_names)


def extract_positive_integer(parameters: ParameterSet, key: str, default: int,
                             maximum: Optional[int] = None) -> int:
    value = parameters.get(key)
    if value is None:
        return default

    try:
        integer = int(value)
    except ValueError:
        raise InvalidParameterValueException(f'parameter `{key}` must be a positive integer, not `{value}`')

    if integer < 1 or (maximum is not None and integer > maximum):
        if maximum is None:
            range_description = 'a positive integer'
        else:
            range_description = f'an integer from 1 to {maximum}'
        raise InvalidParameterValueException(f'parameter `{key}` must be {range_description}, not `{value}`')

    return integer
