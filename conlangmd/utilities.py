"""
# Conlang-Markdown: utilities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common utility functions.
"""

import re
from typing import Iterable


def compute_indentation(line: str) -> int:
    """
    Count the leading spaces of a line.
    """
    return len(line) - len(line.lstrip(' '))


def collapse_whitespace(string: str, separator: str = ' ') -> str:
    """
    Strip a string and replace each internal run of whitespace with `separator`.
    """
    return re.sub(pattern=r'[\s]+', repl=separator, string=string.strip())


def split_unescaped(string: str, separator: str) -> list[str]:
    """
    Split a string on a single-character separator.

    Occurrences of the separator are not split on when they are
    - escaped by a backslash,
    - inside braces `{...}`, or
    - inside brackets `[...]`.
    Backslashes are kept, so that the pieces may be parsed further.
    """
    pieces = []
    piece_start = 0
    depth = 0
    index = 0

    while index < len(string):
        character = string[index]

        if character == '\\':
            index += 2
            continue

        if character in '{[':
            depth += 1
        elif character in '}]':
            depth = max(depth - 1, 0)
        elif character == separator and depth == 0:
            pieces.append(string[piece_start:index])
            piece_start = index + 1

        index += 1

    pieces.append(string[piece_start:])

    return pieces


def merge_class_names(*class_name_groups: Iterable[str]) -> list[str]:
    """
    Merge groups of class names in order, dropping repeats.
    """
    merged_class_names = []

    for class_names in class_name_groups:
        for class_name in class_names:
            if class_name not in merged_class_names:
                merged_class_names.append(class_name)

    return merged_class_names


def escape_html(string: str) -> str:
    """
    Escape a string for use as HTML text or as a double-quoted attribute value.

    Unlike `escape_attribute_value_html`, existing entities are escaped too,
    since CLMD text is never pre-escaped.
    """
    string = string.replace('&', '&amp;')
    string = string.replace('<', '&lt;')
    string = string.replace('>', '&gt;')
    string = string.replace('"', '&quot;')
    string = string.replace("'", '&#x27;')

    return string


def escape_attribute_value_html(value: str) -> str:
    """
    Escape an attribute value that will be delimited by double quotes.

    Used for URLs, which may legitimately contain entities already.
    For speed, we make the following assumptions:
    - Entity names are any run of up to 31 letters. At the time of writing (2022-04-18), the longest entity name is
      `CounterClockwiseContourIntegral` according to <https://html.spec.whatwg.org/entities.json>.
      Actually checking is slow for very little return.
    - Decimal code points are any run of up to 7 digits.
    - Hexadecimal code points are any run of up to 6 digits.
    """
    value = re.sub(
        pattern='''
            [&]
            (?!
                (?:
                    [a-zA-Z]{1,31}
                        |
                    [#] (?: [0-9]{1,7} | [xX] [0-9a-fA-F]{1,6} )
                )
                [;]
            )
        ''',
        repl='&amp;',
        string=value,
        flags=re.VERBOSE,
    )
    value = re.sub(pattern='<', repl='&lt;', string=value)
    value = re.sub(pattern='>', repl='&gt;', string=value)
    value = re.sub(pattern='"', repl='&quot;', string=value)

    return value

