"""
# Conlang-Markdown: idioms.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common idioms.
"""

import re
from typing import Iterable, Optional

from conlangmd.utilities import escape_attribute_value_html, escape_html


IDENTIFIER_REGEX = r'[A-Za-z0-9_-]+'
URI_ATTRIBUTE_NAMES = (
    'href',
    'src',
)


def build_attributes_sequence(attribute_value_from_name: dict[str, Optional[str]]) -> str:
    """
    Convert a dictionary of attribute values to an attribute sequence.

    Attributes are emitted in insertion order.
    Attributes whose value is None or empty are omitted,
    so that `{'id': 'x', 'class': ''}` becomes ` id="x"`.
    URI attribute values keep existing entities (see `escape_attribute_value_html`);
    all other values are escaped in full.
    """
    attribute_sequence = ''

    for name, value in attribute_value_from_name.items():
        if value is None or value == '':
            continue

        if name in URI_ATTRIBUTE_NAMES:
            value = escape_attribute_value_html(value)
        else:
            value = escape_html(value)

        attribute_sequence += f' {name}="{value}"'

    return attribute_sequence


def build_class_value(class_names: Iterable[str]) -> str:
    return ' '.join(class_names)


def build_heading_regex() -> str:
    opening_hashes_regex = '(?P<opening_hashes> [#]+ )'
    after_hashes_regex = r'(?= [\[\s] | \Z )'

    return opening_hashes_regex + after_hashes_regex


def build_block_directive_regex(directive_names: Iterable[str]) -> str:
    directive_name_regex = '|'.join(re.escape(directive_name) for directive_name in directive_names)

    return f'[:] (?P<directive_name> {directive_name_regex} ) [:]'


def build_list_item_regex() -> str:
    indentation_regex = r'(?P<indentation> [^\S\n]* )'
    marker_regex = '(?P<marker> [-!] )'
    separator_regex = r'(?: (?= [\[] ) | [^\S\n]+ )'
    content_regex = r'(?P<content> [^\n]* )'

    return indentation_regex + marker_regex + separator_regex + content_regex


def build_sub_line_regex() -> str:
    return r'[^\S\n]* [:]{2} (?P<remainder> [^\n]* )'


def build_directive_usage_regex() -> str:
    return f'[:] (?P<directive_name> {IDENTIFIER_REGEX} ) [:]'


def build_replacement_definition_regex() -> str:
    identifier_regex = f'[:] (?P<identifier> {IDENTIFIER_REGEX} ) [:]'
    content_regex = r'[^\S\n]* (?P<content> [^\n]* )'

    return identifier_regex + content_regex


def build_named_parameter_regex() -> str:
    name_regex = '(?P<name> [A-Za-z] [A-Za-z0-9_-]* )'
    equals_regex = r'[\s]* [=] [\s]*'
    value_regex = r'(?P<value> [\s\S]* )'

    return name_regex + equals_regex + value_regex
