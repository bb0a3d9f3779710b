"""
# Conlang-Markdown: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import os
import re
import sys
import warnings

from conlangmd._version import __version__
from conlangmd.constants import (
    CLMD_FILE_EXTENSION,
    CLMD_SYNTAX_HELP,
    COMMAND_LINE_ERROR_EXIT_CODE,
    GENERIC_ERROR_EXIT_CODE,
)
from conlangmd.core import build_document, render_document
from conlangmd.exceptions import ConlangMarkdownWarning

DESCRIPTION = '''
    Convert Conlang-Markdown (CLMD) to HTML.
'''
CLMD_FILE_NAME_HELP = '''
    name of CLMD file to be converted
    (can be abbreviated as `file` or `file.` for increased productivity)
'''
ALL_MODE_HELP = '''
    convert all CLMD files under the working directory
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints every block built)
'''
FRAGMENT_MODE_HELP = '''
    write an HTML fragment instead of a standalone HTML document
'''
SYNTAX_HELP_HELP = '''
    print a summary of the CLMD syntax and exit
'''


def is_clmd_file(file_name: str) -> bool:
    return file_name.endswith(CLMD_FILE_EXTENSION)


def extract_clmd_name(clmd_file_name_argument: str) -> str:
    """
    Extract name-without-extension from a CLMD file name argument.

    Here, CLMD file name argument may be of the form `«clmd_name».clmd`, `«clmd_name».`, or `«clmd_name»`.
    The path is normalised by resolving `./` and `../`.
    """
    clmd_file_name_argument = os.path.normpath(clmd_file_name_argument)
    clmd_name = re.sub(pattern=r'[.](clmd)? \Z', repl='', string=clmd_file_name_argument, flags=re.VERBOSE)

    return clmd_name


def parse_command_line_arguments() -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-a', '--all',
        dest='all_mode_enabled',
        action='store_true',
        help=ALL_MODE_HELP,
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        '-f', '--fragment',
        dest='fragment_mode_enabled',
        action='store_true',
        help=FRAGMENT_MODE_HELP,
    )
    argument_parser.add_argument(
        '-s', '--syntax',
        dest='syntax_help_enabled',
        action='store_true',
        help=SYNTAX_HELP_HELP,
    )
    argument_parser.add_argument(
        'clmd_file_name_arguments',
        default=[],
        help=CLMD_FILE_NAME_HELP,
        metavar='file.clmd',
        nargs='*',
    )

    return argument_parser.parse_args()


def generate_html_file(clmd_file_name_argument: str, verbose_mode_enabled: bool, fragment_mode_enabled: bool,
                       uses_command_line_argument: bool):
    clmd_name = extract_clmd_name(clmd_file_name_argument)
    clmd_file_name = f'{clmd_name}{CLMD_FILE_EXTENSION}'
    try:
        with open(clmd_file_name, 'r', encoding='utf-8') as clmd_file:
            clmd = clmd_file.read()
    except FileNotFoundError as file_not_found_error:
        if uses_command_line_argument:
            print(f'error: argument `{clmd_file_name_argument}`: file `{clmd_file_name}` not found', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)
        else:
            error_message = f'file `{clmd_file_name}` not found for `{clmd_file_name}` in clmd_file_names'
            raise FileNotFoundError(error_message) from file_not_found_error

    with warnings.catch_warnings():
        warnings.simplefilter('ignore', category=ConlangMarkdownWarning)
        document = build_document(clmd, verbose_mode_enabled)

    for warning in document.warnings:
        print(f'warning: `{clmd_file_name}`, {warning}', file=sys.stderr)

    if document.has_errors:
        for error in document.errors:
            print(f'error: `{clmd_file_name}`, {error}', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)

    html = render_document(document, standalone=not fragment_mode_enabled)

    html_file_name = f'{clmd_name}.html'
    try:
        with open(html_file_name, 'w', encoding='utf-8') as html_file:
            html_file.write(html)
        print(f'success: wrote to `{html_file_name}`')
    except IOError:
        print(f'error: cannot write to `{html_file_name}`', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def main():
    parsed_arguments = parse_command_line_arguments()
    clmd_file_name_arguments = parsed_arguments.clmd_file_name_arguments
    all_mode_enabled = parsed_arguments.all_mode_enabled
    verbose_mode_enabled = parsed_arguments.verbose_mode_enabled
    fragment_mode_enabled = parsed_arguments.fragment_mode_enabled

    if parsed_arguments.syntax_help_enabled:
        print(CLMD_SYNTAX_HELP, end='')
        return

    if all_mode_enabled:
        if len(clmd_file_name_arguments) > 0:
            print('error: option -a (or --all) cannot be used with positional argument', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

        clmd_file_names = [
            os.path.join(path, file_name)
            for path, _, file_names in os.walk(os.curdir)
            for file_name in file_names
            if is_clmd_file(file_name)
        ]
        for clmd_file_name in sorted(clmd_file_names):
            generate_html_file(
                clmd_file_name, verbose_mode_enabled, fragment_mode_enabled,
                uses_command_line_argument=False,
            )

    else:
        for clmd_file_name_argument in clmd_file_name_arguments:
            generate_html_file(
                clmd_file_name_argument, verbose_mode_enabled, fragment_mode_enabled,
                uses_command_line_argument=True,
            )


if __name__ == '__main__':
    main()
