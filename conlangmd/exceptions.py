"""
# Conlang-Markdown: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception and warning classes.
"""

from typing import Optional


class ConlangMarkdownException(Exception):
    """
    Base class for errors in CLMD content.

    Carries the 1-based line number of the offending input, once known.
    """
    _message: str
    _line_number: Optional[int]

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self._message = message
        self._line_number = line_number

    @property
    def message(self) -> str:
        return self._message

    @property
    def line_number(self) -> Optional[int]:
        return self._line_number

    def locate(self, line_number: int) -> 'ConlangMarkdownException':
        """
        Set the line number, unless a more precise one has already been set.
        """
        if self._line_number is None:
            self._line_number = line_number

        return self

    def __str__(self) -> str:
        if self._line_number is None:
            return self._message

        return f'line {self._line_number}: {self._message}'


class ParseException(ConlangMarkdownException):
    pass


class UnterminatedSpanException(ParseException):
    pass


class AmbiguousNestingException(ParseException):
    pass


class DanglingEscapeException(ParseException):
    pass


class UnterminatedParameterListException(ParseException):
    pass


class DuplicateParameterException(ParseException):
    pass


class UnknownParameterException(ParseException):
    pass


class MissingParameterException(ParseException):
    pass


class InvalidParameterValueException(ParseException):
    pass


class MisplacedNosplitLineException(ParseException):
    pass


class AmbiguousIndentException(ParseException):
    pass


class HeadingLevelTooDeepException(ParseException):
    pass


class DuplicateReplacementException(ParseException):
    pass


class MalformedBlockException(ParseException):
    pass


class IdentityException(ConlangMarkdownException):
    pass


class DuplicateIdException(IdentityException):
    pass


class ReplacementCycleException(IdentityException):
    pass


class ConversionException(ConlangMarkdownException):
    """
    Raised when a document has fatal errors, after all of them have been collected.
    """
    _errors: list[ConlangMarkdownException]

    def __init__(self, errors: list[ConlangMarkdownException]):
        error_count = len(errors)
        plural = '' if error_count == 1 else 's'
        super().__init__(f'{error_count} error{plural} in document')
        self._errors = list(errors)

    @property
    def errors(self) -> list[ConlangMarkdownException]:
        return self._errors


class FrozenMutateException(Exception):
    pass


class UnrecognisedIdException(Exception):
    pass


class UnrecognisedReplacementException(Exception):
    pass


class ConlangMarkdownWarning(UserWarning):
    """
    Base class for recoverable problems in CLMD content.
    """
    _message: str
    _line_number: Optional[int]

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self._message = message
        self._line_number = line_number

    @property
    def message(self) -> str:
        return self._message

    @property
    def line_number(self) -> Optional[int]:
        return self._line_number

    def __str__(self) -> str:
        if self._line_number is None:
            return self._message

        return f'line {self._line_number}: {self._message}'


class UnknownReferenceWarning(ConlangMarkdownWarning):
    pass


class ReferenceToUnnumberedWarning(ConlangMarkdownWarning):
    pass


class UnreferenceableTargetWarning(ConlangMarkdownWarning):
    pass


class UnknownReplacementWarning(ConlangMarkdownWarning):
    pass


class SpanOverlapContentIgnoredWarning(ConlangMarkdownWarning):
    pass
