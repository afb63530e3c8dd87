from typing import List, Optional


class PraatgridException(Exception):
    pass


class ArgumentError(PraatgridException):
    pass


class WrongOption(PraatgridException):
    def __init__(self, argumentName: str, givenValue: str, availableOptions: List[str]):
        super(WrongOption, self).__init__()
        self.argumentName = argumentName
        self.givenValue = givenValue
        self.availableOptions = availableOptions

    def __str__(self):
        return (
            f"For argument '{self.argumentName}' was given the value '{self.givenValue}'. "
            f"However, expected one of [{', '.join(self.availableOptions)}]"
        )


class ParsingError(PraatgridException):
    """A textgrid could not be read; line and column locate the fault (1-based)."""

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ):
        super(ParsingError, self).__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self):
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}, column {self.column})"


class LexErrorKind:
    UNTERMINATED_STRING = "UnterminatedString"
    MALFORMED_NUMBER = "MalformedNumber"
    UNEXPECTED_CHARACTER = "UnexpectedCharacter"


class LexError(ParsingError):
    def __init__(self, kind: str, message: str, line: int, column: int):
        super(LexError, self).__init__(message, line, column)
        self.kind = kind

    def __str__(self):
        return f"{self.kind}: {super(LexError, self).__str__()}"


class FormatError(ParsingError):
    pass


class NotATextGrid(FormatError):
    pass


class CountMismatch(FormatError):
    def __init__(
        self,
        message: str,
        expected: int,
        actual: int,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super(CountMismatch, self).__init__(message, line, column)
        self.expected = expected
        self.actual = actual

    def __str__(self):
        return (
            f"{super(CountMismatch, self).__str__()}: "
            f"expected {self.expected} but found {self.actual}"
        )


# Entries that overlap, run backwards, or share a timestamp
class OrderViolation(FormatError):
    pass


# Timestamps outside of their container, or intervals that leave gaps
class BoundsViolation(FormatError):
    pass


class UnknownTierClass(FormatError):
    pass


class UnexpectedToken(FormatError):
    pass


class TextgridException(PraatgridException):
    pass


class DuplicateTierName(TextgridException):
    pass


class TierNotFound(TextgridException):
    def __init__(self, tierName: str):
        super(TierNotFound, self).__init__()
        self.tierName = tierName

    def __str__(self):
        return f"No tier named '{self.tierName}' in textgrid"
