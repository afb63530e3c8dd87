"""
Splits the text of a textgrid file into tokens.

Both textgrid encodings share one vocabulary: numbers, quoted strings,
bare words (the labels of the long form, e.g. 'xmin' or 'intervals'),
flags like <exists>, and a little punctuation.  The scanner does not
know which encoding it is reading; detectEncoding() decides that once
the header has been read.

https://www.fon.hum.uva.nl/praat/manual/TextGrid_file_formats.html
"""
import math
import re
from bisect import bisect_right
from typing import List, NamedTuple, Sequence, Tuple, Union

from typing_extensions import Final

from praatgrid.utilities import errors
from praatgrid.utilities.constants import Encoding
from praatgrid.utilities.errors import LexErrorKind

NUMBER: Final = "number"
STRING: Final = "string"
WORD: Final = "word"
FLAG: Final = "flag"
PUNCT: Final = "punct"
EOF: Final = "eof"

PUNCTUATION: Final = "[]=:?"
COMMENT_START: Final = "!"
DIGITS: Final = "0123456789"
BYTE_ORDER_MARK: Final = "\ufeff"

numberRegex = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
wordRegex = re.compile(r"[^\W\d]\w*")
flagRegex = re.compile(r"<([A-Za-z_]+)>")
nonSpaceRegex = re.compile(r"\S+")


class Token(NamedTuple):
    kind: str
    value: Union[float, str]
    line: int
    column: int

    @property
    def location(self) -> Tuple[int, int]:
        return (self.line, self.column)

    def describe(self) -> str:
        if self.kind == EOF:
            return "end of file"
        if self.kind == STRING:
            return f'string "{self.value}"'
        if self.kind == FLAG:
            return f"<{self.value}>"
        return f"{self.kind} '{self.value}'"


class _Positions:
    """Translates offsets in the text to 1-based line and column numbers"""

    def __init__(self, text: str):
        self.lineStarts = [0] + [match.end() for match in re.finditer("\n", text)]

    def __call__(self, offset: int) -> Tuple[int, int]:
        lineIndex = bisect_right(self.lineStarts, offset) - 1
        return lineIndex + 1, offset - self.lineStarts[lineIndex] + 1


def _startsNumber(text: str, i: int) -> bool:
    char = text[i]
    if char in DIGITS:
        return True
    if char in "+-.":
        following = text[i + 1 : i + 2]
        if not following:
            return False
        return following in DIGITS or (char != "." and following == ".")
    return False


def _readString(text: str, i: int) -> Tuple[str, int]:
    """Returns the unescaped contents of the string opening at i and the end offset

    Quote marks inside a string are escaped by doubling them.
    Returns -1 as the offset if the string is never closed.
    """
    j = i + 1
    while True:
        j = text.find('"', j)
        if j == -1:
            return "", -1
        if text[j + 1 : j + 2] == '"':
            j += 2
            continue
        return text[i + 1 : j].replace('""', '"'), j + 1


def tokenize(text: str) -> List[Token]:
    """Converts the full text of a textgrid file into a list of tokens

    The returned list always ends with an EOF token.

    Raises:
        LexError: on an unterminated string, a malformed number,
            or a character that cannot start any token
    """
    positions = _Positions(text)
    tokens: List[Token] = []

    i = 0
    if text.startswith(BYTE_ORDER_MARK):
        i = 1

    length = len(text)
    while i < length:
        char = text[i]

        if char.isspace():
            i += 1
        elif char == COMMENT_START:
            newline = text.find("\n", i)
            i = length if newline == -1 else newline
        elif char == '"':
            value, end = _readString(text, i)
            if end == -1:
                raise errors.LexError(
                    LexErrorKind.UNTERMINATED_STRING,
                    "String is never closed",
                    *positions(i),
                )
            tokens.append(Token(STRING, value, *positions(i)))
            i = end
        elif _startsNumber(text, i):
            match = numberRegex.match(text, i)
            end = match.end() if match else i
            following = text[end : end + 1]
            if not match or (following and (following.isalnum() or following in "._+-")):
                badText = nonSpaceRegex.match(text, i).group()  # type: ignore[union-attr]
                raise errors.LexError(
                    LexErrorKind.MALFORMED_NUMBER,
                    f"Malformed number '{badText}'",
                    *positions(i),
                )
            value = float(match.group())
            if not math.isfinite(value):
                raise errors.LexError(
                    LexErrorKind.MALFORMED_NUMBER,
                    f"Number '{match.group()}' is too large to represent",
                    *positions(i),
                )
            tokens.append(Token(NUMBER, value, *positions(i)))
            i = end
        elif char.isalpha() or char == "_":
            match = wordRegex.match(text, i)
            tokens.append(Token(WORD, match.group(), *positions(i)))  # type: ignore[union-attr]
            i = match.end()  # type: ignore[union-attr]
        elif char == "<":
            match = flagRegex.match(text, i)
            if not match:
                raise errors.LexError(
                    LexErrorKind.UNEXPECTED_CHARACTER,
                    "Unexpected character '<'; expected a flag like <exists>",
                    *positions(i),
                )
            tokens.append(Token(FLAG, match.group(1), *positions(i)))
            i = match.end()
        elif char in PUNCTUATION:
            tokens.append(Token(PUNCT, char, *positions(i)))
            i += 1
        else:
            raise errors.LexError(
                LexErrorKind.UNEXPECTED_CHARACTER,
                f"Unexpected character {char!r}",
                *positions(i),
            )

    tokens.append(Token(EOF, "", *positions(length)))

    return tokens


def detectEncoding(tokens: Sequence[Token], headerEnd: int) -> str:
    """Decides whether the tokens after the header are in long or short form

    The long form labels every field ('xmin = 0'), so the first thing
    after the header is a word.  The short form starts straight away
    with the textgrid's xmin value.
    """
    if tokens[headerEnd].kind == WORD:
        return Encoding.LONG
    return Encoding.SHORT
