"""
Reading and writing the text of textgrid files.

parseTextgridStr() turns the text of a long or short textgrid into a
dictionary of validated tiers; getTextgridAsStr() does the reverse.

https://www.fon.hum.uva.nl/praat/manual/TextGrid_file_formats.html
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from typing_extensions import Literal

from praatgrid.utilities import errors
from praatgrid.utilities import my_math
from praatgrid.utilities import scanner
from praatgrid.utilities import utils
from praatgrid.utilities.constants import (
    Encoding,
    ErrorReportingMode,
    TextgridFormats,
    Interval,
    Point,
    INTERVAL_TIER,
    POINT_TIER,
    TIER_CLASSES,
    FILE_TYPE,
    LEGACY_SHORT_FILE_TYPE,
    OBJECT_CLASS,
)
from praatgrid.utilities.scanner import Token

INTERVALS = "intervals"
POINTS = "points"


class _TokenStream:
    """Forward-only access to the scanned tokens with a small lookahead"""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.index = 0

    def peek(self, offset: int = 0) -> Token:
        # The last token is always EOF
        return self.tokens[min(self.index + offset, len(self.tokens) - 1)]

    def next(self) -> Token:
        token = self.peek()
        if token.kind != scanner.EOF:
            self.index += 1
        return token

    def expect(self, kind: str, description: str) -> Token:
        token = self.next()
        if token.kind != kind:
            raise errors.UnexpectedToken(
                f"Expected {description} but found {token.describe()}",
                *token.location,
            )
        return token

    def expectWord(self, words: Sequence[str]) -> Token:
        token = self.next()
        if token.kind != scanner.WORD or token.value not in words:
            raise errors.UnexpectedToken(
                f"Expected label '{' or '.join(words)}' but found {token.describe()}",
                *token.location,
            )
        return token

    def expectPunct(self, punct: str) -> Token:
        token = self.next()
        if token.kind != scanner.PUNCT or token.value != punct:
            raise errors.UnexpectedToken(
                f"Expected '{punct}' but found {token.describe()}",
                *token.location,
            )
        return token

    def expectCount(self) -> Tuple[int, Token]:
        token = self.expect(scanner.NUMBER, "a count")
        value = float(token.value)
        if value < 0 or not value.is_integer():
            raise errors.UnexpectedToken(
                f"Expected a non-negative whole number but found {token.describe()}",
                *token.location,
            )
        return int(value), token


class _ShortFormReader:
    """Reads fields that appear one after another without labels"""

    def __init__(self, stream: _TokenStream):
        self.stream = stream

    def number(self, labels: Sequence[str]) -> Token:
        return self.stream.expect(scanner.NUMBER, f"a number for '{labels[0]}'")

    def string(self, labels: Sequence[str]) -> Token:
        return self.stream.expect(scanner.STRING, f"a string for '{labels[0]}'")

    def count(self, labels: Sequence[str]) -> Tuple[int, Token]:
        return self.stream.expectCount()

    def tiersFlag(self) -> Token:
        return self.stream.expect(scanner.FLAG, "<exists> or <absent>")

    def tierListStart(self) -> None:
        pass

    def tierHeader(self, tierNum: int) -> Token:
        return self.stream.peek()

    def tierClass(self) -> Token:
        return self.stream.expect(scanner.STRING, "a tier class")

    def childCount(self, childType: str) -> Tuple[int, Token]:
        return self.stream.expectCount()

    def childHeader(self, childType: str, childNum: int) -> Token:
        return self.stream.peek()

    def atTierStart(self) -> bool:
        return self.stream.peek().kind == scanner.STRING

    def atChildBoundary(self, childType: str) -> bool:
        return self.stream.peek().kind != scanner.NUMBER


class _LongFormReader:
    """Reads fields written as 'label = value' with bracketed item numbers"""

    def __init__(self, stream: _TokenStream):
        self.stream = stream

    def _label(self, labels: Sequence[str]) -> Token:
        token = self.stream.expectWord(labels)
        self.stream.expectPunct("=")
        return token

    def number(self, labels: Sequence[str]) -> Token:
        self._label(labels)
        return self.stream.expect(scanner.NUMBER, f"a number for '{labels[0]}'")

    def string(self, labels: Sequence[str]) -> Token:
        self._label(labels)
        return self.stream.expect(scanner.STRING, f"a string for '{labels[0]}'")

    def count(self, labels: Sequence[str]) -> Tuple[int, Token]:
        self._label(labels)
        return self.stream.expectCount()

    def tiersFlag(self) -> Token:
        self.stream.expectWord(["tiers"])
        self.stream.expectPunct("?")
        return self.stream.expect(scanner.FLAG, "<exists> or <absent>")

    def tierListStart(self) -> None:
        # 'item []:' precedes the first tier
        if (
            self.atTierStart()
            and _isPunct(self.stream.peek(1), "[")
            and _isPunct(self.stream.peek(2), "]")
        ):
            self._bracketedHeader(["item"], None)

    def _bracketedHeader(self, words: Sequence[str], number: Optional[int]) -> Token:
        token = self.stream.expectWord(words)
        self.stream.expectPunct("[")
        if number is not None:
            numberToken = self.stream.expect(scanner.NUMBER, f"{words[0]} number {number}")
            if numberToken.value != number:
                raise errors.UnexpectedToken(
                    f"Expected {words[0]} number {number} but found {numberToken.describe()}",
                    *numberToken.location,
                )
        self.stream.expectPunct("]")
        self.stream.expectPunct(":")
        return token

    def tierHeader(self, tierNum: int) -> Token:
        return self._bracketedHeader(["item"], tierNum)

    def tierClass(self) -> Token:
        self._label(["class"])
        return self.stream.expect(scanner.STRING, "a tier class")

    def childCount(self, childType: str) -> Tuple[int, Token]:
        self.stream.expectWord([childType])
        self.stream.expectPunct(":")
        return self.count(["size"])

    def childHeader(self, childType: str, childNum: int) -> Token:
        return self._bracketedHeader([childType], childNum)

    def atTierStart(self) -> bool:
        token = self.stream.peek()
        return token.kind == scanner.WORD and token.value == "item"

    def atChildBoundary(self, childType: str) -> bool:
        token = self.stream.peek()
        return not (token.kind == scanner.WORD and token.value == childType)


def _isPunct(token: Token, punct: str) -> bool:
    return token.kind == scanner.PUNCT and token.value == punct


_Reader = Union[_ShortFormReader, _LongFormReader]

_READERS = {
    Encoding.LONG: _LongFormReader,
    Encoding.SHORT: _ShortFormReader,
}


def _readHeader(stream: _TokenStream) -> None:
    """Checks that the text declares a textgrid: File type and Object class"""
    for expectedValues in ((FILE_TYPE, LEGACY_SHORT_FILE_TYPE), (OBJECT_CLASS,)):
        while stream.peek().kind == scanner.WORD or _isPunct(stream.peek(), "="):
            stream.next()

        token = stream.next()
        if token.kind != scanner.STRING or token.value not in expectedValues:
            raise errors.NotATextGrid(
                f"Not a textgrid file; expected header value '{expectedValues[0]}' "
                f"but found {token.describe()}",
                *token.location,
            )


def parseTextgridStr(
    data: str,
    reportingMode: Literal["silence", "warning", "error"] = "error",
) -> Dict:
    """
    Converts a string representation of a Textgrid into a dictionary

    Args:
        data (str): the full text of a long or short form textgrid
        reportingMode (str): 'error' (the default) raises on every violation.
            'warning' and 'silence' downgrade bounds violations (gaps in
            interval tiers, entries or tiers outside of their container)
            to warnings, which are collected under the 'warnings' key;
            'warning' also prints them.  All other violations are always
            raised.

    Returns:
        Dictionary

    Raises:
        LexError: the text contains an unreadable token
        FormatError: the text is not a well-formed textgrid

    https://www.fon.hum.uva.nl/praat/manual/TextGrid_file_formats.html
    """
    utils.validateOption("reportingMode", reportingMode, ErrorReportingMode)

    tokens = scanner.tokenize(data)
    stream = _TokenStream(tokens)
    _readHeader(stream)

    encoding = scanner.detectEncoding(tokens, stream.index)
    reader: _Reader = _READERS[encoding](stream)

    warnings: List[str] = []
    errorReporter = utils.getErrorReporter(reportingMode, warnings)

    xminToken = reader.number(["xmin"])
    xmaxToken = reader.number(["xmax"])
    tgMin = float(xminToken.value)
    tgMax = float(xmaxToken.value)
    utils.checkTimeRange(tgMin, tgMax, *xminToken.location)

    flagToken = reader.tiersFlag()
    if flagToken.value == "exists":
        numTiers, numTiersToken = reader.count(["size"])
        reader.tierListStart()
    elif flagToken.value == "absent":
        numTiers, numTiersToken = 0, flagToken
    else:
        raise errors.UnexpectedToken(
            f"Expected <exists> or <absent> but found {flagToken.describe()}",
            *flagToken.location,
        )

    tiers = []
    for tierNum in range(1, numTiers + 1):
        if stream.peek().kind == scanner.EOF:
            raise errors.CountMismatch(
                "Textgrid declares more tiers than it contains",
                numTiers,
                len(tiers),
                *numTiersToken.location,
            )
        tiers.append(_parseTier(reader, tierNum, tgMin, tgMax, errorReporter))

    if reader.atTierStart():
        # Read the surplus tiers only to report how many there are
        surplusReporter = utils.getErrorReporter(ErrorReportingMode.SILENCE)
        actual = numTiers
        while reader.atTierStart():
            actual += 1
            try:
                _parseTier(reader, actual, tgMin, tgMax, surplusReporter)
            except errors.FormatError:
                # A broken surplus tier still counts; reading stops there
                break
        raise errors.CountMismatch(
            "Textgrid contains more tiers than it declares",
            numTiers,
            actual,
            *numTiersToken.location,
        )

    trailingToken = stream.peek()
    if trailingToken.kind != scanner.EOF:
        raise errors.UnexpectedToken(
            f"Unexpected {trailingToken.describe()} after the last tier",
            *trailingToken.location,
        )

    return {"xmin": tgMin, "xmax": tgMax, "tiers": tiers, "warnings": warnings}


def _parseTier(
    reader: _Reader,
    tierNum: int,
    tgMin: float,
    tgMax: float,
    errorReporter: utils.ErrorReporter,
) -> Dict:
    reader.tierHeader(tierNum)

    classToken = reader.tierClass()
    if classToken.value not in TIER_CLASSES:
        raise errors.UnknownTierClass(
            f"Unknown tier class '{classToken.value}'; "
            f"expected one of [{', '.join(TIER_CLASSES)}]",
            *classToken.location,
        )
    isInterval = classToken.value == INTERVAL_TIER

    tierName = str(reader.string(["name"]).value)
    tierStartToken = reader.number(["xmin"])
    tierEndToken = reader.number(["xmax"])
    tierStart = float(tierStartToken.value)
    tierEnd = float(tierEndToken.value)
    utils.checkTimeRange(tierStart, tierEnd, *tierStartToken.location)
    utils.checkSpan(
        tierStart, tierEnd, tgMin, tgMax, errorReporter, *tierStartToken.location
    )

    childType = INTERVALS if isInterval else POINTS
    numEntries, numEntriesToken = reader.childCount(childType)

    entries: List[Any]
    if isInterval:
        entries = _parseIntervals(reader, tierStart, tierEnd, errorReporter)
    else:
        entries = _parsePoints(reader, tierStart, tierEnd, errorReporter)

    if len(entries) != numEntries:
        raise errors.CountMismatch(
            f"Tier '{tierName}' declares a different number of {childType} than it contains",
            numEntries,
            len(entries),
            *numEntriesToken.location,
        )

    if isInterval:
        if not entries:
            errorReporter(
                errors.BoundsViolation,
                f"Interval tier '{tierName}' has no intervals covering "
                f"({tierStart}, {tierEnd})",
                *numEntriesToken.location,
            )
        elif my_math.lessThan(entries[-1].end, tierEnd):
            errorReporter(
                errors.BoundsViolation,
                f"Last interval {entries[-1]} of tier '{tierName}' does not reach "
                f"the tier end ({tierEnd})",
                *numEntriesToken.location,
            )

    return {
        "class": classToken.value,
        "name": tierName,
        "xmin": tierStart,
        "xmax": tierEnd,
        "entries": entries,
    }


def _parseIntervals(
    reader: _Reader,
    tierStart: float,
    tierEnd: float,
    errorReporter: utils.ErrorReporter,
) -> List[Interval]:
    intervals: List[Interval] = []
    previous: Optional[Interval] = None
    while not reader.atChildBoundary(INTERVALS):
        headerToken = reader.childHeader(INTERVALS, len(intervals) + 1)
        start = reader.number(["xmin"])
        end = reader.number(["xmax"])
        label = reader.string(["text"])
        interval = Interval(float(start.value), float(end.value), str(label.value))

        utils.checkIntervalOrder(previous, interval, *headerToken.location)
        utils.checkIntervalContiguity(
            previous, interval, tierStart, errorReporter, *headerToken.location
        )
        utils.checkIsOvershoot(interval.end, tierEnd, errorReporter, *end.location)

        intervals.append(interval)
        previous = interval

    return intervals


def _parsePoints(
    reader: _Reader,
    tierStart: float,
    tierEnd: float,
    errorReporter: utils.ErrorReporter,
) -> List[Point]:
    points: List[Point] = []
    previous: Optional[Point] = None
    while not reader.atChildBoundary(POINTS):
        headerToken = reader.childHeader(POINTS, len(points) + 1)
        time = reader.number(["number", "time"])
        label = reader.string(["mark", "text"])
        point = Point(float(time.value), str(label.value))

        utils.checkPointOrder(previous, point, *headerToken.location)
        utils.checkIsUndershoot(point.time, tierStart, errorReporter, *time.location)
        utils.checkIsOvershoot(point.time, tierEnd, errorReporter, *time.location)

        points.append(point)
        previous = point

    return points


def getTextgridAsStr(
    tg: Dict,
    format: Literal["short_textgrid", "long_textgrid"],
) -> str:
    """
    Converts a textgrid dictionary to a string, suitable for saving

    Args:
        tg (dict): the textgrid to convert to a string
        format (str): one of ['short_textgrid', 'long_textgrid']

    Returns:
        a string representation of the textgrid
    """
    utils.validateOption("format", format, TextgridFormats)

    if format == TextgridFormats.LONG_TEXTGRID:
        outputTxt = _tgToLongTextForm(tg)
    else:
        outputTxt = _tgToShortTextForm(tg)

    return outputTxt


def _tgToShortTextForm(tg: Dict) -> str:
    # Header
    outputTxt = ""
    outputTxt += 'File type = "ooTextFile"\n'
    outputTxt += 'Object class = "TextGrid"\n\n'
    outputTxt += "%s\n%s\n" % (
        my_math.numToStr(tg["xmin"]),
        my_math.numToStr(tg["xmax"]),
    )
    outputTxt += "<exists>\n%d\n" % len(tg["tiers"])
    for tier in tg["tiers"]:
        text = ""
        text += '"%s"\n' % tier["class"]
        text += '"%s"\n' % utils.escapeQuotes(tier["name"])
        text += "%s\n%s\n%s\n" % (
            my_math.numToStr(tier["xmin"]),
            my_math.numToStr(tier["xmax"]),
            len(tier["entries"]),
        )

        for entry in tier["entries"]:
            entry = [my_math.numToStr(val) for val in entry[:-1]] + [
                '"%s"' % utils.escapeQuotes(entry[-1])
            ]

            text += "\n".join([str(val) for val in entry]) + "\n"

        outputTxt += text

    return outputTxt


def _tgToLongTextForm(tg: Dict) -> str:
    outputTxt = ""
    outputTxt += 'File type = "ooTextFile"\n'
    outputTxt += 'Object class = "TextGrid"\n\n'

    tab = " " * 4

    # Header
    outputTxt += "xmin = %s \n" % my_math.numToStr(tg["xmin"])
    outputTxt += "xmax = %s \n" % my_math.numToStr(tg["xmax"])
    outputTxt += "tiers? <exists> \n"
    outputTxt += "size = %d \n" % len(tg["tiers"])
    outputTxt += "item []: \n"

    for tierNum, tier in enumerate(tg["tiers"]):
        outputTxt += tab + "item [%d]:\n" % (tierNum + 1)
        outputTxt += tab * 2 + 'class = "%s" \n' % tier["class"]
        outputTxt += tab * 2 + 'name = "%s" \n' % utils.escapeQuotes(tier["name"])
        outputTxt += tab * 2 + "xmin = %s \n" % my_math.numToStr(tier["xmin"])
        outputTxt += tab * 2 + "xmax = %s \n" % my_math.numToStr(tier["xmax"])

        entries = tier["entries"]
        if tier["class"] == INTERVAL_TIER:
            outputTxt += tab * 2 + "intervals: size = %d \n" % len(entries)
            for intervalNum, entry in enumerate(entries):
                start, end, label = entry
                outputTxt += tab * 2 + "intervals [%d]:\n" % (intervalNum + 1)
                outputTxt += tab * 3 + "xmin = %s \n" % my_math.numToStr(start)
                outputTxt += tab * 3 + "xmax = %s \n" % my_math.numToStr(end)
                outputTxt += tab * 3 + 'text = "%s" \n' % utils.escapeQuotes(label)
        elif tier["class"] == POINT_TIER:
            outputTxt += tab * 2 + "points: size = %d \n" % len(entries)
            for pointNum, entry in enumerate(entries):
                timestamp, label = entry
                outputTxt += tab * 2 + "points [%d]:\n" % (pointNum + 1)
                outputTxt += tab * 3 + "number = %s \n" % my_math.numToStr(timestamp)
                outputTxt += tab * 3 + 'mark = "%s" \n' % utils.escapeQuotes(label)

    return outputTxt
