"""
Functions for reading textgrid files.

This file links the main data structures for representing Textgrid data:
Textgrid, IntervalTier, and PointTier

A Textgrid is a container for multiple annotation tiers.  Tiers can contain
either interval data (IntervalTier) or point data (PointTier).
Tiers in a Textgrid are ordered; their names need not be unique.

parseTextgrid() reads a textgrid from a string, openTextgrid() from a file
and readTextgrid() from an open file object.  Textgrid.save() can be used to
save a Textgrid object to a file.

Please check out the respective files for more documentation on each class:
IntervalTier in data_classes/interval_tier.py
PointTier in data_classes/point_tier.py
Textgrid in data_classes/textgrid.py
"""

import codecs
import io
from typing import IO, List, Union, Type

from typing_extensions import Literal


from praatgrid.utilities.constants import (
    INTERVAL_TIER,
)
from praatgrid.data_classes.interval_tier import IntervalTier
from praatgrid.data_classes.point_tier import PointTier
from praatgrid.data_classes.textgrid import Textgrid
from praatgrid.utilities import textgrid_io
from praatgrid.utilities import utils
from praatgrid.utilities import constants
from praatgrid.utilities import errors

__all__ = [
    "IntervalTier",
    "PointTier",
    "Textgrid",
    "parseTextgrid",
    "openTextgrid",
    "readTextgrid",
]


def parseTextgrid(
    data: str,
    reportingMode: Literal["silence", "warning", "error"] = "error",
    duplicateNamesMode: Literal["allow", "error", "rename"] = "allow",
) -> Textgrid:
    """
    Reads a textgrid from the text of a long or short form textgrid file

    The encoding is detected from the text itself.

    Args:
        data (str): the contents of a .TextGrid file
        reportingMode (str): 'error' (the default) rejects any textgrid that
            breaks the format's rules.  With 'warning' or 'silence', gaps in
            interval tiers and entries or tiers that stick out of their
            container are tolerated and listed in Textgrid.warnings
            ('warning' also prints them).  Overlapping or out-of-order
            entries and malformed text are rejected in every mode.
        duplicateNamesMode (str): what to do if two tiers share a name:
            'allow' keeps them (lookups by name find the first one),
            'error' raises DuplicateTierName, 'rename' appends _2, _3, ...
            to later tiers

    Returns:
        Textgrid

    Raises:
        LexError: the text contains an unreadable token
        FormatError: the text is not a well-formed textgrid; the subclass
            (NotATextGrid, CountMismatch, OrderViolation, BoundsViolation,
            UnknownTierClass, UnexpectedToken) names the problem

    https://www.fon.hum.uva.nl/praat/manual/TextGrid_file_formats.html
    """
    utils.validateOption("reportingMode", reportingMode, constants.ErrorReportingMode)
    utils.validateOption(
        "duplicateNamesMode", duplicateNamesMode, constants.DuplicateNames
    )

    tgAsDict = textgrid_io.parseTextgridStr(data, reportingMode)

    tierNames: List[str] = []
    for tier in tgAsDict["tiers"]:
        name = tier["name"]
        if name in tierNames:
            if duplicateNamesMode == constants.DuplicateNames.ERROR:
                raise errors.DuplicateTierName(
                    f"Your textgrid contains tiers with the same name '{name}'. "
                    "If you set parseTextgrid(..., duplicateNamesMode='rename'), "
                    "numbers will be appended to the end of tiers to ensure they "
                    "are unique."
                )
            elif duplicateNamesMode == constants.DuplicateNames.RENAME:
                newName = name
                i = 2
                while newName in tierNames:
                    newName = f"{name}_{i}"
                    i += 1
                name = newName
                tier["name"] = name
        tierNames.append(name)

    return _dictionaryToTg(tgAsDict)


def openTextgrid(
    fnFullPath: str,
    reportingMode: Literal["silence", "warning", "error"] = "error",
    duplicateNamesMode: Literal["allow", "error", "rename"] = "allow",
) -> Textgrid:
    """
    Opens a textgrid file; UTF-8 and UTF-16 (with a byte order mark) are both fine

    Args:
        fnFullPath (str): the path to the textgrid to open
        reportingMode, duplicateNamesMode: see parseTextgrid()

    Returns:
        Textgrid

    Errors raised while opening or decoding the file are passed on unchanged.
    """
    with io.open(fnFullPath, "rb") as fd:
        return readTextgrid(fd, reportingMode, duplicateNamesMode)


def readTextgrid(
    fd: IO,
    reportingMode: Literal["silence", "warning", "error"] = "error",
    duplicateNamesMode: Literal["allow", "error", "rename"] = "allow",
) -> Textgrid:
    """
    Reads a textgrid from an open file object, in text or binary mode

    Args:
        fd: the file object to read from; it is read to the end
        reportingMode, duplicateNamesMode: see parseTextgrid()

    Returns:
        Textgrid
    """
    data = fd.read()
    if isinstance(data, bytes):
        data = _decode(data)

    return parseTextgrid(data, reportingMode, duplicateNamesMode)


def _decode(data: bytes) -> str:
    """Praat saves textgrids as UTF-16 when they contain non-ascii text"""
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16")
    return data.decode("utf-8")


def _dictionaryToTg(tgAsDict: dict) -> Textgrid:
    """Converts a dictionary representation of a textgrid to a Textgrid

    The dictionary comes from the parser, which has already enforced or
    reported every problem, so nothing is reported a second time here.
    """
    silence = constants.ErrorReportingMode.SILENCE

    tiers = []
    for tierAsDict in tgAsDict["tiers"]:
        klass: Union[Type[PointTier], Type[IntervalTier]]
        if tierAsDict["class"] == INTERVAL_TIER:
            klass = IntervalTier
        else:
            klass = PointTier
        tier = klass(
            tierAsDict["name"],
            tierAsDict["entries"],
            tierAsDict["xmin"],
            tierAsDict["xmax"],
            reportingMode=silence,
        )
        tiers.append(tier)

    return Textgrid(
        tgAsDict["xmin"],
        tgAsDict["xmax"],
        tiers,
        reportingMode=silence,
        warnings=tgAsDict["warnings"],
    )
