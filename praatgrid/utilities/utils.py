"""
Various generic utility functions
"""

import math
from bisect import bisect_left, bisect_right
from typing_extensions import Literal
from typing import Any, Callable, List, NoReturn, Optional, Sequence, Tuple, Type

from praatgrid.utilities import errors
from praatgrid.utilities import constants
from praatgrid.utilities import my_math

ErrorReporter = Callable[..., None]


def reportNoop(_exception: Type[BaseException], _text: str, *_location: Any) -> None:
    pass


def reportException(exception: Type[BaseException], text: str, *location: Any) -> NoReturn:
    raise exception(text, *location)


def reportWarning(exception: Type[BaseException], text: str, *location: Any) -> None:
    print(str(exception(text, *location)))


def getErrorReporter(
    reportingMode: Literal["silence", "warning", "error"],
    collectedWarnings: Optional[List[str]] = None,
) -> ErrorReporter:
    """Returns a function for reporting violations in the given mode

    In 'silence' and 'warning' mode, if collectedWarnings is given, the
    text of every reported violation (with its position) is appended to it.
    """
    modeToFunc = {
        constants.ErrorReportingMode.SILENCE: reportNoop,
        constants.ErrorReportingMode.WARNING: reportWarning,
        constants.ErrorReportingMode.ERROR: reportException,
    }
    reporter = modeToFunc[reportingMode]

    if collectedWarnings is None or reportingMode == constants.ErrorReportingMode.ERROR:
        return reporter

    def collectingReporter(exception: Type[BaseException], text: str, *location: Any) -> None:
        collectedWarnings.append(str(exception(text, *location)))
        reporter(exception, text, *location)

    return collectingReporter


def validateOption(variableName, value, optionClass):
    if value not in optionClass.validOptions:
        raise errors.WrongOption(variableName, value, optionClass.validOptions)


def checkIsUndershoot(
    time: float, referenceTime: float, errorReporter: ErrorReporter, *location: Any
) -> bool:
    if my_math.lessThan(time, referenceTime):
        errorReporter(
            errors.BoundsViolation,
            f"'{time}' occurs before minimum allowed time '{referenceTime}'",
            *location,
        )
        return True
    else:
        return False


def checkIsOvershoot(
    time: float, referenceTime: float, errorReporter: ErrorReporter, *location: Any
) -> bool:
    if my_math.lessThan(referenceTime, time):
        errorReporter(
            errors.BoundsViolation,
            f"'{time}' occurs after maximum allowed time '{referenceTime}'",
            *location,
        )
        return True
    else:
        return False


def checkIntervalOrder(
    previous: Optional[constants.Interval],
    interval: constants.Interval,
    *location: Any,
) -> None:
    """Raises if the interval is empty, inverted, or runs into the previous one

    These violations are never downgraded: binary search over a tier
    relies on its intervals being sorted and disjoint.
    """
    if not my_math.lessThan(interval.start, interval.end):
        raise errors.OrderViolation(
            "Invalid interval. End time occurs before or on the start time: "
            f"{interval}",
            *location,
        )
    if previous is not None and my_math.lessThan(interval.start, previous.end):
        raise errors.OrderViolation(
            "Two intervals in the same tier overlap in time or are out of order: "
            f"{previous} and {interval}",
            *location,
        )


def checkIntervalContiguity(
    previous: Optional[constants.Interval],
    interval: constants.Interval,
    tierStart: float,
    errorReporter: ErrorReporter,
    *location: Any,
) -> bool:
    """Reports a gap between the interval and whatever precedes it in the tier"""
    expectedStart = tierStart if previous is None else previous.end
    if not my_math.isclose(interval.start, expectedStart):
        if previous is None:
            errorReporter(
                errors.BoundsViolation,
                f"First interval {interval} does not start at the tier start ({tierStart})",
                *location,
            )
        else:
            errorReporter(
                errors.BoundsViolation,
                f"Gap between intervals {previous} and {interval}",
                *location,
            )
        return False
    return True


def checkPointOrder(
    previous: Optional[constants.Point], point: constants.Point, *location: Any
) -> None:
    """Raises if the point does not come strictly after the previous one"""
    if previous is not None and not my_math.lessThan(previous.time, point.time):
        raise errors.OrderViolation(
            "Points in the same tier must be in strictly ascending time order: "
            f"{previous} and {point}",
            *location,
        )


def checkSpan(
    start: float,
    end: float,
    containerStart: float,
    containerEnd: float,
    errorReporter: ErrorReporter,
    *location: Any,
) -> bool:
    """Reports if [start, end] does not cover [containerStart, containerEnd] exactly"""
    if my_math.isclose(start, containerStart) and my_math.isclose(end, containerEnd):
        return True

    errorReporter(
        errors.BoundsViolation,
        f"Span ({start}, {end}) does not match the enclosing span "
        f"({containerStart}, {containerEnd})",
        *location,
    )
    return False


def checkTimeRange(start: float, end: float, *location: Any) -> None:
    if not (math.isfinite(start) and math.isfinite(end)):
        raise errors.BoundsViolation(
            f"Time range ({start}, {end}) must be finite", *location
        )
    if not my_math.lessThan(start, end):
        raise errors.BoundsViolation(
            f"Start time ({start}) must occur before end time ({end})", *location
        )


def escapeQuotes(text: str) -> str:
    return text.replace('"', '""')


def invertIntervalList(
    inputList: Sequence[Tuple[float, float]], minValue: float, maxValue: float
) -> List[Tuple[float, float]]:
    """Inverts the segments of a sorted list of disjoint intervals

    e.g.
    [(0,1), (4,5), (7,10)] with bounds (0, 10) -> [(1,4), (5,7)]
    [(0.5, 1.2), (3.4, 5.0)] with bounds (0, 5) -> [(0.0, 0.5), (1.2, 3.4)]
    """
    invList: List[Tuple[float, float]] = []
    previousEnd = minValue
    for start, end in inputList:
        if my_math.lessThan(previousEnd, start):
            invList.append((previousEnd, start))
        previousEnd = end

    if my_math.lessThan(previousEnd, maxValue):
        invList.append((previousEnd, maxValue))

    return invList


def findLastBefore(times: Sequence[float], time: float, inclusive: bool) -> Optional[int]:
    """Index of the last sorted value before (or at, if inclusive) time"""
    if inclusive:
        index = bisect_right(times, time) - 1
    else:
        index = bisect_left(times, time) - 1

    return index if index >= 0 else None


def findFirstAfter(times: Sequence[float], time: float, inclusive: bool) -> Optional[int]:
    """Index of the first sorted value after (or at, if inclusive) time"""
    if inclusive:
        index = bisect_left(times, time)
    else:
        index = bisect_right(times, time)

    return index if index < len(times) else None
