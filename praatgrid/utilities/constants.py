"""Constant values and primitive definitions that can be shared throughout the code."""
from typing import NamedTuple, Any
import math

from typing_extensions import Final

from praatgrid.utilities import errors

INTERVAL_TIER: Final = "IntervalTier"
POINT_TIER: Final = "TextTier"

TIER_CLASSES: Final = (INTERVAL_TIER, POINT_TIER)

FILE_TYPE: Final = "ooTextFile"
LEGACY_SHORT_FILE_TYPE: Final = "ooTextFile short"
OBJECT_CLASS: Final = "TextGrid"

# Relative tolerance used when comparing timestamps
TIME_TOLERANCE: Final = 1e-14


# https://stackoverflow.com/questions/34570814/equality-overloading-for-namedtuple
class Interval(NamedTuple):
    start: float
    end: float
    label: str

    @classmethod
    def build(cls, *args: Any):
        """
        Safe constructor for Interval.

        Interval(start, end, label) doesn't check the type at runtime.
        Should only be used on validated data.

        Interval.build() performs type conversion. Labels are kept as-is;
        whitespace inside a label is meaningful in a textgrid.
        It accepts either 3 arguments (start, end, label),
        or 1 argument (another Interval or a tuple or list of 3 elements).

        Raises:
            ArgumentError: Either wrong number of arguments, or failed to convert
                the arguments to float or string.
        """
        try:
            start, end, label = args[0] if len(args) == 1 else args
            interval = cls(float(start), float(end), str(label))
        except (TypeError, ValueError):
            raise errors.ArgumentError(f"Cannot build Interval from {args}")
        if not (math.isfinite(interval.start) and math.isfinite(interval.end)):
            raise errors.ArgumentError(f"Interval times must be finite: {args}")
        return interval

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2.0

    def __eq__(self, other: Any):
        return (
            isinstance(other, Interval)
            and math.isclose(self.start, other.start, rel_tol=TIME_TOLERANCE)
            and math.isclose(self.end, other.end, rel_tol=TIME_TOLERANCE)
            and self.label == other.label
        )

    def __ne__(self, other: Any):
        return not self == other

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return str(tuple(self))


class Point(NamedTuple):
    time: float
    label: str

    @classmethod
    def build(cls, *args: Any):
        """
        Safe constructor for Point.

        It accepts either 2 arguments (time, label),
        or 1 argument (another Point or a tuple or list of 2 elements).

        Raises:
            ArgumentError: Either wrong number of arguments, or failed to convert
                the arguments to float or string.
        """
        try:
            time, label = args[0] if len(args) == 1 else args
            point = cls(float(time), str(label))
        except (TypeError, ValueError):
            raise errors.ArgumentError(f"Cannot build Point from {args}")
        if not math.isfinite(point.time):
            raise errors.ArgumentError(f"Point time must be finite: {args}")
        return point

    def __eq__(self, other: Any):
        return (
            isinstance(other, Point)
            and math.isclose(self.time, other.time, rel_tol=TIME_TOLERANCE)
            and self.label == other.label
        )

    def __ne__(self, other: Any):
        return not self == other

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return str(tuple(self))


class Encoding:
    LONG: Final = "long"
    SHORT: Final = "short"

    validOptions = [LONG, SHORT]


class TextgridFormats:
    LONG_TEXTGRID: Final = "long_textgrid"
    SHORT_TEXTGRID: Final = "short_textgrid"

    validOptions = [LONG_TEXTGRID, SHORT_TEXTGRID]


class ErrorReportingMode:
    SILENCE: Final = "silence"
    WARNING: Final = "warning"
    ERROR: Final = "error"

    validOptions = [SILENCE, WARNING, ERROR]


class DuplicateNames:
    ALLOW: Final = "allow"
    ERROR: Final = "error"
    RENAME: Final = "rename"

    validOptions = [ALLOW, ERROR, RENAME]
