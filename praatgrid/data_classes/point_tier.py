"""
A PointTier is a tier containing an array of points -- data that exists at a specific point in time.
"""
from typing import List, Optional, Iterable, Sequence, Any, Tuple

from typing_extensions import Literal

from praatgrid.utilities.constants import Point, POINT_TIER
from praatgrid.utilities import constants
from praatgrid.utilities import utils

from praatgrid.data_classes.textgrid_tier import TextgridTier


class PointTier(TextgridTier[Point]):
    tierType = POINT_TIER
    entryType = Point

    def __init__(
        self,
        name: str,
        entries: Iterable[Sequence[Any]] = (),
        minT: Optional[float] = None,
        maxT: Optional[float] = None,
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ):
        """A point tier is for annotating instaneous events.

        The entries is of the form:
        [(timeVal1, label1), (timeVal2, label2), ]

        Times must be strictly increasing.  The data stored in the labels
        can be anything but will be interpreted as text (the label could
        be descriptive text e.g. ('peak point here') or numerical data
        e.g. (pitch values like '132'))
        """
        super(PointTier, self).__init__(name, entries, minT, maxT, reportingMode)
        self._times = tuple(entry.time for entry in self._entries)

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._entries

    @property
    def timestamps(self) -> List[float]:
        """All unique timestamps used in this tier."""
        return sorted(set(time for time, _ in self._entries))

    def pointBefore(self, time: float, inclusive: bool = False) -> Optional[Point]:
        """Return the last point before time, or None

        Args:
            time: the reference time
            inclusive: if True, a point exactly at time counts as before it
        """
        i = utils.findLastBefore(self._times, time, inclusive)
        return None if i is None else self._entries[i]

    def pointAfter(self, time: float, inclusive: bool = False) -> Optional[Point]:
        """Return the first point after time, or None

        Args:
            time: the reference time
            inclusive: if True, a point exactly at time counts as after it
        """
        i = utils.findFirstAfter(self._times, time, inclusive)
        return None if i is None else self._entries[i]

    def validate(
        self, reportingMode: Literal["silence", "warning", "error"] = "warning"
    ) -> bool:
        """Validate this tier.

        Returns whether the tier is valid or not. If reportingMode is "warning"
        or "error" this will also print on error or stop execution, respectively.

        Args:
            reportingMode: Determines the behavior if points fall outside
                of the tier

        Returns:
            True if this tier is valid; False if not

        Raises:
            WrongOption: the reportingMode is not valid
            OrderViolation: two points share a time or are out of order;
                raised regardless of reportingMode
            BoundsViolation: in 'error' mode, a point lies outside the tier
        """
        utils.validateOption(
            "reportingMode", reportingMode, constants.ErrorReportingMode
        )
        errorReporter = utils.getErrorReporter(reportingMode)

        isValid = True
        previousPoint = None
        for point in self._entries:
            utils.checkPointOrder(previousPoint, point)

            if utils.checkIsUndershoot(point.time, self.minTimestamp, errorReporter):
                isValid = False

            if utils.checkIsOvershoot(point.time, self.maxTimestamp, errorReporter):
                isValid = False

            previousPoint = point

        return isValid
