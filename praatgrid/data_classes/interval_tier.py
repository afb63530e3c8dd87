"""
An IntervalTier is a tier containing an array of intervals -- data that spans a period of time.
"""
from typing import List, Optional, Iterable, Sequence, Any, Tuple
from typing_extensions import Literal
from itertools import chain

from praatgrid.utilities.constants import Interval, INTERVAL_TIER
from praatgrid.utilities import constants
from praatgrid.utilities import errors
from praatgrid.utilities import utils
from praatgrid.utilities import my_math

from praatgrid.data_classes.textgrid_tier import TextgridTier


class IntervalTier(TextgridTier[Interval]):
    """An interval tier is for annotating events that have duration.

    Intervals are contiguous: each one starts where the previous one
    ended, and together they cover the tier from its minTimestamp to its
    maxTimestamp.  Unlabeled stretches are intervals with an empty label.
    """

    tierType = INTERVAL_TIER
    entryType = Interval

    def __init__(
        self,
        name: str,
        entries: Iterable[Sequence[Any]] = (),
        minT: Optional[float] = None,
        maxT: Optional[float] = None,
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ):
        super(IntervalTier, self).__init__(name, entries, minT, maxT, reportingMode)
        self._starts = tuple(entry.start for entry in self._entries)

    @property
    def intervals(self) -> Tuple[Interval, ...]:
        return self._entries

    @property
    def timestamps(self) -> List[float]:
        return sorted(set(chain.from_iterable(entry[:2] for entry in self._entries)))

    def intervalAt(self, time: float) -> Optional[Interval]:
        """Return the interval containing time, or None

        An interval contains the times from its start up to, but not
        including, its end.  The last interval also contains its end, so
        every time within the tier's span belongs to exactly one interval.
        """
        i = utils.findLastBefore(self._starts, time, inclusive=True)
        if i is None:
            return None

        interval = self._entries[i]
        if time < interval.end:
            return interval
        if i == len(self._entries) - 1 and my_math.isclose(time, interval.end):
            return interval

        return None

    def getNonEntries(self) -> List[Interval]:
        """Return the stretches of the tier that no interval covers

        A tier read in strict mode never has any.
        """
        gaps = utils.invertIntervalList(
            [entry[:2] for entry in self._entries], self.minTimestamp, self.maxTimestamp
        )
        return [Interval(start, end, "") for start, end in gaps]

    def fillGaps(
        self,
        label: str = "",
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ) -> "IntervalTier":
        """Return a copy of this tier with every gap filled by an interval

        Args:
            label: the label given to the new intervals
            reportingMode: how the new tier reports intervals that still
                do not fit in the tier, such as one running past its end

        Returns:
            the modified version of the current tier
        """
        filler = [Interval(start, end, label) for start, end, _ in self.getNonEntries()]
        newEntries = sorted(chain(self._entries, filler), key=lambda entry: entry.start)

        return self.new(entries=newEntries, reportingMode=reportingMode)

    def fixBoundaries(
        self,
        preferFirst: bool = True,
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ) -> "IntervalTier":
        """Return a copy of this tier with the gaps between intervals closed

        Neighbouring intervals that do not share a boundary are stretched
        to meet.  Gaps before the first interval or after the last one are
        left alone; use fillGaps() for those.

        Args:
            preferFirst: if True, the earlier interval is extended up to
                the start of the later one; otherwise the later interval
                is extended back to the end of the earlier one
            reportingMode: how the new tier reports intervals that still
                do not fit in the tier

        Returns:
            the modified version of the current tier
        """
        newEntries = list(self._entries)
        for i in range(len(newEntries) - 1):
            current = newEntries[i]
            following = newEntries[i + 1]
            if my_math.isclose(current.end, following.start):
                continue

            if preferFirst:
                newEntries[i] = current._replace(end=following.start)
            else:
                newEntries[i + 1] = following._replace(start=current.end)

        return self.new(entries=newEntries, reportingMode=reportingMode)

    def validate(
        self, reportingMode: Literal["silence", "warning", "error"] = "warning"
    ) -> bool:
        """Validate this tier.

        Args:
            reportingMode (str): Determines the behavior if the intervals
                leave gaps or do not fit in the tier.

        Returns:
            True if the tier is valid; False if not

        Raises:
            WrongOption: the reportingMode is not valid
            OrderViolation: intervals are empty, overlapping or out of order;
                raised regardless of reportingMode
            BoundsViolation: in 'error' mode, the intervals do not cover
                the tier exactly
        """
        utils.validateOption(
            "reportingMode", reportingMode, constants.ErrorReportingMode
        )
        errorReporter = utils.getErrorReporter(reportingMode)

        isValid = True
        previousInterval = None
        for interval in self._entries:
            utils.checkIntervalOrder(previousInterval, interval)

            if not utils.checkIntervalContiguity(
                previousInterval, interval, self.minTimestamp, errorReporter
            ):
                isValid = False

            if utils.checkIsOvershoot(interval.end, self.maxTimestamp, errorReporter):
                isValid = False

            previousInterval = interval

        if previousInterval is None:
            isValid = False
            errorReporter(
                errors.BoundsViolation,
                f"Interval tier '{self.name}' has no intervals covering "
                f"({self.minTimestamp}, {self.maxTimestamp})",
            )
        elif my_math.lessThan(previousInterval.end, self.maxTimestamp):
            isValid = False
            errorReporter(
                errors.BoundsViolation,
                f"Last interval {previousInterval} does not reach the "
                f"tier end ({self.maxTimestamp})",
            )

        return isValid
