"""The abstract class used by all textgrid tiers."""
import re
from typing import List, Optional, Sequence, Type, TypeVar, Iterable, Any, Generic, Tuple
from abc import ABC, abstractmethod

from typing_extensions import Literal

from praatgrid.utilities import constants
from praatgrid.utilities import errors
from praatgrid.utilities import my_math
from praatgrid.utilities import utils


# EntryType: for defining TextgridTier as a generic container class
EntryType = TypeVar("EntryType", constants.Point, constants.Interval)
# TierType: can be replaced with typing.Self in Python 3.11+
TierType = TypeVar("TierType", bound="TextgridTier")


class TextgridTier(ABC, Generic[EntryType]):
    """A read-only container of interval or point entries.

    Tiers are built once and never modified; methods that change a tier
    return a new one.
    """
    tierType: str
    entryType: Type[EntryType]

    def __init__(
        self,
        name: str,
        entries: Iterable[Sequence[Any]] = (),
        minT: Optional[float] = None,
        maxT: Optional[float] = None,
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ):
        """
        PointTier entries: [(timeVal1, label1), (timeVal2, label2), ...]
        IntervalTier entries: [(startTime1, endTime1, label1), (startTime2, endTime2, label2), ...]

        Entries must already be in time order; they are converted to the
        proper entry type but never sorted, so that out-of-order data is
        reported rather than silently repaired.

        If minT or maxT is not given, it is taken from the entries.

        Raises:
            WrongOption: the reportingMode is not valid
            OrderViolation: entries overlap or are out of order
            BoundsViolation: in 'error' mode, entries do not fit the
                tier's span (see validate())
        """
        utils.validateOption("reportingMode", reportingMode, constants.ErrorReportingMode)
        self._name = name
        self._entries = tuple(self.entryType.build(entry) for entry in entries)
        self._minTimestamp, self._maxTimestamp = self._calculateMinAndMaxTime(
            minT=minT, maxT=maxT
        )
        utils.checkTimeRange(self._minTimestamp, self._maxTimestamp)
        self.validate(reportingMode)

    def new(
        self: TierType,
        name: Optional[str] = None,
        entries: Optional[Iterable[Sequence[Any]]] = None,
        minTimestamp: Optional[float] = None,
        maxTimestamp: Optional[float] = None,
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ) -> TierType:
        """Derive a new tier from an existing tier."""
        if name is None:
            name = self.name
        if entries is None:
            entries = self._entries
        if minTimestamp is None:
            minTimestamp = self.minTimestamp
        if maxTimestamp is None:
            maxTimestamp = self.maxTimestamp
        return type(self)(name, entries, minTimestamp, maxTimestamp, reportingMode)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, type(self))
            and self.name == other.name
            and my_math.isclose(self.minTimestamp, other.minTimestamp)
            and my_math.isclose(self.maxTimestamp, other.maxTimestamp)
            and self._entries == other._entries
        )

    def __repr__(self):
        return type(self).__name__ + \
            f"{(self.name, list(self._entries), self.minTimestamp, self.maxTimestamp)}"

    @property
    def name(self) -> str:
        return self._name

    @property
    def minTimestamp(self) -> float:
        return self._minTimestamp

    @property
    def maxTimestamp(self) -> float:
        return self._maxTimestamp

    @property
    def entries(self) -> Tuple[EntryType, ...]:
        return self._entries

    @property
    @abstractmethod
    def timestamps(self) -> List[float]:  # pragma: no cover
        """All unique timestamps used in entries, sorted, not including minT and maxT of the tier."""
        pass

    def _calculateMinAndMaxTime(
        self,
        minT: Optional[float] = None,
        maxT: Optional[float] = None,
    ) -> Tuple[float, float]:
        timestamps = self.timestamps
        try:
            calculatedMin = float(minT) if minT is not None else min(timestamps)
            calculatedMax = float(maxT) if maxT is not None else max(timestamps)
        except ValueError:
            raise errors.ArgumentError(
                "A tier without entries needs both a min and a max timestamp"
            )
        return calculatedMin, calculatedMax

    def find(
        self,
        matchLabel: str,
        substrMatchFlag: bool = False,
        usingRE: bool = False,
    ) -> List[int]:
        """Return the index of all entries that match the given label.

        Args:
            matchLabel: the label to search for
            substrMatchFlag: if True, match any label containing matchLabel.
                if False, label must be the same as matchLabel.
            usingRE: if True, matchLabel is interpreted as a regular expression

        Returns:
            A list of indicies
        """
        returnList: List[int] = []
        if usingRE:
            for i, entry in enumerate(self.entries):
                matchList = re.findall(matchLabel, entry.label, re.I)
                if matchList != []:
                    returnList.append(i)
        else:
            for i, entry in enumerate(self.entries):
                if not substrMatchFlag:
                    if entry.label == matchLabel:
                        returnList.append(i)
                else:
                    if matchLabel in entry.label:
                        returnList.append(i)

        return returnList

    @abstractmethod
    def validate(
        self, reportingMode: Literal["silence", "warning", "error"] = "warning"
    ) -> bool:
        pass  # pragma: no cover
