"""
The Textgrid class: an ordered, read-only collection of annotation tiers.

This is the 'heart' of praatgrid.
"""
import io
from typing import Iterable, List, Optional, Tuple, Any, Union
from typing_extensions import Literal

from praatgrid.data_classes.point_tier import PointTier
from praatgrid.data_classes.interval_tier import IntervalTier
from praatgrid.utilities import constants
from praatgrid.utilities import errors
from praatgrid.utilities import my_math
from praatgrid.utilities import textgrid_io
from praatgrid.utilities import utils

Tier = Union[IntervalTier, PointTier]


class Textgrid:
    """A container that stores interval and point tiers.

    Textgrids are used by the Praat software to group tiers.  Each tier
    contains different annotation information for an audio recording.

    Tier names need not be unique.  Lookups by name return the first
    tier with that name, in file order.

    Attributes:
        tierNames(Tuple[str]): the names of the tiers, in order
        tiers(Tuple[TextgridTier]): the list of ordered tiers
        minTimestamp(float): the minimum allowable timestamp in the textgrid
        maxTimestamp(float): the maximum allowable timestamp in the textgrid
        warnings(Tuple[str]): problems downgraded to warnings while reading
            the textgrid in a lenient reportingMode
    """

    def __init__(
        self,
        minTimestamp: float,
        maxTimestamp: float,
        tiers: Iterable[Tier] = (),
        reportingMode: Literal["silence", "warning", "error"] = "error",
        warnings: Iterable[str] = (),
    ):
        """Constructor for Textgrids.

        Args:
            minTimestamp: the minimum allowable timestamp in the textgrid
            maxTimestamp: the maximum allowable timestamp in the textgrid
            tiers: the tiers, in order
            reportingMode: determines the behavior if a tier does not
                span the textgrid exactly

        Raises:
            BoundsViolation: minTimestamp does not occur before maxTimestamp,
                or (in 'error' mode) a tier does not span the textgrid
        """
        utils.checkTimeRange(minTimestamp, maxTimestamp)
        self._minTimestamp = float(minTimestamp)
        self._maxTimestamp = float(maxTimestamp)
        self._tiers: Tuple[Tier, ...] = tuple(tiers)
        self._warnings = tuple(warnings)

        self.validate(reportingMode)

    def __len__(self):
        return len(self._tiers)

    def __iter__(self):
        return iter(self._tiers)

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, type(self))
            and my_math.isclose(self.minTimestamp, other.minTimestamp)
            and my_math.isclose(self.maxTimestamp, other.maxTimestamp)
            and self._tiers == other._tiers
        )

    def __repr__(self):
        return f"{type(self).__name__}{(list(self.tiers), self.minTimestamp, self.maxTimestamp)}"

    @property
    def minTimestamp(self) -> float:
        return self._minTimestamp

    @property
    def maxTimestamp(self) -> float:
        return self._maxTimestamp

    @property
    def tierNames(self) -> Tuple[str, ...]:
        return tuple(tier.name for tier in self._tiers)

    @property
    def tiers(self) -> Tuple[Tier, ...]:
        return self._tiers

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self._warnings

    def tierAt(self, tierIndex: int) -> Tier:
        """Get the tier at the specified position"""
        return self._tiers[tierIndex]

    def tierByName(self, tierName: str) -> Optional[Tier]:
        """Get the first tier with the specified name, or None"""
        for tier in self._tiers:
            if tier.name == tierName:
                return tier
        return None

    def getTier(self, tierName: str) -> Tier:
        """Get the first tier with the specified name

        Raises:
            TierNotFound: no tier has that name
        """
        tier = self.tierByName(tierName)
        if tier is None:
            raise errors.TierNotFound(tierName)
        return tier

    def save(
        self,
        fn: str,
        format: Literal["short_textgrid", "long_textgrid"],
        reportingMode: Literal["silence", "warning", "error"] = "error",
    ) -> None:
        """Save the current textgrid to a file.

        Args:
            fn: the fullpath filename of the output
            format: one of ['short_textgrid', 'long_textgrid']
                both are used by praat
            reportingMode: one of "silence", "warning", or "error". This flag
                determines the behavior if the textgrid does not validate.
        """
        utils.validateOption("format", format, constants.TextgridFormats)
        utils.validateOption(
            "reportingMode", reportingMode, constants.ErrorReportingMode
        )

        self.validate(reportingMode)

        textgridStr = textgrid_io.getTextgridAsStr(_tgToDictionary(self), format)

        with io.open(fn, "w", encoding="utf-8") as fd:
            fd.write(textgridStr)

    def validate(
        self, reportingMode: Literal["silence", "warning", "error"] = "warning"
    ) -> bool:
        """Validate this textgrid.

        Returns whether the textgrid is valid or not. If reportingMode is "warning"
        or "error" this will also print on error or stop execution, respectively.

        Args:
            reportingMode: one of "silence", "warning", or "error". This flag
                determines the behavior if a tier does not span the textgrid
                or the entries of a tier do not fit in it.

        Returns:
            True if this Textgrid is valid; False if not

        Raises:
            BoundsViolation: in 'error' mode, a timestamp falls outside of
                the allowable range
            OrderViolation: the entries of a tier are out of order
        """
        utils.validateOption(
            "reportingMode", reportingMode, constants.ErrorReportingMode
        )
        errorReporter = utils.getErrorReporter(reportingMode)

        isValid = True
        for tier in self._tiers:
            if not utils.checkSpan(
                tier.minTimestamp,
                tier.maxTimestamp,
                self.minTimestamp,
                self.maxTimestamp,
                errorReporter,
            ):
                isValid = False

            isValid = tier.validate(reportingMode) and isValid

        return isValid


def _tgToDictionary(tg: Textgrid) -> dict:
    tiers: List[dict] = []
    for tier in tg.tiers:
        tiers.append({
            "class": tier.tierType,
            "name": tier.name,
            "xmin": tier.minTimestamp,
            "xmax": tier.maxTimestamp,
            "entries": tier.entries,
        })

    return {"xmin": tg.minTimestamp, "xmax": tg.maxTimestamp, "tiers": tiers}
