"""
Various math utilities
"""
import math

from praatgrid.utilities.constants import TIME_TOLERANCE


def numToStr(inputNum: float) -> str:
    if isclose(inputNum, int(inputNum)):
        retVal = "%d" % inputNum
    else:
        retVal = "%s" % repr(inputNum)
    return retVal


def isclose(
    a: float, b: float, rel_tol: float = TIME_TOLERANCE, abs_tol: float = 0.0
) -> bool:
    # An infinite tolerance would make everything close to infinity
    if not (math.isfinite(a) and math.isfinite(b)):
        return a == b
    return abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)


def lessThan(a: float, b: float) -> bool:
    """True if a is smaller than b by more than rounding noise"""
    return a < b and not isclose(a, b)
