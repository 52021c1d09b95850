# External modules
import numpy as np

# --------------------------------------------------------------
#          Parameter Domain Functions
# --------------------------------------------------------------


def wrapValue(value, lo, hi):
    """Map value into the periodic interval [lo, hi)"""
    result = lo + np.mod(value - lo, hi - lo)
    # Rounding can land a tiny negative offset exactly on hi
    if result >= hi:
        result = lo
    return result


def clampValue(value, lo, hi):
    """Clamp value into the closed interval [lo, hi]"""
    return min(max(value, lo), hi)


def wrappedDifference(a, b, lo, hi):
    """
    Shortest distance between two values of a periodic dimension
    with period hi - lo.
    """
    period = hi - lo
    diff = np.mod(abs(a - b), period)
    return min(diff, period - diff)


def projectIntoDomain(x, bounds, wrapped):
    """
    Bring a parameter vector back into its domain. Periodic dimensions
    are re-wrapped, the others are clamped onto the bounds.

    Parameters
    ----------
    x : array, size (N,)
        The parameter vector
    bounds : array, size (N, 2)
        The (lo, hi) pair of each dimension
    wrapped : list of bool
        Whether each dimension is periodic

    Returns
    -------
    xNew : array, size (N,)
        The updated copy of x
    """
    xNew = np.array(x, dtype=float)
    for dim in range(len(xNew)):
        lo, hi = bounds[dim]
        if wrapped[dim]:
            xNew[dim] = wrapValue(xNew[dim], lo, hi)
        else:
            xNew[dim] = clampValue(xNew[dim], lo, hi)

    return xNew


def isInsideDomain(x, bounds, wrapped):
    """Check the non-periodic dimensions of x against their bounds"""
    for dim in range(len(x)):
        if wrapped[dim]:
            continue
        lo, hi = bounds[dim]
        if x[dim] < lo or x[dim] > hi:
            return False

    return True


def parameterGrid(bounds, wrapped, nGrid):
    """
    Regular grid of nGrid x nGrid parameter points spanning a 2D
    domain. The upper bound of a periodic dimension is left out since
    it coincides with the lower one.
    """
    axes = []
    for dim in range(2):
        lo, hi = bounds[dim]
        axes.append(np.linspace(lo, hi, nGrid, endpoint=not wrapped[dim]))

    uu, vv = np.meshgrid(axes[0], axes[1], indexing="ij")
    return np.column_stack([uu.ravel(), vv.ravel()])
