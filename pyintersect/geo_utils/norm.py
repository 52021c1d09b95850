# External modules
import numpy as np

# -------------------------------------------------------------
#               Norm Functions
# -------------------------------------------------------------


def euclideanNorm(inVec):
    """
    Perform the euclidean 2 norm of the vector inVec
    """
    inVec = np.asarray(inVec, dtype=float)
    return np.sqrt(inVec.dot(inVec))


def normalize(inVec, tol=1e-14):
    """
    Return inVec scaled to unit length. Vectors shorter than tol are
    returned unchanged so degenerate directions stay recognisable as
    (near) zero vectors.
    """
    inVec = np.asarray(inVec, dtype=float)
    length = euclideanNorm(inVec)
    if length < tol:
        return inVec.copy()
    return inVec / length


def pointAverage(x1, x2):
    """Midpoint of two points"""
    return 0.5 * (np.asarray(x1, dtype=float) + np.asarray(x2, dtype=float))


# --------------------------------------------------------------
#            Edge distance Function
# --------------------------------------------------------------


def eDist(x1, x2):
    """Get the eculidean distance between two points"""
    return euclideanNorm(np.asarray(x1, dtype=float) - np.asarray(x2, dtype=float))
