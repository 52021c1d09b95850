# External modules
from baseclasses.utils import Error
import numpy as np

# --------------------------------------------------------------
#                I/O Functions
# --------------------------------------------------------------


def writeCurveFile(fileName, values, attributes):
    """
    Write a curve as a plain text file. The first line holds the
    attributes as 'key=value' pairs, the remaining lines one row of
    values each.

    Parameters
    ----------
    fileName : str
        File name to write
    values : array, size (N, M)
        The rows to write
    attributes : dict
        Integer valued attributes stored in the header
    """
    header = " ".join(f"{key}={int(val)}" for key, val in attributes.items())
    np.savetxt(fileName, np.atleast_2d(values), fmt="%.16e", header=header)


def readCurveFile(fileName, nColumns):
    """
    Read a curve written by writeCurveFile.

    Returns
    -------
    values : array, size (N, nColumns)
        The rows of the file
    attributes : dict
        The header attributes
    """
    with open(fileName) as f:
        header = f.readline()

    if not header.startswith("#"):
        raise Error(f"File {fileName} does not start with a curve header")

    attributes = {}
    for item in header[1:].split():
        key, _, val = item.partition("=")
        try:
            attributes[key] = int(val)
        except ValueError:
            raise Error(f"Malformed attribute '{item}' in the header of {fileName}")

    try:
        values = np.loadtxt(fileName, ndmin=2)
    except ValueError:
        raise Error(f"File {fileName} contains non-numeric curve data")
    if values.size == 0:
        values = np.zeros((0, nColumns))
    if values.shape[1] != nColumns:
        raise Error(f"Expected {nColumns} columns in {fileName} but got {values.shape[1]}")

    return values, attributes
