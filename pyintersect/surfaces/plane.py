# External modules
import numpy as np

# Local modules
from .baseSurface import ParametricSurface


class XZPlane(ParametricSurface):
    """
    Rectangular piece of a plane of constant y.

    Parameters
    ----------
    origin : array, size (3,)
        Corner of the rectangle, reached at (u, v) = (0, 0)
    size : array, size (2,)
        Extent of the rectangle in x and in z
    """

    def __init__(self, origin, size):
        self.origin = np.array(origin, dtype=float)
        self.size = np.array(size, dtype=float)

    def bounds(self):
        return np.array([[0.0, self.size[0]], [0.0, self.size[1]]])

    def wrapped(self, dim):
        self._checkDim(dim)
        return False

    def value(self, uv):
        return self.origin + np.array([uv[0], 0.0, uv[1]])

    def jacobian(self, uv):
        return np.array([[1.0, 0.0], [0.0, 0.0], [0.0, 1.0]])

    def hessian(self, uv, var0, var1):
        self._checkDim(var0)
        self._checkDim(var1)
        return np.zeros(3)
