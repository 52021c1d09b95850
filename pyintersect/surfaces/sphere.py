# External modules
import numpy as np

# Local modules
from .baseSurface import ParametricSurface


class Sphere(ParametricSurface):
    """
    Sphere parameterized by longitude u in [0, 2pi) and polar angle
    v in [0, pi]. Only the longitude is periodic, the poles are edges
    of the domain.

    Parameters
    ----------
    radius : float
        Radius of the sphere
    center : array, size (3,)
        Center of the sphere
    """

    def __init__(self, radius, center=None):
        self.radius = radius
        self.center = np.zeros(3) if center is None else np.array(center, dtype=float)

    def bounds(self):
        return np.array([[0.0, 2 * np.pi], [0.0, np.pi]])

    def wrapped(self, dim):
        self._checkDim(dim)
        return dim == 0

    def value(self, uv):
        u, v = uv
        r = self.radius
        return self.center + r * np.array([np.cos(u) * np.sin(v), np.sin(u) * np.sin(v), np.cos(v)])

    def jacobian(self, uv):
        u, v = uv
        r = self.radius
        jac = np.zeros((3, 2))
        jac[:, 0] = r * np.array([-np.sin(u) * np.sin(v), np.cos(u) * np.sin(v), 0.0])
        jac[:, 1] = r * np.array([np.cos(u) * np.cos(v), np.sin(u) * np.cos(v), -np.sin(v)])
        return jac

    def hessian(self, uv, var0, var1):
        self._checkDim(var0)
        self._checkDim(var1)
        u, v = uv
        r = self.radius
        if var0 == 0 and var1 == 0:
            return r * np.array([-np.cos(u) * np.sin(v), -np.sin(u) * np.sin(v), 0.0])
        elif var0 == 1 and var1 == 1:
            return r * np.array([-np.cos(u) * np.sin(v), -np.sin(u) * np.sin(v), -np.cos(v)])
        else:
            return r * np.array([-np.sin(u) * np.cos(v), np.cos(u) * np.cos(v), 0.0])
