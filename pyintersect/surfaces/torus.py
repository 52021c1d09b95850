# External modules
import numpy as np

# Local modules
from .baseSurface import ParametricSurface


class Torus(ParametricSurface):
    """
    Torus centered at the origin with the ring in the XZ plane and the
    y axis as its axis of symmetry. Both angles are periodic.

    Parameters
    ----------
    innerRadius : float
        Distance from the center to the middle of the tube
    tubeRadius : float
        Radius of the tube
    """

    def __init__(self, innerRadius, tubeRadius):
        self.innerRadius = innerRadius
        self.tubeRadius = tubeRadius

    def bounds(self):
        return np.array([[0.0, 2 * np.pi], [0.0, 2 * np.pi]])

    def wrapped(self, dim):
        self._checkDim(dim)
        return True

    def value(self, uv):
        u, v = uv
        ring = self.innerRadius + self.tubeRadius * np.cos(v)
        return np.array([ring * np.cos(u), self.tubeRadius * np.sin(v), ring * np.sin(u)])

    def jacobian(self, uv):
        u, v = uv
        R = self.innerRadius
        r = self.tubeRadius
        ring = R + r * np.cos(v)
        jac = np.zeros((3, 2))
        jac[:, 0] = [-ring * np.sin(u), 0.0, ring * np.cos(u)]
        jac[:, 1] = [-r * np.sin(v) * np.cos(u), r * np.cos(v), -r * np.sin(v) * np.sin(u)]
        return jac

    def hessian(self, uv, var0, var1):
        self._checkDim(var0)
        self._checkDim(var1)
        u, v = uv
        r = self.tubeRadius
        ring = self.innerRadius + r * np.cos(v)
        if var0 == 0 and var1 == 0:
            return np.array([-ring * np.cos(u), 0.0, -ring * np.sin(u)])
        elif var0 == 1 and var1 == 1:
            return np.array([-r * np.cos(v) * np.cos(u), -r * np.sin(v), -r * np.cos(v) * np.sin(u)])
        else:
            return np.array([r * np.sin(v) * np.sin(u), 0.0, -r * np.sin(v) * np.cos(u)])


class AffineTorus(ParametricSurface):
    """
    A torus moved by an affine transformation.

    Parameters
    ----------
    torus : Torus
        The torus in its local frame
    transform : array, size (4, 4)
        Homogeneous transformation matrix. The last row is expected to
        be (0, 0, 0, 1).
    """

    def __init__(self, torus, transform):
        self.torus = torus
        self.transform = np.array(transform, dtype=float)

    @property
    def linear(self):
        return self.transform[:3, :3]

    def bounds(self):
        return self.torus.bounds()

    def wrapped(self, dim):
        return self.torus.wrapped(dim)

    def value(self, uv):
        return self.linear.dot(self.torus.value(uv)) + self.transform[:3, 3]

    def jacobian(self, uv):
        return self.linear.dot(self.torus.jacobian(uv))

    def hessian(self, uv, var0, var1):
        return self.linear.dot(self.torus.hessian(uv, var0, var1))
