"""
Differentiable functions built on top of one or two surfaces.

The scalar distance functions are minimized by GradientDescent, the
step function is the square system solved by NewtonSolver while
marching along an intersection curve.
"""

# Standard Python modules
from abc import ABC, abstractmethod

# External modules
import numpy as np

# Local modules
from ..geo_utils import pointAverage

# --------------------------------------------------------------
#            Domain composition
# --------------------------------------------------------------


class _SurfaceDomain:
    """
    Parameter domain formed by the domains of one or more surfaces laid
    out one after the other. Dimension 2 * i + j is dimension j of
    surface i.
    """

    def __init__(self, *surfaces):
        self.surfaces = surfaces
        self.dim = 2 * len(surfaces)

    def bounds(self):
        return np.vstack([surface.bounds() for surface in self.surfaces])

    def wrapped(self, dim):
        if dim < 0 or dim >= self.dim:
            return False
        return self.surfaces[dim // 2].wrapped(dim % 2)

    def split(self, x):
        return [x[2 * i : 2 * i + 2] for i in range(len(self.surfaces))]


class DifferentiableScalarFunction(_SurfaceDomain, ABC):
    """
    Scalar function with a gradient, defined over the parameter domain
    of its surfaces.
    """

    @abstractmethod
    def val(self, x):
        pass

    @abstractmethod
    def grad(self, x):
        pass


# --------------------------------------------------------------
#            Squared distance functions
# --------------------------------------------------------------


class SurfacePointDistanceSquared(DifferentiableScalarFunction):
    """
    f(u, v) = |S(u, v) - p|^2

    Parameters
    ----------
    surface : ParametricSurface
        The surface to project onto
    point : array, size (3,)
        The target point
    """

    def __init__(self, surface, point):
        super().__init__(surface)
        self.surface = surface
        self.point = np.asarray(point, dtype=float)

    def val(self, x):
        diff = self.surface.value(x) - self.point
        return diff.dot(diff)

    def grad(self, x):
        diff = self.surface.value(x) - self.point
        return 2.0 * self.surface.jacobian(x).T.dot(diff)


class SurfaceSurfaceDistanceSquared(DifferentiableScalarFunction):
    """
    f(u0, v0, u1, v1) = |S0(u0, v0) - S1(u1, v1)|^2
    """

    def __init__(self, surface0, surface1):
        super().__init__(surface0, surface1)
        self.surface0 = surface0
        self.surface1 = surface1

    def val(self, x):
        x0, x1 = self.split(x)
        diff = self.surface0.value(x0) - self.surface1.value(x1)
        return diff.dot(diff)

    def grad(self, x):
        x0, x1 = self.split(x)
        diff = self.surface0.value(x0) - self.surface1.value(x1)
        jac = np.hstack([self.surface0.jacobian(x0), -self.surface1.jacobian(x1)])
        return 2.0 * jac.T.dot(diff)


# --------------------------------------------------------------
#            Marching step system
# --------------------------------------------------------------


class IntersectionStepFunction(_SurfaceDomain):
    """
    The 4 equations a new intersection point has to satisfy

        S0(u0, v0) - S1(u1, v1) = 0
        dot((S0 + S1) / 2 - p, t) - h = 0

    with p the previous point of the curve, t the marching direction and
    h the step length. The first three keep the point on both surfaces,
    the last one moves it a distance h along t.

    Parameters
    ----------
    surface0, surface1 : ParametricSurface
        The intersected surfaces
    commonPoint : array, size (3,)
        The previous point of the curve
    direction : array, size (3,)
        Unit marching direction
    step : float
        The step length
    """

    def __init__(self, surface0, surface1, commonPoint, direction, step):
        super().__init__(surface0, surface1)
        self.surface0 = surface0
        self.surface1 = surface1
        self.commonPoint = np.asarray(commonPoint, dtype=float)
        self.direction = np.asarray(direction, dtype=float)
        self.step = step

    def value(self, x):
        x0, x1 = self.split(x)
        val0 = self.surface0.value(x0)
        val1 = self.surface1.value(x1)

        midpoint = pointAverage(val0, val1)
        res = np.zeros(4)
        res[:3] = val0 - val1
        res[3] = (midpoint - self.commonPoint).dot(self.direction) - self.step
        return res

    def jacobian(self, x):
        x0, x1 = self.split(x)
        jac0 = self.surface0.jacobian(x0)
        jac1 = self.surface1.jacobian(x1)

        jac = np.zeros((4, 4))
        jac[:3, :2] = jac0
        jac[:3, 2:] = -jac1
        jac[3, :] = 0.5 * self.direction.dot(np.hstack([jac0, jac1]))
        return jac
