"""
ParametricSurface

The capability every surface handed to IntersectionFinder has to provide:
evaluation, first derivatives, the parameter domain and which of its
dimensions are periodic.
"""

# Standard Python modules
from abc import ABC, abstractmethod

# External modules
import numpy as np

# Local modules
from ..geo_utils import normalize, wrappedDifference, wrapValue


class ParametricSurface(ABC):
    """
    Abstract class for a differentiable map from a 2D parameter domain
    into 3D space.

    Subclasses implement value, jacobian, bounds and wrapped. The
    remaining methods are derived from those four.
    """

    @abstractmethod
    def value(self, uv):
        """
        Evaluate the surface.

        Parameters
        ----------
        uv : array, size (2,)
            The parameter point

        Returns
        -------
        pt : array, size (3,)
            The point on the surface
        """
        pass

    @abstractmethod
    def jacobian(self, uv):
        """
        Evaluate the first derivatives of the surface.

        Parameters
        ----------
        uv : array, size (2,)
            The parameter point

        Returns
        -------
        jac : array, size (3, 2)
            Column 0 is d/du, column 1 is d/dv
        """
        pass

    @abstractmethod
    def bounds(self):
        """
        Return the parameter domain.

        Returns
        -------
        bounds : array, size (2, 2)
            Row i holds the (lo, hi) interval of dimension i
        """
        pass

    @abstractmethod
    def wrapped(self, dim):
        """
        Return True if dimension dim is periodic with period hi - lo.
        """
        pass

    def hessian(self, uv, var0, var1):
        """
        Second derivative of the surface with respect to var0 and var1.
        Only surfaces that can be offset need to implement this.
        """
        raise NotImplementedError(f"Hessian is not implemented for {type(self).__name__}")

    def normal(self, uv):
        """Unit normal, along d/du x d/dv"""
        jac = self.jacobian(uv)
        return normalize(np.cross(jac[:, 0], jac[:, 1]))

    def parameterDistance(self, a, b):
        """
        Distance between two parameter points. A periodic dimension
        contributes the shorter of the two ways around.
        """
        bounds = self.bounds()
        diff = np.zeros(2)
        for dim in range(2):
            if self.wrapped(dim):
                diff[dim] = wrappedDifference(a[dim], b[dim], bounds[dim, 0], bounds[dim, 1])
            else:
                diff[dim] = abs(a[dim] - b[dim])

        return np.sqrt(diff.dot(diff))

    def sampleRandomParameter(self, rng):
        """
        Draw a parameter point uniformly over the domain.

        Parameters
        ----------
        rng : numpy.random.Generator
            The random source to draw from
        """
        bounds = self.bounds()
        return rng.uniform(bounds[:, 0], bounds[:, 1])

    def wrapParameter(self, uv):
        """Map the periodic dimensions of uv back into [lo, hi)"""
        bounds = self.bounds()
        uvNew = np.array(uv, dtype=float)
        for dim in range(2):
            if self.wrapped(dim):
                uvNew[dim] = wrapValue(uvNew[dim], bounds[dim, 0], bounds[dim, 1])

        return uvNew

    @staticmethod
    def _checkDim(dim):
        if dim not in (0, 1):
            raise ValueError(f"Surfaces are 2-dimensional, got dimension {dim}")
