# External modules
import numpy as np

# Local modules
from .baseSurface import ParametricSurface


class NormalField(ParametricSurface):
    """
    The unit normal of a surface, viewed as a map from the surface's
    parameter domain into 3D. The derivatives need the Hessian of the
    underlying surface.

    Parameters
    ----------
    surface : ParametricSurface
        The surface whose normals are evaluated
    """

    def __init__(self, surface):
        self.surface = surface

    def bounds(self):
        return self.surface.bounds()

    def wrapped(self, dim):
        return self.surface.wrapped(dim)

    def anormal(self, uv):
        """Normal that is not normalized, d/du x d/dv"""
        jac = self.surface.jacobian(uv)
        return np.cross(jac[:, 0], jac[:, 1])

    def value(self, uv):
        anormal = self.anormal(uv)
        return anormal / np.linalg.norm(anormal)

    def jacobian(self, uv):
        jac = self.surface.jacobian(uv)
        diffU = jac[:, 0]
        diffV = jac[:, 1]
        diffUU = self.surface.hessian(uv, 0, 0)
        diffUV = self.surface.hessian(uv, 1, 0)
        diffVV = self.surface.hessian(uv, 1, 1)

        anormDiffU = np.cross(diffUU, diffV) + np.cross(diffU, diffUV)
        anormDiffV = np.cross(diffUV, diffV) + np.cross(diffU, diffVV)

        anormal = np.cross(diffU, diffV)
        norm = np.linalg.norm(anormal)

        result = np.zeros((3, 2))
        result[:, 0] = anormDiffU / norm - anormal * anormal.dot(anormDiffU) / norm**3
        result[:, 1] = anormDiffV / norm - anormal * anormal.dot(anormDiffV) / norm**3
        return result


class ShiftedSurface(ParametricSurface):
    """
    Offset surface, every point moved by a fixed distance along the
    unit normal of the base surface. With a distance larger than the
    radius of curvature the offset surface folds over itself.

    Parameters
    ----------
    surface : ParametricSurface
        The base surface. It has to implement hessian.
    distance : float
        Signed offset distance along the normal
    """

    def __init__(self, surface, distance):
        self.surface = surface
        self.distance = distance
        self.normalField = NormalField(surface)

    def bounds(self):
        return self.surface.bounds()

    def wrapped(self, dim):
        return self.surface.wrapped(dim)

    def value(self, uv):
        return self.surface.value(uv) + self.distance * self.normalField.value(uv)

    def jacobian(self, uv):
        return self.surface.jacobian(uv) + self.distance * self.normalField.jacobian(uv)
