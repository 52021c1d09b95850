# External modules
import numpy as np

# Local modules
from .baseSurface import ParametricSurface


def deCasteljau(controlPoints, t):
    """
    Evaluate a Bezier curve with the de Casteljau algorithm.

    Parameters
    ----------
    controlPoints : array, size (N, ...)
        Control points along the first axis. Any trailing shape is
        carried through, so a whole row of curves can be evaluated at
        once.
    t : float
        Curve parameter in [0, 1]
    """
    pts = np.array(controlPoints, dtype=float)
    n = pts.shape[0]
    for k in range(1, n):
        pts[: n - k] = (1.0 - t) * pts[: n - k] + t * pts[1 : n - k + 1]

    return pts[0]


class BezierPatch(ParametricSurface):
    """
    Tensor product Bezier patch over [0, 1] x [0, 1].

    Parameters
    ----------
    controlPoints : array, size (n+1, m+1, 3)
        Control net, the first index runs along u and the second along v
    """

    def __init__(self, controlPoints):
        self.coef = np.array(controlPoints, dtype=float)
        if self.coef.ndim != 3 or self.coef.shape[2] != 3:
            raise ValueError("controlPoints must be of shape (n+1, m+1, 3)")

        self._uDerivative = None
        self._vDerivative = None

    @property
    def degree(self):
        return self.coef.shape[0] - 1, self.coef.shape[1] - 1

    def derivativePatch(self, dim):
        """
        The patch of the partial derivative with respect to dim. Built
        on first use from the differences of the control points.
        """
        self._checkDim(dim)
        if dim == 0:
            if self._uDerivative is None:
                self._uDerivative = self._differencePatch(0)
            return self._uDerivative
        else:
            if self._vDerivative is None:
                self._vDerivative = self._differencePatch(1)
            return self._vDerivative

    def _differencePatch(self, axis):
        n = self.coef.shape[axis] - 1
        if n == 0:
            shape = list(self.coef.shape)
            shape[axis] = 1
            return BezierPatch(np.zeros(shape))

        return BezierPatch(n * np.diff(self.coef, axis=axis))

    def bounds(self):
        return np.array([[0.0, 1.0], [0.0, 1.0]])

    def wrapped(self, dim):
        self._checkDim(dim)
        return False

    def value(self, uv):
        # Collapse v first for every u row, then along u
        rows = deCasteljau(np.swapaxes(self.coef, 0, 1), uv[1])
        return deCasteljau(rows, uv[0])

    def jacobian(self, uv):
        jac = np.zeros((3, 2))
        jac[:, 0] = self.derivativePatch(0).value(uv)
        jac[:, 1] = self.derivativePatch(1).value(uv)
        return jac

    def hessian(self, uv, var0, var1):
        return self.derivativePatch(var0).derivativePatch(var1).value(uv)


class BezierSurfaceC0(ParametricSurface):
    """
    A grid of Bezier patches joined with C0 continuity, parameterized
    over [0, 1] x [0, 1]. Patch (i, j) covers
    [i / nu, (i + 1) / nu] x [j / nv, (j + 1) / nv].

    Parameters
    ----------
    patches : list of list of BezierPatch
        patches[i][j] is the i-th patch along u and the j-th along v
    uWrap, vWrap : bool
        Whether the surface is closed in u or in v
    """

    def __init__(self, patches, uWrap=False, vWrap=False):
        if len(patches) == 0 or len(patches[0]) == 0:
            raise ValueError("At least one patch is required")

        self.patches = patches
        self.uWrap = uWrap
        self.vWrap = vWrap

    @classmethod
    def fromControlNet(cls, controlPoints, uWrap=False, vWrap=False):
        """
        Split a bicubic control net of shape (3 nu + 1, 3 nv + 1, 3)
        into its patches.
        """
        net = np.array(controlPoints, dtype=float)
        nu = (net.shape[0] - 1) // 3
        nv = (net.shape[1] - 1) // 3
        if net.shape[0] != 3 * nu + 1 or net.shape[1] != 3 * nv + 1 or nu == 0 or nv == 0:
            raise ValueError("A bicubic control net needs 3k + 1 points in each direction")

        patches = []
        for i in range(nu):
            row = []
            for j in range(nv):
                row.append(BezierPatch(net[3 * i : 3 * i + 4, 3 * j : 3 * j + 4]))
            patches.append(row)

        return cls(patches, uWrap=uWrap, vWrap=vWrap)

    @property
    def nPatches(self):
        return len(self.patches), len(self.patches[0])

    @staticmethod
    def _patchIndex(val, count):
        if val >= 1.0:
            return count - 1
        return min(max(int(np.floor(val * count)), 0), count - 1)

    def _locate(self, uv):
        nu, nv = self.nPatches
        i = self._patchIndex(uv[0], nu)
        j = self._patchIndex(uv[1], nv)
        local = np.array([uv[0] * nu - i, uv[1] * nv - j])
        return self.patches[i][j], local

    def bounds(self):
        return np.array([[0.0, 1.0], [0.0, 1.0]])

    def wrapped(self, dim):
        self._checkDim(dim)
        return self.uWrap if dim == 0 else self.vWrap

    def value(self, uv):
        patch, local = self._locate(uv)
        return patch.value(local)

    # The derivatives do not exist across patch borders, the one of the
    # patch the point is assigned to is used
    def jacobian(self, uv):
        patch, local = self._locate(uv)
        nu, nv = self.nPatches
        jac = patch.jacobian(local)
        jac[:, 0] *= nu
        jac[:, 1] *= nv
        return jac

    def hessian(self, uv, var0, var1):
        patch, local = self._locate(uv)
        scale = self.nPatches
        return patch.hessian(local, var0, var1) * scale[var0] * scale[var1]
