# Standard Python modules
import warnings

# External modules
import numpy as np
from scipy.linalg import LinAlgError, LinAlgWarning, lu_factor, lu_solve

# Local modules
from ..geo_utils import isInsideDomain, wrapValue


class NewtonSolver:
    """
    Newton-Raphson solver for a square system F(x) = 0.

    The function has to provide value(x), jacobian(x), bounds() and
    wrapped(dim). After every update the periodic dimensions are
    wrapped; leaving the domain in any other dimension ends the
    solve without a solution, the parameterization does not extend
    past that edge.

    Parameters
    ----------
    function : object
        The system to solve, e.g. IntersectionStepFunction
    startingPoint : array, optional
        Initial guess. Defaults to the lower corner of the domain.
    maxIterations : int
        Maximum number of Newton iterations
    accuracy : float
        Convergence threshold on |F(x)|^2
    """

    def __init__(self, function, startingPoint=None, maxIterations=100, accuracy=1e-4):
        self.function = function
        if startingPoint is None:
            startingPoint = function.bounds()[:, 0]
        self.startingPoint = np.array(startingPoint, dtype=float)
        self.maxIterations = maxIterations
        self.accuracy = accuracy

    def _solveUpdate(self, x):
        """
        Solve J(x) dx = -F(x) through an LU factorization. Returns None
        when the Jacobian is singular.
        """
        jac = self.function.jacobian(x)
        rhs = -self.function.value(x)

        with warnings.catch_warnings():
            warnings.simplefilter("error", LinAlgWarning)
            try:
                lu, piv = lu_factor(jac)
                dx = lu_solve((lu, piv), rhs)
            except (LinAlgError, LinAlgWarning, ValueError):
                return None

        if np.any(np.diag(lu) == 0.0) or not np.all(np.isfinite(dx)):
            return None

        return dx

    def calculate(self):
        """
        Run the Newton iterations.

        Returns
        -------
        x : array or None
            The solution, or None if the iterations left the domain, hit
            a singular Jacobian or did not converge
        """
        bounds = self.function.bounds()
        nDim = len(self.startingPoint)
        currentArg = self.startingPoint.copy()

        for _ in range(self.maxIterations):
            dx = self._solveUpdate(currentArg)
            if dx is None:
                return None

            newArg = currentArg + dx
            for dim in range(nDim):
                if self.function.wrapped(dim):
                    newArg[dim] = wrapValue(newArg[dim], bounds[dim, 0], bounds[dim, 1])

            if not isInsideDomain(newArg, bounds, [self.function.wrapped(dim) for dim in range(nDim)]):
                return None

            currentArg = newArg

            res = self.function.value(currentArg)
            if res.dot(res) < self.accuracy:
                return currentArg

        return None
