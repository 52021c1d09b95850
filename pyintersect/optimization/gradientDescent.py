# External modules
import numpy as np

# Local modules
from ..geo_utils import euclideanNorm, projectIntoDomain


class GradientDescent:
    """
    Fixed step gradient descent over the (box shaped) domain of a
    DifferentiableScalarFunction.

    Every iteration moves the point a distance stepSize against the
    gradient. Periodic dimensions are wrapped back into their interval,
    the others are clamped onto their bounds. The descent stops as soon
    as a step does not decrease the function, so the result is only
    accurate to about stepSize. It always returns a point, which can be
    a local minimum; callers have to check it.

    Parameters
    ----------
    function : DifferentiableScalarFunction
        The function to minimize
    startingPoint : array, optional
        Initial guess. Defaults to the lower corner of the domain.
    stepSize : float
        Length of every step
    maxIterations : int
        Maximum number of steps taken
    """

    def __init__(self, function, startingPoint=None, stepSize=0.001, maxIterations=100):
        self.function = function
        if startingPoint is None:
            startingPoint = function.bounds()[:, 0]
        self.startingPoint = np.array(startingPoint, dtype=float)
        self.stepSize = stepSize
        self.maxIterations = maxIterations

    def calculate(self):
        """
        Run the descent.

        Returns
        -------
        x : array
            The point with the lowest function value visited
        """
        bounds = self.function.bounds()
        wrapped = [self.function.wrapped(dim) for dim in range(len(self.startingPoint))]

        currentArg = projectIntoDomain(self.startingPoint, bounds, wrapped)
        currentVal = self.function.val(currentArg)

        for _ in range(self.maxIterations):
            grad = self.function.grad(currentArg)
            gradNorm = euclideanNorm(grad)
            if gradNorm == 0.0 or not np.isfinite(gradNorm):
                break

            newArg = projectIntoDomain(currentArg - self.stepSize * grad / gradNorm, bounds, wrapped)
            newVal = self.function.val(newArg)

            if not newVal < currentVal:
                break

            currentArg = newArg
            currentVal = newVal

        return currentArg
