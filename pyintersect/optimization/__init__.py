from .functions import (
    DifferentiableScalarFunction,
    IntersectionStepFunction,
    SurfacePointDistanceSquared,
    SurfaceSurfaceDistanceSquared,
)
from .gradientDescent import GradientDescent
from .newton import NewtonSolver
