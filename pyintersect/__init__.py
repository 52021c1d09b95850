__version__ = "0.3.0"

from .pyIntersect import Intersection, IntersectionFinder, IntersectionPoint, findIntersections
from .surfaces import (
    AffineTorus,
    BezierPatch,
    BezierSurfaceC0,
    NormalField,
    ParametricSurface,
    ShiftedSurface,
    Sphere,
    Torus,
    XZPlane,
)
