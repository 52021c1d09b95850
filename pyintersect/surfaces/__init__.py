from .baseSurface import ParametricSurface
from .bezier import BezierPatch, BezierSurfaceC0
from .plane import XZPlane
from .shifted import NormalField, ShiftedSurface
from .sphere import Sphere
from .torus import AffineTorus, Torus
