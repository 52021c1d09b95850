# Standard Python modules
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple
import warnings

# External modules
from baseclasses.utils import Error
import numpy as np

# Local modules
from . import geo_utils
from .optimization import (
    GradientDescent,
    IntersectionStepFunction,
    NewtonSolver,
    SurfacePointDistanceSquared,
    SurfaceSurfaceDistanceSquared,
)


class IntersectionPoint(NamedTuple):
    """
    A point of an intersection curve together with its pre-image on
    both surfaces. point is the midpoint of the two surface evaluations.
    """

    surface0: np.ndarray
    surface1: np.ndarray
    point: np.ndarray


class Intersection:
    """
    Polyline approximating the intersection curve of two surfaces.

    Parameters
    ----------
    points : list of IntersectionPoint
        The ordered points of the curve
    looped : bool
        True if the curve is closed, the last point connects back to
        the first one
    """

    def __init__(self, points, looped=False):
        self.points = list(points)
        self.looped = looped

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __repr__(self):
        return f"Intersection(nPoints={len(self.points)}, looped={self.looped})"

    def points3D(self):
        """Return the curve in space as an (N, 3) array"""
        return np.array([p.point for p in self.points]).reshape(-1, 3)

    def parameters(self, surface):
        """
        Return the trace of the curve in the parameter domain of one of
        the surfaces as an (N, 2) array.

        Parameters
        ----------
        surface : int, {0, 1}
            Which surface's parameters to return
        """
        if surface == 0:
            return np.array([p.surface0 for p in self.points]).reshape(-1, 2)
        elif surface == 1:
            return np.array([p.surface1 for p in self.points]).reshape(-1, 2)
        else:
            raise Error(f"An intersection has surfaces 0 and 1, got {surface}")

    def reversed(self):
        """Return a copy running in the opposite direction"""
        return Intersection(self.points[::-1], self.looped)

    def writeToFile(self, fileName):
        """
        Write the intersection to a plain text file, one point per line
        as 'x y z u0 v0 u1 v1'.
        """
        values = np.hstack([self.points3D(), self.parameters(0), self.parameters(1)])
        geo_utils.writeCurveFile(fileName, values, {"looped": self.looped})

    @classmethod
    def readFromFile(cls, fileName):
        """Read an intersection written by writeToFile"""
        values, attributes = geo_utils.readCurveFile(fileName, 7)
        points = [IntersectionPoint(row[3:5].copy(), row[5:7].copy(), row[0:3].copy()) for row in values]
        return cls(points, looped=bool(attributes.get("looped", 0)))


class IntersectionFinder:
    """
    Finds the intersection curve of two parametric surfaces, or the
    self-intersection curve of one surface.

    The search runs in three stages. A first common point is located by
    minimizing the distance between the surfaces with GradientDescent,
    starting from a guide point or from random samples. From there the
    curve is traced by stepping intersectionStep along the common
    tangent and correcting back onto both surfaces with NewtonSolver.
    Curves that do not close are finally snapped onto the edges of the
    parameter domains they run into.

    Parameters
    ----------
    surface0, surface1 : ParametricSurface
        The surfaces to intersect. They are not copied and must outlive
        the finder.
    guidePoint : array, size (3,), optional
        Point close to the wanted curve. Without it the first point is
        searched for randomly.
    numericalStep : float
        Step size of the gradient descent, and the distance under which
        two surface points are considered coincident
    intersectionStep : float
        Distance between consecutive points of the curve
    seed : int, optional
        Seed of the random source. With a seed every call to find()
        starts from the same random state and gives the same result.
    rng : numpy.random.Generator, optional
        Random source to use instead of a seeded one
    debug : bool
        Print information about the search
    """

    STOCHASTIC_FIRST_POINT_TRIES = 500
    MAX_POINTS = 10000
    LOOP_MIN_POINTS = 4
    PROJECTION_GRID_SIZE = 16
    DESCENT_MAX_ITERATIONS = 100
    NEWTON_MAX_ITERATIONS = 100

    def __init__(
        self,
        surface0,
        surface1,
        guidePoint=None,
        numericalStep=5e-3,
        intersectionStep=1e-2,
        seed=None,
        rng=None,
        debug=False,
    ):
        self.surface0 = surface0
        self.surface1 = surface1
        self.selfIntersection = surface0 is surface1

        self.guidePoint = guidePoint
        self.numericalStep = numericalStep
        self.intersectionStep = intersectionStep
        # Two self-intersection parameters closer than this are the
        # same point of the surface
        self.duplicateTolerance = None

        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.debug = debug

    @classmethod
    def same(cls, surface, **kwargs):
        """
        Create a finder for the self-intersection of a single surface.
        Takes the same keyword arguments as the constructor.
        """
        return cls(surface, surface, **kwargs)

    # ----------------------------------------------------------------------------
    #               Public interface
    # ----------------------------------------------------------------------------

    def find(self):
        """
        Search for the intersection curve.

        Returns
        -------
        intersection : Intersection or None
            The curve, or None if no intersection was found
        """
        self._checkConfiguration()
        if self.seed is not None:
            self.rng = np.random.default_rng(self.seed)

        firstPoint = self._findFirstPoint()
        if firstPoint is None:
            if self.debug:
                print("No common point found between the surfaces")
            return None

        if self.debug:
            print(f"First intersection point: {firstPoint.point}")

        intersection = self._traceCurve(firstPoint)
        if len(intersection) < 2:
            if self.debug:
                print("The intersection curve consists of a single point")
            return None

        if self.debug:
            print(f"Found {intersection}")

        return intersection

    def _checkConfiguration(self):
        if not self.numericalStep > 0.0:
            raise Error(f"numericalStep must be positive, got {self.numericalStep}")
        if not self.intersectionStep > 0.0:
            raise Error(f"intersectionStep must be positive, got {self.intersectionStep}")
        if self.guidePoint is not None and np.shape(self.guidePoint) != (3,):
            raise Error(f"guidePoint must be a point in 3D, got shape {np.shape(self.guidePoint)}")
        if self.duplicateTolerance is not None and self.duplicateTolerance < 0.0:
            raise Error(f"duplicateTolerance cannot be negative, got {self.duplicateTolerance}")
        if self.intersectionStep < self.numericalStep:
            warnings.warn(
                "intersectionStep is smaller than numericalStep, consecutive points may not be resolved",
                stacklevel=3,
            )

    @property
    def _duplicateTolerance(self):
        if self.duplicateTolerance is None:
            return self.numericalStep
        return self.duplicateTolerance

    # ----------------------------------------------------------------------------
    #               First point search
    # ----------------------------------------------------------------------------

    def _findFirstPoint(self):
        if self.selfIntersection:
            if self.guidePoint is not None:
                return self._findSelfPointWithGuide(np.asarray(self.guidePoint, dtype=float))
            return self._findSelfPointStochastic()
        else:
            if self.guidePoint is not None:
                return self._findCommonPointWithGuide(np.asarray(self.guidePoint, dtype=float))
            return self._findCommonPointStochastic()

    def _findCommonPointWithGuide(self, guide):
        if self.debug:
            print("Searching for the first point from the guide point")

        projection0 = self._projectPoint(self.surface0, guide)
        projection1 = self._projectPoint(self.surface1, guide)
        return self._findCommonSurfacePoint(projection0, projection1)

    def _findCommonPointStochastic(self):
        if self.debug:
            print("Searching for the first point randomly")

        for attempt in range(self.STOCHASTIC_FIRST_POINT_TRIES):
            param0 = self.surface0.sampleRandomParameter(self.rng)
            param1 = self._projectPoint(self.surface1, self.surface0.value(param0))

            commonPoint = self._findCommonSurfacePoint(param0, param1)
            if commonPoint is not None:
                if self.debug:
                    print(f"Found the first point after {attempt + 1} attempts")
                return commonPoint

        return None

    def _findSelfPointWithGuide(self, guide):
        if self.debug:
            print("Searching for the first self-intersection point from the guide point")

        param0 = self._projectPoint(self.surface0, guide)
        for attempt in range(self.STOCHASTIC_FIRST_POINT_TRIES):
            param1 = self.surface1.sampleRandomParameter(self.rng)
            if self._isDuplicate(param0, param1):
                continue

            commonPoint = self._findCommonSurfacePoint(param0, param1)
            if commonPoint is not None:
                if self.debug:
                    print(f"Found the first point after {attempt + 1} attempts")
                return commonPoint

        return None

    def _findSelfPointStochastic(self):
        if self.debug:
            print("Searching for the first self-intersection point randomly")

        for attempt in range(self.STOCHASTIC_FIRST_POINT_TRIES):
            param0 = self.surface0.sampleRandomParameter(self.rng)
            param1 = self.surface1.sampleRandomParameter(self.rng)
            if self._isDuplicate(param0, param1):
                continue

            commonPoint = self._findCommonSurfacePoint(param0, param1)
            if commonPoint is not None:
                if self.debug:
                    print(f"Found the first point after {attempt + 1} attempts")
                return commonPoint

        return None

    def _isDuplicate(self, param0, param1):
        return self.surface0.parameterDistance(param0, param1) < self._duplicateTolerance

    def _projectPoint(self, surface, point, start=None):
        """
        Find the parameters of the point of surface closest to point.
        Without a starting point the descent starts from the best point
        of a coarse parameter grid.
        """
        function = SurfacePointDistanceSquared(surface, point)
        if start is None:
            bounds = surface.bounds()
            wrapped = [surface.wrapped(0), surface.wrapped(1)]
            grid = geo_utils.parameterGrid(bounds, wrapped, self.PROJECTION_GRID_SIZE)
            start = grid[np.argmin([function.val(uv) for uv in grid])]

        descent = GradientDescent(
            function, startingPoint=start, stepSize=self.numericalStep, maxIterations=self.DESCENT_MAX_ITERATIONS
        )
        return descent.calculate()

    def _findCommonSurfacePoint(self, start0, start1):
        """
        Descend the surface to surface distance from the two starting
        parameters. The minimum is accepted only if both surfaces
        actually meet there.
        """
        function = SurfaceSurfaceDistanceSquared(self.surface0, self.surface1)
        descent = GradientDescent(
            function,
            startingPoint=np.concatenate([start0, start1]),
            stepSize=self.numericalStep,
            maxIterations=self.DESCENT_MAX_ITERATIONS,
        )
        minimum = descent.calculate()
        param0 = minimum[:2]
        param1 = minimum[2:]

        val0 = self.surface0.value(param0)
        val1 = self.surface1.value(param1)
        if geo_utils.eDist(val0, val1) > self.numericalStep:
            return None

        if self.selfIntersection and self._isDuplicate(param0, param1):
            return None

        return IntersectionPoint(param0, param1, geo_utils.pointAverage(val0, val1))

    # ----------------------------------------------------------------------------
    #               Marching
    # ----------------------------------------------------------------------------

    def _traceCurve(self, firstPoint):
        """
        Trace the curve through firstPoint. A single backward step tells
        how far one step moves in each parameter domain; the curve is
        considered closed once the forward march returns closer than
        that to the first point.
        """
        backPoint = self._nextIntersectionPoint(firstPoint, backward=True)

        points = [firstPoint]
        if backPoint is not None:
            loopDistances = (
                self.surface0.parameterDistance(firstPoint.surface0, backPoint.surface0),
                self.surface1.parameterDistance(firstPoint.surface1, backPoint.surface1),
            )
            if self._march(points, backward=False, loopDistances=loopDistances):
                if self.debug:
                    print(f"The intersection curve closed after {len(points)} points")
                return Intersection(points, looped=True)
        else:
            self._march(points, backward=False)

        nForward = len(points)
        points.reverse()
        self._march(points, backward=True)

        if self.debug:
            print(f"Open intersection curve, {nForward} points forward and {len(points) - nForward} backward")

        self._tightenEnds(points)
        return Intersection(points, looped=False)

    def _march(self, points, backward, loopDistances=None):
        """
        Append points to the list by stepping from its last point until
        the curve is lost, MAX_POINTS is reached or, when loopDistances
        is given, the curve closes.

        Returns
        -------
        looped : bool
            True if the curve closed
        """
        while len(points) < self.MAX_POINTS:
            nextPoint = self._nextIntersectionPoint(points[-1], backward=backward)
            if nextPoint is None:
                return False

            points.append(nextPoint)

            if loopDistances is not None and len(points) >= self.LOOP_MIN_POINTS:
                first = points[0]
                distance0 = self.surface0.parameterDistance(first.surface0, nextPoint.surface0)
                distance1 = self.surface1.parameterDistance(first.surface1, nextPoint.surface1)
                if distance0 < loopDistances[0] and distance1 < loopDistances[1]:
                    return True

        if self.debug:
            print(f"Stopped marching after reaching {self.MAX_POINTS} points")

        return False

    def _nextIntersectionPoint(self, point, backward=False):
        """
        Take one step of length intersectionStep along the curve.

        Returns
        -------
        nextPoint : IntersectionPoint or None
            The new point, or None if the step left the domain, the
            surfaces are tangent at point or, for a self-intersection,
            both parameters collapsed onto the same point
        """
        normal0 = self.surface0.normal(point.surface0)
        normal1 = self.surface1.normal(point.surface1)
        direction = np.cross(normal0, normal1)

        length = geo_utils.euclideanNorm(direction)
        if length < 1e-12:
            return None

        direction /= length
        if backward:
            direction = -direction

        function = IntersectionStepFunction(
            self.surface0, self.surface1, point.point, direction, self.intersectionStep
        )
        solver = NewtonSolver(
            function,
            startingPoint=np.concatenate([point.surface0, point.surface1]),
            maxIterations=self.NEWTON_MAX_ITERATIONS,
            accuracy=(0.01 * min(self.numericalStep, self.intersectionStep)) ** 2,
        )
        solution = solver.calculate()
        if solution is None:
            return None

        param0 = solution[:2]
        param1 = solution[2:]

        # Any point of a surface trivially meets itself
        if self.selfIntersection and self._isDuplicate(param0, param1):
            if self.debug:
                print(f"Self-intersection march collapsed onto a single point at {param0}")
            return None

        midpoint = geo_utils.pointAverage(self.surface0.value(param0), self.surface1.value(param1))
        return IntersectionPoint(param0, param1, midpoint)

    # ----------------------------------------------------------------------------
    #               Edge tightening
    # ----------------------------------------------------------------------------

    def _tightenEnds(self, points):
        """
        Snap both ends of an open curve onto the edges of the parameter
        domains. Every non-periodic dimension of both surfaces is tried
        in turn at both ends.
        """
        surfaces = (self.surface0, self.surface1)
        for surfaceIdx in range(2):
            for dim in range(2):
                if surfaces[surfaceIdx].wrapped(dim):
                    continue

                for atStart in (True, False):
                    end = points[0] if atStart else points[-1]
                    tightened = self._tightenPoint(end, surfaceIdx, dim)
                    if tightened is None:
                        continue

                    if self.debug:
                        print(f"Tightened curve end onto edge {dim} of surface {surfaceIdx}: {tightened.point}")

                    merge = geo_utils.eDist(tightened.point, end.point) < self.intersectionStep / 3.0
                    if atStart:
                        if merge:
                            points[0] = tightened
                        else:
                            points.insert(0, tightened)
                    else:
                        if merge:
                            points[-1] = tightened
                        else:
                            points.append(tightened)

    def _tightenPoint(self, end, surfaceIdx, dim):
        """
        Move end onto the nearest bound of dimension dim of one surface
        and re-project the other surface onto the resulting point.

        Returns
        -------
        tightened : IntersectionPoint or None
            The point on the edge, or None if it is not within one step
            of end
        """
        surfaces = (self.surface0, self.surface1)
        params = [np.array(end.surface0), np.array(end.surface1)]
        surface = surfaces[surfaceIdx]
        other = surfaces[1 - surfaceIdx]

        lo, hi = surface.bounds()[dim]
        param = params[surfaceIdx]
        param[dim] = lo if abs(param[dim] - lo) <= abs(hi - param[dim]) else hi

        edgePoint = surface.value(param)
        if geo_utils.eDist(edgePoint, end.point) >= self.intersectionStep:
            return None

        otherParam = self._projectPoint(other, edgePoint, start=params[1 - surfaceIdx])
        params[1 - surfaceIdx] = otherParam
        if self.selfIntersection and self._isDuplicate(params[0], params[1]):
            return None

        midpoint = geo_utils.pointAverage(edgePoint, other.value(otherParam))
        if geo_utils.eDist(midpoint, end.point) >= self.intersectionStep:
            return None

        return IntersectionPoint(params[0], params[1], midpoint)


def findIntersections(finders, maxWorkers=None):
    """
    Run several independent intersection searches on worker threads.

    Each finder owns its random source, so the searches share no state.
    A finder must not appear twice in the list.

    Parameters
    ----------
    finders : list of IntersectionFinder
        The searches to run
    maxWorkers : int, optional
        Number of worker threads, defaults to the executor's default

    Returns
    -------
    intersections : list of Intersection or None
        The results, in the order of finders
    """
    if len(set(map(id, finders))) != len(finders):
        raise Error("The same IntersectionFinder cannot be run twice concurrently")

    with ThreadPoolExecutor(max_workers=maxWorkers) as executor:
        return list(executor.map(lambda finder: finder.find(), finders))
