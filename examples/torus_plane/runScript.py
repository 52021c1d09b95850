"""
This script cuts a torus with planes. A plane through the tube gives two
closed circles, found here as independent searches run side by side. A
plane that only partially covers the torus gives open curves that end on
the plane edge.
"""

# Standard Python modules
import argparse

# External modules
import numpy as np

# First party modules
from pyintersect import IntersectionFinder, Torus, XZPlane, findIntersections

parser = argparse.ArgumentParser()
parser.add_argument("--intersectionStep", type=float, default=0.05)
parser.add_argument("--nWorkers", type=int, default=2)
args = parser.parse_args()

torus = Torus(1.0, 0.3)
height = 0.1
tubeOffset = np.sqrt(0.3**2 - height**2)

# ---------------------------------------------------------------------------
#                          Full plane, two circles
# ---------------------------------------------------------------------------
plane = XZPlane([-2.0, height, -2.0], [4.0, 4.0])

finders = [
    IntersectionFinder(torus, plane, guidePoint=[1.0 + tubeOffset, height, 0.0], intersectionStep=args.intersectionStep),
    IntersectionFinder(torus, plane, guidePoint=[1.0 - tubeOffset, height, 0.0], intersectionStep=args.intersectionStep),
]
circles = findIntersections(finders, maxWorkers=args.nWorkers)

for name, circle in zip(["outer", "inner"], circles):
    if circle is None or not circle.looped:
        raise RuntimeError(f"The {name} circle was not found")
    radius = np.linalg.norm(circle.points3D()[:, [0, 2]], axis=1).mean()
    print(f"{name} circle: {len(circle)} points, mean radius {radius:.4f}")
    circle.writeToFile(f"torus_{name}.dat")

# ---------------------------------------------------------------------------
#                          Half plane, open arcs
# ---------------------------------------------------------------------------
halfPlane = XZPlane([0.0, height, -2.0], [2.0, 4.0])

finder = IntersectionFinder(
    torus, halfPlane, guidePoint=[1.0 + tubeOffset, height, 0.0], intersectionStep=args.intersectionStep
)
arc = finder.find()
if arc is None or arc.looped:
    raise RuntimeError("The torus was expected to cross the plane edge")

print(f"Open arc: {len(arc)} points from {arc.points3D()[0]} to {arc.points3D()[-1]}")
arc.writeToFile("torus_arc.dat")
