"""
This script intersects two overlapping unit spheres. Their intersection is
a closed circle, which is traced once and written to a plain text file.
"""

# Standard Python modules
import argparse

# First party modules
from pyintersect import IntersectionFinder, Sphere

parser = argparse.ArgumentParser()
parser.add_argument("--intersectionStep", type=float, default=0.02)
parser.add_argument("--numericalStep", type=float, default=0.005)
parser.add_argument("--output", type=str, default="sphere_circle.dat")
parser.add_argument("--debug", action="store_true")
args = parser.parse_args()

# rst Surfaces
sphere0 = Sphere(1.0)
sphere1 = Sphere(1.0, center=[1.0, 0.0, 0.0])
# rst Surfaces (end)

# rst Find
finder = IntersectionFinder(
    sphere0,
    sphere1,
    guidePoint=[0.5, 0.8, 0.3],
    numericalStep=args.numericalStep,
    intersectionStep=args.intersectionStep,
    debug=args.debug,
)
intersection = finder.find()
# rst Find (end)

if intersection is None:
    raise RuntimeError("The spheres were expected to intersect")

print(f"{intersection} written to {args.output}")
intersection.writeToFile(args.output)
