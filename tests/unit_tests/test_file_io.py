# Standard Python modules
import os
import tempfile
import unittest

# External modules
from baseclasses.utils import Error
import numpy as np

# First party modules
from pyintersect import Intersection, IntersectionPoint
from pyintersect.geo_utils import readCurveFile, writeCurveFile


class TestCurveFiles(unittest.TestCase):
    N_PROCS = 1

    def setUp(self):
        self.tmpDir = tempfile.TemporaryDirectory()
        self.fileName = os.path.join(self.tmpDir.name, "curve.dat")

    def tearDown(self):
        self.tmpDir.cleanup()

    def test_intersection_file(self):
        points = [
            IntersectionPoint(np.array([0.1, 0.2]), np.array([1.1, 1.2]), np.array([1.0, 2.0, 3.0])),
            IntersectionPoint(np.array([0.3, 0.4]), np.array([1.3, 1.4]), np.array([4.0, 5.0, 6.0])),
        ]
        intersection = Intersection(points, looped=True)
        intersection.writeToFile(self.fileName)

        loaded = Intersection.readFromFile(self.fileName)
        self.assertTrue(loaded.looped)
        self.assertEqual(len(loaded), 2)
        np.testing.assert_array_equal(loaded.points3D(), intersection.points3D())
        np.testing.assert_array_equal(loaded.parameters(1), intersection.parameters(1))

    def test_missing_header(self):
        with open(self.fileName, "w") as f:
            f.write("1.0 2.0 3.0\n")

        with self.assertRaises(Error):
            readCurveFile(self.fileName, 3)

    def test_wrong_columns(self):
        writeCurveFile(self.fileName, np.ones((3, 4)), {"looped": 0})
        with self.assertRaises(Error):
            readCurveFile(self.fileName, 7)

    def test_malformed_attribute(self):
        with open(self.fileName, "w") as f:
            f.write("# looped\n1.0 2.0 3.0\n")

        with self.assertRaises(Error):
            readCurveFile(self.fileName, 3)

    def test_non_numeric_values(self):
        with open(self.fileName, "w") as f:
            f.write("# looped=0\n1.0 abc 3.0\n")

        with self.assertRaises(Error):
            Intersection.readFromFile(self.fileName)


if __name__ == "__main__":
    unittest.main()
