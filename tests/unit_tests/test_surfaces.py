# Standard Python modules
import unittest

# External modules
import numpy as np
from parameterized import parameterized

# First party modules
from pyintersect import (
    AffineTorus,
    BezierPatch,
    BezierSurfaceC0,
    NormalField,
    ShiftedSurface,
    Sphere,
    Torus,
    XZPlane,
)


def rotationTransform():
    angle = 0.3
    transform = np.eye(4)
    transform[:3, :3] = [[np.cos(angle), -np.sin(angle), 0.0], [np.sin(angle), np.cos(angle), 0.0], [0.0, 0.0, 1.0]]
    transform[:3, :3] *= 1.5
    transform[:3, 3] = [0.2, -0.4, 1.0]
    return transform


def bicubicNet():
    coef = np.zeros((4, 4, 3))
    for i in range(4):
        for j in range(4):
            coef[i, j] = [i / 3.0, j / 3.0, np.sin(i) * np.cos(j) * 0.3]
    return coef


def makeSurfaces():
    return {
        "sphere": Sphere(1.3, center=[0.1, 0.2, -0.3]),
        "torus": Torus(2.0, 0.5),
        "affineTorus": AffineTorus(Torus(1.0, 0.25), rotationTransform()),
        "plane": XZPlane([0.0, 1.0, 0.0], [2.0, 3.0]),
        "bezierPatch": BezierPatch(bicubicNet()),
        "bezierSurface": BezierSurfaceC0([[BezierPatch(bicubicNet()), BezierPatch(bicubicNet() + [1.0, 0.0, 0.0])]]),
        "shiftedSphere": ShiftedSurface(Sphere(1.0), 0.5),
        "shiftedPatch": ShiftedSurface(BezierPatch(bicubicNet()), -0.1),
    }


SURFACE_NAMES = list(makeSurfaces().keys())
HESSIAN_NAMES = ["sphere", "torus", "affineTorus", "plane", "bezierPatch", "bezierSurface"]


def interiorPoint(surface):
    bounds = surface.bounds()
    return bounds[:, 0] + np.array([0.37, 0.61]) * (bounds[:, 1] - bounds[:, 0])


class TestSurfaceDerivatives(unittest.TestCase):
    N_PROCS = 1

    def setUp(self):
        self.surfaces = makeSurfaces()
        self.h = 1e-6

    @parameterized.expand(SURFACE_NAMES)
    def test_jacobian(self, name):
        surface = self.surfaces[name]
        uv = interiorPoint(surface)
        jac = surface.jacobian(uv)
        self.assertEqual(jac.shape, (3, 2))

        for dim in range(2):
            step = np.zeros(2)
            step[dim] = self.h
            fd = (surface.value(uv + step) - surface.value(uv - step)) / (2 * self.h)
            np.testing.assert_allclose(jac[:, dim], fd, atol=1e-6)

    @parameterized.expand(HESSIAN_NAMES)
    def test_hessian(self, name):
        surface = self.surfaces[name]
        uv = interiorPoint(surface)

        for var0 in range(2):
            for var1 in range(2):
                step = np.zeros(2)
                step[var1] = self.h
                fd = (surface.jacobian(uv + step)[:, var0] - surface.jacobian(uv - step)[:, var0]) / (2 * self.h)
                np.testing.assert_allclose(surface.hessian(uv, var0, var1), fd, atol=1e-6)

    def test_hessian_not_implemented(self):
        surface = self.surfaces["shiftedSphere"]
        with self.assertRaises(NotImplementedError):
            surface.hessian(np.array([0.1, 0.2]), 0, 0)

    @parameterized.expand(SURFACE_NAMES)
    def test_normal(self, name):
        surface = self.surfaces[name]
        uv = interiorPoint(surface)
        normal = surface.normal(uv)
        jac = surface.jacobian(uv)

        self.assertAlmostEqual(np.linalg.norm(normal), 1.0, places=12)
        self.assertAlmostEqual(normal.dot(jac[:, 0]), 0.0, places=10)
        self.assertAlmostEqual(normal.dot(jac[:, 1]), 0.0, places=10)

    def test_normal_field_jacobian(self):
        field = NormalField(Torus(2.0, 0.5))
        uv = np.array([0.4, 1.1])
        jac = field.jacobian(uv)
        for dim in range(2):
            step = np.zeros(2)
            step[dim] = self.h
            fd = (field.value(uv + step) - field.value(uv - step)) / (2 * self.h)
            np.testing.assert_allclose(jac[:, dim], fd, atol=1e-6)


class TestSurfaceValues(unittest.TestCase):
    N_PROCS = 1

    def test_sphere(self):
        sphere = Sphere(2.0, center=[1.0, 0.0, 0.0])
        for uv in [[0.0, 0.5], [1.0, 2.0], [5.0, 3.0]]:
            self.assertAlmostEqual(np.linalg.norm(sphere.value(uv) - [1.0, 0.0, 0.0]), 2.0, places=12)

        np.testing.assert_allclose(sphere.value([0.3, 0.0]), [1.0, 0.0, 2.0], atol=1e-12)
        self.assertTrue(sphere.wrapped(0))
        self.assertFalse(sphere.wrapped(1))

    def test_torus(self):
        torus = Torus(2.0, 0.5)
        np.testing.assert_allclose(torus.value([0.0, 0.0]), [2.5, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(torus.value([np.pi / 2, np.pi / 2]), [0.0, 0.5, 2.0], atol=1e-12)
        self.assertTrue(torus.wrapped(0))
        self.assertTrue(torus.wrapped(1))

    def test_affine_torus(self):
        transform = rotationTransform()
        torus = Torus(1.0, 0.25)
        affine = AffineTorus(torus, transform)
        uv = [0.7, 2.1]
        expected = transform.dot(np.append(torus.value(uv), 1.0))[:3]
        np.testing.assert_allclose(affine.value(uv), expected, atol=1e-12)

    def test_plane(self):
        plane = XZPlane([1.0, 2.0, 3.0], [4.0, 5.0])
        np.testing.assert_allclose(plane.value([0.5, 1.5]), [1.5, 2.0, 4.5])
        np.testing.assert_allclose(plane.bounds(), [[0.0, 4.0], [0.0, 5.0]])
        self.assertFalse(plane.wrapped(0))

    def test_bad_dimension(self):
        with self.assertRaises(ValueError):
            Torus(1.0, 0.5).wrapped(2)

    def test_bezier_corners(self):
        coef = bicubicNet()
        patch = BezierPatch(coef)
        np.testing.assert_allclose(patch.value([0.0, 0.0]), coef[0, 0])
        np.testing.assert_allclose(patch.value([1.0, 0.0]), coef[-1, 0])
        np.testing.assert_allclose(patch.value([0.0, 1.0]), coef[0, -1])
        np.testing.assert_allclose(patch.value([1.0, 1.0]), coef[-1, -1])

    def test_bilinear_patch(self):
        coef = np.array([[[0.0, 0.0, 0.0], [0.0, 1.0, 0.0]], [[1.0, 0.0, 0.0], [1.0, 1.0, 1.0]]])
        patch = BezierPatch(coef)
        u, v = 0.3, 0.8
        np.testing.assert_allclose(patch.value([u, v]), [u, v, u * v], atol=1e-12)
        np.testing.assert_allclose(patch.jacobian([u, v]), [[1.0, 0.0], [0.0, 1.0], [v, u]], atol=1e-12)

    def test_bezier_bad_shape(self):
        with self.assertRaises(ValueError):
            BezierPatch(np.zeros((4, 3)))

    def test_bezier_surface_continuity(self):
        net = np.zeros((7, 4, 3))
        for i in range(7):
            for j in range(4):
                net[i, j] = [i / 6.0, j / 3.0, np.cos(i + j) * 0.2]

        surface = BezierSurfaceC0.fromControlNet(net)
        self.assertEqual(surface.nPatches, (2, 1))

        below = surface.value([0.5 - 1e-12, 0.4])
        above = surface.value([0.5, 0.4])
        np.testing.assert_allclose(below, above, atol=1e-9)
        np.testing.assert_allclose(surface.value([1.0, 1.0]), net[-1, -1], atol=1e-12)

    def test_bezier_surface_bad_net(self):
        with self.assertRaises(ValueError):
            BezierSurfaceC0.fromControlNet(np.zeros((5, 4, 3)))

    def test_shifted_sphere(self):
        # Sphere normals point inwards
        shifted = ShiftedSurface(Sphere(1.0), 0.5)
        uv = np.array([0.4, 1.2])
        self.assertAlmostEqual(np.linalg.norm(shifted.value(uv)), 0.5, places=12)


class TestParameterDomain(unittest.TestCase):
    N_PROCS = 1

    def test_wrapped_distance(self):
        torus = Torus(2.0, 0.5)
        a = np.array([0.01, 1.0])
        b = np.array([2 * np.pi - 0.01, 1.0])
        self.assertAlmostEqual(torus.parameterDistance(a, b), 0.02, places=12)

    def test_wrapped_distance_both_dims(self):
        torus = Torus(2.0, 0.5)
        a = np.array([0.01, 2 * np.pi - 0.03])
        b = np.array([2 * np.pi - 0.02, 0.01])
        self.assertAlmostEqual(torus.parameterDistance(a, b), 0.05, places=12)

    def test_unwrapped_distance(self):
        sphere = Sphere(1.0)
        a = np.array([0.0, 0.1])
        b = np.array([0.0, np.pi - 0.1])
        self.assertAlmostEqual(sphere.parameterDistance(a, b), np.pi - 0.2, places=12)

    def test_wrap_parameter(self):
        sphere = Sphere(1.0)
        uv = sphere.wrapParameter([2 * np.pi + 0.5, 1.0])
        np.testing.assert_allclose(uv, [0.5, 1.0])
        uv = sphere.wrapParameter([-0.5, 1.0])
        np.testing.assert_allclose(uv, [2 * np.pi - 0.5, 1.0])

    def test_random_parameter(self):
        rng = np.random.default_rng(3)
        plane = XZPlane([0.0, 0.0, 0.0], [2.0, 0.5])
        samples = np.array([plane.sampleRandomParameter(rng) for _ in range(200)])
        self.assertTrue(np.all(samples >= 0.0))
        self.assertTrue(np.all(samples[:, 0] <= 2.0))
        self.assertTrue(np.all(samples[:, 1] <= 0.5))


if __name__ == "__main__":
    unittest.main()
