from dataclasses import dataclass, field
import unittest
from itertools import product
from math import sqrt

from eigenkit import EigenKit
from eigenkit.typing import PowerMethodKind
from eigenkit.errors import (
    ZeroInitialGuessError,
    EmptyMatrixError,
    DimensionMismatchError,
    SingularMatrixError
)
from utils import backends, to_list, normalized_abs

@dataclass
class PowerCase:
    matrix: list[list[float]]
    guess: list[float]
    eps: float
    value: float
    vector: list[float] = field(default_factory=list)
    tol: float = 0.0
    shift: float = 0.0

    def __post_init__(self) -> None:
        if self.tol == 0.0:
            self.tol = self.eps * 10

class TestPowerMethod(unittest.TestCase):

    def setUp(self):
        self.eigenkit = [EigenKit(backend) for backend in backends]

    def check_vector(self, ek, expected, actual, tol: float) -> None:
        for exp, act in zip(normalized_abs(expected), normalized_abs(to_list(ek.namespace, actual))):
            self.assertAlmostEqual(exp, act, delta=tol)

    def test_regular(self) -> None:
        cases = [
            PowerCase([[2, 3], [5, 4]], [1, 1], 1e-5, 7.0, [3/5, 1]),
            PowerCase([[0, 2, 4], [1, 1, -2], [-2, 0, 5]], [1, 1, 1], 1e-10, 3.0, [1, -0.5, 1], tol=1e-6),
            PowerCase([[10, 6, 7], [1, 7, -2], [2, 2, 2]], [1, 1, 1], 1e-8,
                      (sqrt(129) + 13) / 2, [(sqrt(129) + 7) / 4, 0.5, 1], tol=1e-6),
            PowerCase([[1, -1, 0], [-1, 2, -1], [0, -1, 1]], [1, -1, 1], 1e-10, 3.0, [1, -2, 1]),
        ]
        for ek, case in product(self.eigenkit, cases):
            res = ek.regular_power(case.matrix, case.guess, case.eps, 100)
            self.assertAlmostEqual(res.eigenvalue, case.value, delta=case.tol)
            self.check_vector(ek, case.vector, res.eigenvector, case.tol)
            self.assertTrue(res.converged)
            self.assertLessEqual(res.iterations, 100)
            self.assertEqual(len(res.history), res.iterations)

    def test_unit_eigenvector(self) -> None:
        for ek in self.eigenkit:
            res = ek.regular_power([[2, 3], [5, 4]], [4, -1], 1e-8, 100)
            self.assertAlmostEqual(sum(val*val for val in to_list(ek.namespace, res.eigenvector)), 1.0, delta=1e-12)
            self.assertLess(res.residual, 1e-6)

    def test_inverse(self) -> None:
        cases = [
            PowerCase([[2, 3], [5, 4]], [1, 1], 1e-3, -1.0, [-1, 1]),
            PowerCase([[10, 6, 7], [1, 7, -2], [2, 2, 2]], [1, -1, 1], 1e-5,
                      (13 - sqrt(129)) / 2, [(7 - sqrt(129)) / 4, 0.5, 1]),
            PowerCase([[0, 2, 4], [1, 1, -2], [-2, 0, 5]], [1, 1, 1], 1e-10, 1.0, [2, -1, 1], tol=1e-6),
        ]
        for ek, case in product(self.eigenkit, cases):
            res = ek.inverse_power(case.matrix, case.guess, case.eps, 100)
            self.assertAlmostEqual(res.eigenvalue, case.value, delta=case.tol)
            self.check_vector(ek, case.vector, res.eigenvector, case.tol)

    def test_farthest(self) -> None:
        cases = [
            PowerCase([[2, 6, -3], [5, 3, -3], [5, -4, 4]], [1, 0, 1], 1e-10, -3.0, [-3, 5, 5], tol=1e-8, shift=4),
            PowerCase([[2, -1, 0], [-1, 2, -1], [0, -1, 2]], [1, 1, 1], 1e-10, 2 + sqrt(2), [1, -sqrt(2), 1],
                      tol=1e-8, shift=0.5),
        ]
        for ek, case in product(self.eigenkit, cases):
            res = ek.farthest_eigenvalue_power(case.matrix, case.guess, case.shift, case.eps, 100)
            self.assertAlmostEqual(res.eigenvalue, case.value, delta=case.tol)
            self.check_vector(ek, case.vector, res.eigenvector, 1e-6)
            self.assertLess(res.residual, 1e-6)

    def test_nearest(self) -> None:
        cases = [
            PowerCase([[10, 6, 7], [1, 7, -2], [2, 2, 2]], [1, 1, 1], 1e-10, 6.0, tol=1e-9, shift=5),
            PowerCase([[2, -1, 0], [-1, 2, -1], [0, -1, 2]], [1, 0, 0], 1e-10, 2.0, [1, 0, -1],
                      tol=1e-9, shift=1.9),
        ]
        for ek, case in product(self.eigenkit, cases):
            res = ek.nearest_eigenvalue_power(case.matrix, case.guess, case.shift, case.eps, 100)
            self.assertAlmostEqual(res.eigenvalue, case.value, delta=case.tol)
            self.assertLess(res.residual, 1e-6)
            if case.vector:
                self.check_vector(ek, case.vector, res.eigenvector, 1e-8)

    def test_power_method_kind(self) -> None:
        matrix = [[2, -1, 0], [-1, 2, -1], [0, -1, 2]]
        expected = {
            PowerMethodKind.REGULAR: 2 + sqrt(2),
            PowerMethodKind.INVERSE: 2 - sqrt(2),
            PowerMethodKind.FARTHEST: 2 + sqrt(2),
            PowerMethodKind.NEAREST: 2.0,
        }
        for ek, (kind, value) in product(self.eigenkit, expected.items()):
            res = ek.power_method(kind, matrix, [1, 0.5, 0], shift=1.9, eps=1e-12, max_iterations=500)
            self.assertAlmostEqual(res.eigenvalue, value, delta=1e-8)
            res = ek.power_method(kind.value, matrix, [1, 0.5, 0], shift=1.9, eps=1e-12, max_iterations=500)
            self.assertAlmostEqual(res.eigenvalue, value, delta=1e-8)

    def test_zero_guess(self) -> None:
        for ek in self.eigenkit:
            with self.assertRaises(ZeroInitialGuessError):
                ek.regular_power([[2, 3], [5, 4]], [0, 0], 1e-5, 100)
            with self.assertRaises(ZeroInitialGuessError):
                ek.nearest_eigenvalue_power([[2, 3], [5, 4]], [0, 0], 1.0, 1e-5, 100)

    def test_invalid_matrix(self) -> None:
        for ek in self.eigenkit:
            with self.assertRaises(EmptyMatrixError):
                ek.regular_power([], [1], 1e-5, 100)
            with self.assertRaises(DimensionMismatchError):
                ek.regular_power([[2, 3], [5, 4]], [1, 1, 1], 1e-5, 100)
            with self.assertRaises(DimensionMismatchError):
                ek.inverse_power([[1, 2, 3], [4, 5, 6]], [1, 1, 1], 1e-5, 100)
            with self.assertRaises(ValueError):
                ek.regular_power([[2, 3], [5, 4]], [1, 1], 0.0, 100)
            with self.assertRaises(ValueError):
                ek.regular_power([[2, 3], [5, 4]], [1, 1], 1e-5, 0)

    def test_singular(self) -> None:
        for ek in self.eigenkit:
            with self.assertRaises(SingularMatrixError):
                ek.inverse_power([[1, 2], [2, 4]], [1, 1], 1e-5, 100)
            with self.assertRaises(SingularMatrixError):
                ek.nearest_eigenvalue_power([[5, 0, 0], [0, 3, 0], [0, 0, 1]], [1, 1, 1], 3.0, 1e-5, 100)

    def test_degenerate_direction(self) -> None:
        for ek in self.eigenkit:
            res = ek.regular_power([[0, 1], [0, 0]], [1, 0], 1e-5, 100)
            self.assertEqual(res.iterations, 1)
            self.assertEqual(res.eigenvalue, 0.0)
            self.assertFalse(res.converged)
            self.assertEqual(to_list(ek.namespace, res.eigenvector), [1.0, 0.0])

    def test_zero_first_estimate(self) -> None:
        for ek in self.eigenkit:
            # first Rayleigh quotient of [1, 2] is 4 - 4 = 0
            res = ek.regular_power([[4, 0], [0, -1]], [1, 2], 1e-10, 200)
            self.assertGreater(res.iterations, 1)
            self.assertEqual(res.history[0], 0.0)
            self.assertAlmostEqual(res.eigenvalue, 4.0, delta=1e-8)
            self.assertTrue(res.converged)
            self.check_vector(ek, [1, 0], res.eigenvector, 1e-6)

            # first estimate on M-4I is zero as well
            res = ek.farthest_eigenvalue_power([[2, 6, -3], [5, 3, -3], [5, -4, 4]], [1, 0, 1], 4.0, 1e-10, 100)
            self.assertEqual(res.history[0], 0.0)
            self.assertAlmostEqual(res.eigenvalue, -3.0, delta=1e-8)

    def test_budget_exhausted(self) -> None:
        for ek in self.eigenkit:
            res = ek.regular_power([[2, 3], [5, 4]], [1, 0], 1e-14, 2)
            self.assertEqual(res.iterations, 2)
            self.assertFalse(res.converged)
            self.assertGreater(res.error, 1e-14)

    def test_input_not_modified(self) -> None:
        for ek in self.eigenkit:
            xp = ek.namespace
            matrix = xp.asarray([[2.0, -1.0, 0.0], [-1.0, 2.0, -1.0], [0.0, -1.0, 2.0]])
            guess = xp.asarray([1.0, 0.0, 0.0])
            ek.nearest_eigenvalue_power(matrix, guess, 1.9, 1e-10, 100)
            ek.inverse_power(matrix, guess, 1e-10, 100)
            self.assertEqual(to_list(xp, matrix), [2.0, -1.0, 0.0, -1.0, 2.0, -1.0, 0.0, -1.0, 2.0])
            self.assertEqual(to_list(xp, guess), [1.0, 0.0, 0.0])

if __name__ == "__main__":
    unittest.main()
