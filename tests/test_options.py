import unittest
import threading

from eigenkit import EigenKit
from utils import backends

class TestOptions(unittest.TestCase):

    def setUp(self):
        self.eigenkit = [EigenKit(backend) for backend in backends]

    def test_nesting(self) -> None:
        for ek in self.eigenkit:
            defaults = ek.get_options()
            with ek.convergence(eps=1e-6) as opts1:
                with ek.convergence(max_iterations=5) as opts2:
                    self.assertEqual(opts2, ek.get_options())
                    self.assertEqual(opts2.eps, 1e-6)
                    self.assertEqual(opts2.max_iterations, 5)
                self.assertEqual(opts1, ek.get_options())
            self.assertEqual(defaults, ek.get_options())

            opt = ek.convergence(tolerance=1e-12)
            ek.set_options(opt)
            self.assertEqual(opt, ek.get_options())

    def test_defaults(self) -> None:
        for ek in self.eigenkit:
            opts = ek.get_options()
            self.assertEqual(opts.eps, 1e-10)
            self.assertEqual(opts.max_iterations, 1000)
            self.assertEqual(opts.qr_max_iterations, 1000)
            self.assertEqual(opts.tolerance, 1e-10)

    def test_invalid(self) -> None:
        for ek in self.eigenkit:
            with self.assertRaises(ValueError):
                ek.convergence(eps=0.0)
            with self.assertRaises(ValueError):
                ek.convergence(max_iterations=-1)
            opts = ek.convergence()
            with self.assertRaises(ValueError):
                opts.tolerance = 0.0

    def test_applied(self) -> None:
        for ek in self.eigenkit:
            with ek.convergence(max_iterations=1):
                res = ek.regular_power([[2, 3], [5, 4]], [1, 0])
                self.assertEqual(res.iterations, 1)
            res = ek.regular_power([[2, 3], [5, 4]], [1, 0], max_iterations=3)
            self.assertEqual(res.iterations, 3)
            with ek.convergence(qr_max_iterations=1, tolerance=1e-14):
                res = ek.complete_eigen_decomposition([[2, -1, 0], [-1, 2, -1], [0, -1, 2]])
                self.assertEqual(res.iterations, 1)
                self.assertFalse(res.converged)

    def test_instances_independent(self) -> None:
        ek1, ek2 = EigenKit(backends[0]), EigenKit(backends[0])
        with ek1.convergence(eps=1e-3):
            self.assertEqual(ek1.get_options().eps, 1e-3)
            self.assertEqual(ek2.get_options().eps, 1e-10)

    def test_threads(self) -> None:
        ek = self.eigenkit[0]
        seen = []
        with ek.convergence(eps=1e-3):
            thread = threading.Thread(target=lambda: seen.append(ek.get_options().eps))
            thread.start()
            thread.join()
        self.assertEqual(seen, [1e-10])

if __name__ == "__main__":
    unittest.main()
