import unittest

import numpy as np

from ffnn.activation import (
    ActivationFunction, get_activation_function, HEAVISIDE_IMPULSE,
    Heaviside, Linear, Sigmoid)


class TestSigmoid(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

    def test_output_at_zero(self):
        self.assertEqual(Sigmoid().output(0.0), 0.5)
        self.assertEqual(Sigmoid(beta=3.0).output(0.0), 0.5)

    def test_output_is_in_open_unit_interval(self):
        x = self.random_state.uniform(-20, 20, size=1000)

        for beta in [0.5, 1.0, 1.5]:
            y = Sigmoid(beta=beta).output(x)
            self.assertTrue((y > 0).all())
            self.assertTrue((y < 1).all())

    def test_output_prime_matches_closed_form(self):
        x = self.random_state.uniform(-10, 10, size=1000)

        for beta in [0.25, 1.0, 2.0]:
            f = Sigmoid(beta=beta)
            y = f.output(x)
            expected = beta * y * (1 - y)
            self.assertLess(np.abs(f.output_prime(x) - expected).max(), 1e-12)

    def test_output_prime_matches_finite_difference(self):
        f = Sigmoid(beta=1.7)
        h = 1e-6

        for x in [-3.0, -0.2, 0.0, 0.9, 4.0]:
            numerical = (f.output(x + h) - f.output(x - h)) / (2 * h)
            self.assertAlmostEqual(f.output_prime(x), numerical, places=6)

    def test_extreme_inputs_do_not_overflow(self):
        f = Sigmoid()

        self.assertEqual(f.output(-1e4), 0.0)
        self.assertEqual(f.output(1e4), 1.0)
        self.assertEqual(f.output_prime(1e4), 0.0)

    def test_scalar_returns_float(self):
        self.assertIsInstance(Sigmoid().output(0.3), float)
        self.assertIsInstance(Sigmoid().output_prime(0.3), float)

    def test_invalid_beta_keeps_previous_value(self):
        f = Sigmoid(beta=2.0)

        f.beta = 0
        self.assertEqual(f.beta, 2.0)

        f.beta = -1.5
        self.assertEqual(f.beta, 2.0)

        f.beta = 0.5
        self.assertEqual(f.beta, 0.5)

    def test_invalid_beta_at_construction_uses_default(self):
        self.assertEqual(Sigmoid(beta=-1).beta, 1.0)


class TestLinear(unittest.TestCase):

    def test_unit_slope_values(self):
        f = Linear(a=1)

        self.assertEqual(f.output(0.6), 1.0)
        self.assertEqual(f.output(-0.6), 0.0)
        self.assertEqual(f.output(0.0), 0.5)
        self.assertEqual(f.output_prime(0.0), 1.0)
        self.assertEqual(f.output_prime(0.6), 0.0)
        self.assertEqual(f.output_prime(-0.6), 0.0)

    def test_linear_region_scales_with_a(self):
        f = Linear(a=2.0)

        self.assertEqual(f.threshold, 0.25)
        self.assertAlmostEqual(f.output(0.1), 0.7)
        self.assertEqual(f.output(0.3), 1.0)
        self.assertEqual(f.output(-0.3), 0.0)
        self.assertEqual(f.output_prime(0.1), 2.0)

    def test_boundaries_belong_to_linear_region(self):
        f = Linear(a=1.0)

        self.assertEqual(f.output(0.5), 1.0)
        self.assertEqual(f.output(-0.5), 0.0)
        self.assertEqual(f.output_prime(0.5), 1.0)
        self.assertEqual(f.output_prime(-0.5), 1.0)

    def test_output_is_continuous(self):
        f = Linear(a=0.8)
        x = np.linspace(-2, 2, 4001)
        y = f.output(x)

        self.assertTrue(((y >= 0) & (y <= 1)).all())
        self.assertLess(np.abs(np.diff(y)).max(), 1e-3)

    def test_invalid_a_keeps_previous_value(self):
        f = Linear(a=4.0)

        f.a = 0
        self.assertEqual(f.a, 4.0)
        self.assertEqual(f.threshold, 0.125)

        f.a = -2
        self.assertEqual(f.a, 4.0)


class TestHeaviside(unittest.TestCase):

    def test_output(self):
        f = Heaviside()

        self.assertEqual(f.output(1e-9), 1.0)
        self.assertEqual(f.output(3.0), 1.0)
        self.assertEqual(f.output(0.0), 0.0)
        self.assertEqual(f.output(-2.0), 0.0)

    def test_output_prime_impulse_sentinel(self):
        # Pinned behavior: a huge finite value near the origin instead of
        # a true impulse
        f = Heaviside()

        self.assertEqual(f.output_prime(0.0), HEAVISIDE_IMPULSE)
        self.assertEqual(f.output_prime(5e-5), HEAVISIDE_IMPULSE)
        self.assertEqual(f.output_prime(-5e-5), HEAVISIDE_IMPULSE)
        self.assertEqual(f.output_prime(1e-3), 0.0)
        self.assertEqual(f.output_prime(-1.0), 0.0)

    def test_impulse_is_float32_max(self):
        self.assertEqual(HEAVISIDE_IMPULSE,
                         float(np.finfo(np.float32).max))


class TestGetActivationFunction(unittest.TestCase):

    def test_by_name(self):
        self.assertIsInstance(get_activation_function('sigmoid'), Sigmoid)
        self.assertIsInstance(get_activation_function('Linear'), Linear)
        self.assertIsInstance(get_activation_function('heaviside'), Heaviside)

    def test_by_name_with_params(self):
        f = get_activation_function('sigmoid', beta=3.0)
        self.assertEqual(f.beta, 3.0)

    def test_instance_is_shared(self):
        f = Linear(a=2.0)
        self.assertIs(get_activation_function(f), f)

    def test_none_is_identity(self):
        self.assertIsNone(get_activation_function(None))

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            get_activation_function('relu')

    def test_bad_type(self):
        with self.assertRaises(TypeError):
            get_activation_function(3.0)

    def test_params_round_trip(self):
        for f in [Sigmoid(beta=0.3), Linear(a=7.0), Heaviside()]:
            g = get_activation_function(f.name, **f.get_params())
            self.assertIs(type(g), type(f))
            self.assertEqual(g.get_params(), f.get_params())

    def test_abstract_base(self):
        with self.assertRaises(TypeError):
            ActivationFunction()


if __name__ == '__main__':
    unittest.main()
