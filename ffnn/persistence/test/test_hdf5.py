import os
import tempfile
import unittest

import h5py
import numpy as np

from ffnn.activation import Heaviside, Linear, Sigmoid
from ffnn.core.exception import PersistenceError
from ffnn.core.network import Network
from ffnn.learning import BackPropagation
from ffnn.persistence import hdf5


class TestHdf5Persistence(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

        sigmoid = Sigmoid(beta=1.5)
        self.network = Network(
            3, [4, 3, 2], activation=[sigmoid, Linear(a=0.5), sigmoid],
            random_state=self.random_state)
        self.network.set_randomization_interval(-0.5, 0.5)
        self.network.randomize_all()
        self.network.learning_algorithm = BackPropagation(
            self.network, alpha=0.25, gamma=0.1, max_iterations=20)

        # Give the neurons some momentum history
        self.network.learn([[0.1, 0.2, 0.3], [0.3, -0.2, 0.0]],
                           [[0.0, 1.0], [1.0, 0.0]])

    def assert_same_outputs(self, first, second):
        for _ in range(20):
            inputs = self.random_state.randn(first.n_inputs)
            self.assertTrue(np.array_equal(first.output(inputs),
                                           second.output(inputs)))

    def assert_same_state(self, first, second):
        self.assertEqual(first.layer_sizes, second.layer_sizes)

        for layer_first, layer_second in zip(first, second):
            for neuron_first, neuron_second in zip(layer_first, layer_second):
                params_first = neuron_first.get_params()
                params_second = neuron_second.get_params()
                for value_first, value_second in zip(params_first,
                                                     params_second):
                    self.assertTrue(np.array_equal(value_first, value_second))

                self.assertEqual(neuron_first.randomization_min,
                                 neuron_second.randomization_min)
                self.assertEqual(neuron_first.randomization_max,
                                 neuron_second.randomization_max)

    def test_bytes_round_trip(self):
        blob = hdf5.to_bytes(self.network)
        self.assertIsInstance(blob, bytes)

        restored = hdf5.from_bytes(blob, random_state=self.random_state)

        self.assert_same_state(self.network, restored)
        self.assert_same_outputs(self.network, restored)

    def test_file_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            filename = os.path.join(tmp_dir, 'network.h5')
            hdf5.save(self.network, filename)
            restored = hdf5.load(filename)

        self.assert_same_state(self.network, restored)
        self.assert_same_outputs(self.network, restored)

    def test_activation_sharing_survives(self):
        restored = hdf5.from_bytes(hdf5.to_bytes(self.network))

        first = restored[0][0].activation
        self.assertIsInstance(first, Sigmoid)
        self.assertEqual(first.beta, 1.5)
        self.assertIs(restored[2][1].activation, first)
        self.assertIs(restored[0][3].activation, first)

        linear = restored[1][0].activation
        self.assertIsInstance(linear, Linear)
        self.assertEqual(linear.a, 0.5)
        self.assertIsNot(linear, first)

    def test_identity_and_heaviside(self):
        network = Network(2, [2, 1], activation=[None, Heaviside()],
                          random_state=self.random_state)
        network.randomize_all()

        restored = hdf5.from_bytes(hdf5.to_bytes(network))

        self.assertIsNone(restored[0][0].activation)
        self.assertIsInstance(restored[1][0].activation, Heaviside)
        self.assert_same_outputs(network, restored)

    def test_learning_algorithm_survives(self):
        restored = hdf5.from_bytes(hdf5.to_bytes(self.network))
        algorithm = restored.learning_algorithm

        self.assertIsInstance(algorithm, BackPropagation)
        self.assertIs(algorithm.network, restored)
        self.assertEqual(algorithm.alpha, 0.25)
        self.assertEqual(algorithm.gamma, 0.1)
        self.assertEqual(algorithm.max_iterations, 20)
        self.assertEqual(algorithm.error_threshold, 0.001)

    def test_restored_network_trains_identically(self):
        restored = hdf5.from_bytes(hdf5.to_bytes(self.network))

        inputs = [[0.5, 0.5, 0.5]]
        outputs = [[1.0, 1.0]]
        self.network.learn(inputs, outputs)
        restored.learn(inputs, outputs)

        self.assert_same_state(self.network, restored)

    def test_unsupported_version(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            filename = os.path.join(tmp_dir, 'network.h5')
            hdf5.save(self.network, filename)

            with h5py.File(filename, mode='a') as hf:
                hf.attrs['format_version'] = hdf5.FORMAT_VERSION + 1

            with self.assertRaises(PersistenceError):
                hdf5.load(filename)

    def test_missing_layer(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            filename = os.path.join(tmp_dir, 'network.h5')
            hdf5.save(self.network, filename)

            with h5py.File(filename, mode='a') as hf:
                del hf[hdf5.LAYER_KEY.format(1)]

            with self.assertRaises(PersistenceError):
                hdf5.load(filename)

    def test_not_hdf5(self):
        with self.assertRaises(PersistenceError):
            hdf5.from_bytes(b'not a network')

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with self.assertRaises(PersistenceError):
                hdf5.load(os.path.join(tmp_dir, 'missing.h5'))


if __name__ == '__main__':
    unittest.main()
