""" Learning algorithms adjust the weights and thresholds of a network
from (input, expected output) pairs.

:class:`BackPropagation` implements stochastic gradient back-propagation
with momentum. For neuron `i` of layer `L`, fed by neuron `j` of layer
`L-1` (output `s_j`)::

    W[i, j](n+1) = W[i, j](n) + alpha * A_i * s_j
                   + gamma * (W[i, j](n) - W[i, j](n-1))

    T[i](n+1) = T[i](n) - alpha * A_i - gamma * (T[i](n) - T[i](n-1))

where::

    A_i = f'(ws_i) * (expected_i - s_i)      (output layer)
    A_i = f'(ws_i) * sum_k(A_k * W[k, i])    (other layers, k in layer L+1)

The update is applied after every sample (not over the whole batch).
"""
import abc
import logging

import numpy

from ffnn.core.exception import (
    DatasetSizeMismatch, DimensionMismatch, EmptyDataset)


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

DEFAULT_ERROR_THRESHOLD = 0.001
DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_ALPHA = 0.5
DEFAULT_GAMMA = 0.2


class LearningAlgorithm(abc.ABC):
    """ The abstract base class for learning algorithms

    Learning runs epochs (full passes over the samples, in order) until the
    total error over an epoch is at most `error_threshold` or
    `max_iterations` epochs have run. At least one epoch always runs.
    Learning also stops if the error becomes NaN or infinite (the weights
    have diverged); a warning is logged.
    """
    name = None

    def __init__(self, network, error_threshold=DEFAULT_ERROR_THRESHOLD,
                 max_iterations=DEFAULT_MAX_ITERATIONS, logger=None):
        """
        Parameters
        ----------
        network: Network
            The network to train. It is referenced, not owned.

        error_threshold: float, default=0.001
            Learning stops once the total squared error of an epoch is at
            most this value. Must be positive.

        max_iterations: int, default=1000
            Maximum number of epochs per call to :meth:`learn`. Must be
            positive.

        logger: logging.Logger, default=None
            Receives the training progress. The default uses this module's
            logger. A :class:`ffnn.core.logger.TrainingLogger` (or any
            logger with `start_run` and `log_epoch` methods) is told about
            each run and records the per-epoch errors.

        """
        self._network = network

        self._error_threshold = DEFAULT_ERROR_THRESHOLD
        self._max_iterations = DEFAULT_MAX_ITERATIONS
        self.error_threshold = error_threshold
        self.max_iterations = max_iterations

        self.logger = logger

        self._inputs = None
        self._expected_outputs = None
        self._iteration = 0
        self._error = -1.0
        self._errors = numpy.zeros(network.n_outputs)

    def __repr__(self):
        return "<%s error_threshold=%g, max_iterations=%d>" % (
            self.__class__.__name__, self._error_threshold,
            self._max_iterations)

    @property
    def network(self):
        return self._network

    @property
    def error(self):
        """ The total error of the last epoch (-1 before any learning)
        """
        return self._error

    @property
    def errors(self):
        """ The error vector `expected - output` of the last sample
        """
        return self._errors.copy()

    @property
    def iteration(self):
        """ The number of epochs run by the last call to :meth:`learn`
        """
        return self._iteration

    @property
    def inputs(self):
        return self._inputs

    @property
    def expected_outputs(self):
        return self._expected_outputs

    @property
    def error_threshold(self):
        return self._error_threshold

    @error_threshold.setter
    def error_threshold(self, value):
        if value > 0:
            self._error_threshold = float(value)

    @property
    def max_iterations(self):
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value):
        if value > 0:
            self._max_iterations = int(value)

    def get_params(self):
        """ Returns the hyperparameters as a dictionary of keyword arguments
        """
        return {
            'error_threshold': self._error_threshold,
            'max_iterations': self._max_iterations,
        }

    def learn(self, inputs, expected_outputs, on_iterate=None):
        """ Train the network on the given data

        Parameters
        ----------
        inputs: sequence of input vectors
            `inputs[n]` is an input vector of the network.

        expected_outputs: sequence of output vectors
            `expected_outputs[n]` is the expected output for `inputs[n]`.

        on_iterate: callable or list of callables, default=None
            Each is called after every epoch as `on_iterate(iteration, error)`.
            See :mod:`ffnn.util.on_iterate`.

        Returns
        -------
        error: float
            The total error of the last epoch.

        """
        self._set_dataset(inputs, expected_outputs)
        on_iterate = self._validate_on_iterate(on_iterate)

        self._iteration = 0

        log = self._get_logger()
        if hasattr(log, 'start_run'):
            log.start_run(repr(self), len(inputs), self._max_iterations)

        while True:
            self._run_epoch()
            self._iteration += 1

            self._log_epoch()

            for func in on_iterate:
                func(self._iteration, self._error)

            if not numpy.isfinite(self._error):
                msg = ("Stopped after {} epochs: the error is {} "
                       "(the weights diverged)")
                log.warning(msg.format(self._iteration, self._error))
                break

            if self._error <= self._error_threshold:
                msg = "Converged after {} epochs (error = {:.6g})"
                log.info(msg.format(self._iteration, self._error))
                break

            if self._iteration >= self._max_iterations:
                msg = ("Stopped at the maximum of {} epochs "
                       "(error = {:.6g})")
                log.info(msg.format(self._iteration, self._error))
                break

        return self._error

    def epoch(self, inputs, expected_outputs):
        """ Run a single epoch over the given data and count it. Useful for
        driving the training loop (and stopping it) from outside.

        Returns
        -------
        error: float
            The total error of the epoch.

        """
        self._set_dataset(inputs, expected_outputs)
        self._run_epoch()
        self._iteration += 1
        self._log_epoch()
        return self._error

    def _run_epoch(self):
        self._error = 0.0

        for inputs, expected in zip(self._inputs, self._expected_outputs):
            self._error += self.learn_sample(inputs, expected)

    @abc.abstractmethod
    def learn_sample(self, inputs, expected):
        """ Adjust the network for a single sample

        Returns
        -------
        error: float
            The squared error of the sample, `0.5 * sum(e**2)`, measured
            before the adjustment.

        """
        raise NotImplementedError

    def _set_dataset(self, inputs, expected_outputs):
        if len(inputs) < 1:
            msg = "No input data: cannot learn from nothing"
            raise EmptyDataset(msg)

        if len(expected_outputs) < 1:
            msg = "No output data: cannot learn from nothing"
            raise EmptyDataset(msg)

        if len(inputs) != len(expected_outputs):
            msg = ("Mismatch in number of examples: inputs ({}), "
                   "expected outputs ({})")
            raise DatasetSizeMismatch(
                msg.format(len(inputs), len(expected_outputs)))

        self._inputs = inputs
        self._expected_outputs = expected_outputs

    @staticmethod
    def _validate_on_iterate(on_iterate):
        if on_iterate is None:
            return []

        if callable(on_iterate):
            return [on_iterate]

        on_iterate = list(on_iterate)

        if not all(callable(func) for func in on_iterate):
            msg = "`on_iterate` should be a callable or a list of callables"
            raise TypeError(msg)

        return on_iterate

    def _get_logger(self):
        return self.logger if self.logger is not None else logger

    def _log_epoch(self):
        log = self._get_logger()

        if hasattr(log, 'log_epoch'):
            log.log_epoch(self._iteration, self._max_iterations, self._error)
        else:
            msg = "(Iteration = {:03d}) error = {:.6g}"
            log.debug(msg.format(self._iteration, self._error))


class BackPropagation(LearningAlgorithm):
    """ Stochastic gradient back-propagation with momentum
    """
    name = 'back-propagation'

    def __init__(self, network, alpha=DEFAULT_ALPHA, gamma=DEFAULT_GAMMA,
                 **kwargs):
        """
        Parameters
        ----------
        network: Network
            The network to train.

        alpha: float, default=0.5
            The learning rate. Must be positive.

        gamma: float, default=0.2
            The momentum coefficient. Must be non-negative; 0 disables
            momentum.

        kwargs:
            Passed to :class:`LearningAlgorithm`.

        """
        super().__init__(network, **kwargs)

        self._alpha = DEFAULT_ALPHA
        self._gamma = DEFAULT_GAMMA
        self.alpha = alpha
        self.gamma = gamma

    def __repr__(self):
        return "<BackPropagation alpha=%g, gamma=%g>" % (
            self._alpha, self._gamma)

    @property
    def alpha(self):
        return self._alpha

    @alpha.setter
    def alpha(self, value):
        if value > 0:
            self._alpha = float(value)

    @property
    def gamma(self):
        return self._gamma

    @gamma.setter
    def gamma(self, value):
        if value >= 0:
            self._gamma = float(value)

    def get_params(self):
        params = super().get_params()
        params.update(alpha=self._alpha, gamma=self._gamma)
        return params

    def learn_sample(self, inputs, expected):
        network = self._network

        inputs = numpy.asarray(inputs, dtype=float)
        expected = numpy.asarray(expected, dtype=float)

        output = network.output(inputs)

        if expected.ndim != 1 or len(expected) != network.n_outputs:
            msg = "Expected output has shape {} but the network has {} outputs"
            raise DimensionMismatch(
                msg.format(expected.shape, network.n_outputs))

        self._errors = expected - output
        error = 0.5 * float(numpy.dot(self._errors, self._errors))

        self._compute_gradients()
        self._update_weights(inputs)

        return error

    def _compute_gradients(self):
        """ Compute the gradient `A` of every neuron, from the output layer
        back to the first layer. Reads the weights before any update.
        """
        layers = self._network.layers

        for neuron, error in zip(layers[-1], self._errors):
            neuron.gradient = neuron.output_prime * error

        for ilayer in range(len(layers) - 2, -1, -1):
            next_layer = layers[ilayer + 1]

            for j, neuron in enumerate(layers[ilayer]):
                total = sum(
                    next_neuron.gradient * next_neuron[j]
                    for next_neuron in next_layer)
                neuron.gradient = neuron.output_prime * total

    def _update_weights(self, inputs):
        """ Move every weight and threshold, from the first layer to the
        output layer, using the gradients of the current sample
        """
        alpha = self._alpha
        gamma = self._gamma

        layer_inputs = inputs

        for layer in self._network:
            for neuron in layer:
                weights = neuron.weights

                neuron.weights = (
                    weights + alpha * layer_inputs * neuron.gradient +
                    gamma * (weights - neuron.last_weights))

                threshold = neuron.threshold
                neuron.threshold = (
                    threshold - alpha * neuron.gradient -
                    gamma * (threshold - neuron.last_threshold))

            # The next layer was fed this layer's forward output
            layer_inputs = layer.last_output
