import numpy

from ffnn.activation import get_activation_function
from ffnn.core.exception import (
    ConfigurationError, DimensionMismatch, OutputNotComputed)


DEFAULT_RANDOMIZATION_MIN = -1.0
DEFAULT_RANDOMIZATION_MAX = 1.0


def validate_count(value, name):
    """ Raise a ConfigurationError unless `value` is a positive integer
    """
    if (isinstance(value, bool) or
            not isinstance(value, (int, numpy.integer))):
        msg = "`{}` should be an integer but was {}"
        raise ConfigurationError(msg.format(name, type(value)))

    if value < 1:
        msg = "`{}` should be at least 1 but was {}"
        raise ConfigurationError(msg.format(name, value))


class Neuron:
    """ An artificial neuron::

        x[0] -- * w[0] \\
        x[1] -- * w[1] -- + --> - threshold --> f --> output
        x[k] -- * w[k] /

    The neuron remembers the previous value of every weight and of the
    threshold (the "last" values), which the learning algorithm uses for
    its momentum term.
    """
    def __init__(self, n_inputs, activation='sigmoid', random_state=None):
        """
        Parameters
        ----------
        n_inputs: int
            Number of inputs (synapses); fixed for the neuron's lifetime.

        activation: ActivationFunction, str, or None, default='sigmoid'
            The activation function. An instance is shared, not copied.
            None computes the identity.

        random_state: numpy.random.RandomState, default=None
            The source of randomness for the randomization routines.

        """
        validate_count(n_inputs, 'n_inputs')

        self._weights = numpy.zeros(n_inputs)
        self._last_weights = numpy.zeros(n_inputs)
        self._threshold = 0.0
        self._last_threshold = 0.0

        self.activation = get_activation_function(activation)
        self.random_state = (numpy.random.RandomState()
                             if random_state is None else random_state)

        self._randomization_min = DEFAULT_RANDOMIZATION_MIN
        self._randomization_max = DEFAULT_RANDOMIZATION_MAX

        self._weighted_sum = 0.0
        self._output = 0.0
        self._is_computed = False

        # Scratch value owned by the learning algorithm
        self.gradient = 0.0

    def __repr__(self):
        return "<Neuron n_inputs=%d, activation=%r>" % (
            self.n_inputs, self.activation)

    @property
    def n_inputs(self):
        return len(self._weights)

    def __len__(self):
        return self.n_inputs

    def __getitem__(self, synapse):
        return float(self._weights[synapse])

    def __setitem__(self, synapse, value):
        self._last_weights[synapse] = self._weights[synapse]
        self._weights[synapse] = value

    @property
    def weights(self):
        return self._weights.copy()

    @weights.setter
    def weights(self, values):
        values = self._validate_vector(values, 'weights')
        self._last_weights = self._weights
        self._weights = values.copy()

    @property
    def last_weights(self):
        return self._last_weights.copy()

    @property
    def threshold(self):
        return self._threshold

    @threshold.setter
    def threshold(self, value):
        self._last_threshold = self._threshold
        self._threshold = float(value)

    @property
    def last_threshold(self):
        return self._last_threshold

    @property
    def output(self):
        """ The output of the last forward computation
        """
        return self._output

    @property
    def weighted_sum(self):
        """ The last weighted input sum minus threshold
        """
        return self._weighted_sum

    @property
    def output_prime(self):
        """ The activation function derivative at the last weighted sum
        """
        if not self._is_computed:
            msg = "No output has been computed for this neuron yet"
            raise OutputNotComputed(msg)

        if self.activation is None:
            return 1.0
        return self.activation.output_prime(self._weighted_sum)

    @property
    def randomization_min(self):
        return self._randomization_min

    @property
    def randomization_max(self):
        return self._randomization_max

    def set_randomization_interval(self, low, high):
        """ Set the interval `[low, high)` from which weights and threshold
        are drawn. The call is ignored unless `low < high`.
        """
        if low < high:
            self._randomization_min = float(low)
            self._randomization_max = float(high)

    def randomize_weights(self):
        """ Draw every weight uniformly from the randomization interval and
        reset the last weights to zero
        """
        self._weights = self.random_state.uniform(
            low=self._randomization_min, high=self._randomization_max,
            size=self.n_inputs)
        self._last_weights = numpy.zeros(self.n_inputs)

    def randomize_threshold(self):
        """ Draw the threshold uniformly from the randomization interval.
        The last threshold is left untouched.
        """
        self._threshold = float(self.random_state.uniform(
            low=self._randomization_min, high=self._randomization_max))

    def randomize_all(self):
        self.randomize_weights()
        self.randomize_threshold()

    def compute_output(self, inputs):
        """ Compute `f(dot(w, inputs) - threshold)` and remember both the
        weighted sum and the output

        Parameters
        ----------
        inputs: sequence of float, length `n_inputs`

        Returns
        -------
        output: float

        """
        inputs = self._validate_vector(inputs, 'inputs')

        weighted_sum = float(numpy.dot(self._weights, inputs)) - \
            self._threshold

        if self.activation is None:
            output = weighted_sum
        else:
            output = float(self.activation.output(weighted_sum))

        self._weighted_sum = weighted_sum
        self._output = output
        self._is_computed = True

        return output

    def get_params(self):
        """
        Returns
        -------
        params: list
            [weights, last_weights, threshold, last_threshold]
        """
        return [self.weights, self.last_weights,
                self._threshold, self._last_threshold]

    def set_params(self, weights, last_weights, threshold, last_threshold):
        """ Overwrite the neuron's state without shifting any values into
        the "last" slots
        """
        weights = self._validate_vector(weights, 'weights')
        last_weights = self._validate_vector(last_weights, 'last_weights')

        self._weights = weights.copy()
        self._last_weights = last_weights.copy()
        self._threshold = float(threshold)
        self._last_threshold = float(last_threshold)

    def _validate_vector(self, values, name):
        values = numpy.asarray(values, dtype=float)

        if values.ndim != 1 or len(values) != self.n_inputs:
            msg = "`{}` has shape {} but the neuron has {} inputs"
            raise DimensionMismatch(
                msg.format(name, values.shape, self.n_inputs))

        return values
