import logging

import numpy

from ffnn.activation import get_activation_function
from ffnn.core.exception import ConfigurationError, DimensionMismatch
from ffnn.core.layer import Layer
from ffnn.core.neuron import validate_count


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

DEFAULT_ACTIVATION = 'sigmoid'
DEFAULT_LEARNING_ALGORITHM = 'back-propagation'


class Network:
    """ A feedforward neural network::

                              o
                              o  o  o
        input vector =====>   o  o  o  =====> output vector
                              o  o  o
                              o
                           layers of neurons

    Each neuron of layer `i-1` feeds every neuron of layer `i`. The wiring
    is fixed at construction.
    """
    def __init__(self, n_inputs, layer_sizes, activation=DEFAULT_ACTIVATION,
                 learning_algorithm=DEFAULT_LEARNING_ALGORITHM,
                 learning_algorithm_kwargs=None, random_state=None):
        """
        Parameters
        ----------
        n_inputs: int
            Width of the network's input vector.

        layer_sizes: sequence of int
            `layer_sizes[i]` is the number of neurons in layer `i`. The last
            entry is the width of the output vector.

        activation: ActivationFunction, str, None, or list, default='sigmoid'
            A single selection is resolved once and shared by every neuron.
            A list gives one selection per layer. None is the identity.

        learning_algorithm: str or class, default='back-propagation'
            The learning algorithm driving :meth:`learn`: a name from
            :data:`ffnn.learning.LEARNING_ALGORITHMS` or a subclass of
            :class:`ffnn.learning.LearningAlgorithm`. It is instantiated
            for this network.

        learning_algorithm_kwargs: dict, default=None
            Keyword arguments for the learning algorithm (e.g., `alpha`,
            `gamma`, `error_threshold`, `max_iterations`).

        random_state: numpy.random.RandomState, default=None
            Provide for reproducible randomization. A single instance is
            shared by every neuron of the network.

        """
        layer_sizes = self._validate_topology(n_inputs, layer_sizes)
        activations = self._resolve_activations(activation, len(layer_sizes))

        if random_state is None:
            random_state = numpy.random.RandomState()
            msg = ("RandomState not provided; randomized weights will "
                   "not be reproducible")
            logger.warning(msg)
        elif not isinstance(random_state, numpy.random.RandomState):
            msg = "`random_state` ({}) not instance numpy.random.RandomState"
            raise TypeError(msg.format(type(random_state)))

        self.random_state = random_state
        self._n_inputs = n_inputs

        # Layer `i` takes the output of layer `i-1` as input
        widths = [n_inputs] + layer_sizes[:-1]
        self._layers = [
            Layer(n_neurons, width, activation=layer_activation,
                  random_state=random_state)
            for n_neurons, width, layer_activation
            in zip(layer_sizes, widths, activations)
        ]

        self._learning_algorithm = None
        self.learning_algorithm = self._create_learning_algorithm(
            learning_algorithm, learning_algorithm_kwargs or {})

    def __repr__(self):
        return "<Network n_inputs=%d, layer_sizes=%r>" % (
            self.n_inputs, self.layer_sizes)

    @staticmethod
    def _validate_topology(n_inputs, layer_sizes):
        validate_count(n_inputs, 'n_inputs')

        if not numpy.iterable(layer_sizes):
            msg = "`layer_sizes` should be a sequence of ints but was {}"
            raise ConfigurationError(msg.format(type(layer_sizes)))

        layer_sizes = list(layer_sizes)

        if len(layer_sizes) < 1:
            msg = "A network needs at least one layer of neurons"
            raise ConfigurationError(msg)

        for i, size in enumerate(layer_sizes):
            validate_count(size, 'layer_sizes[{}]'.format(i))

        return layer_sizes

    @staticmethod
    def _resolve_activations(activation, n_layers):
        if isinstance(activation, (list, tuple)):
            if len(activation) != n_layers:
                msg = "{} activation functions given for {} layers"
                raise ConfigurationError(
                    msg.format(len(activation), n_layers))
            return [get_activation_function(item) for item in activation]

        # One instance shared by every layer
        return [get_activation_function(activation)] * n_layers

    def _create_learning_algorithm(self, learning_algorithm, kwargs):
        from ffnn.learning import LEARNING_ALGORITHMS, LearningAlgorithm

        if isinstance(learning_algorithm, str):
            try:
                learning_algorithm = LEARNING_ALGORITHMS[learning_algorithm]
            except KeyError:
                msg = "Unknown learning algorithm `{}` (expected one of {})"
                raise ConfigurationError(msg.format(
                    learning_algorithm, sorted(LEARNING_ALGORITHMS)))

        if not (isinstance(learning_algorithm, type) and
                issubclass(learning_algorithm, LearningAlgorithm)):
            msg = ("`learning_algorithm` should be a name or a "
                   "LearningAlgorithm subclass but was {!r}")
            raise ConfigurationError(msg.format(learning_algorithm))

        return learning_algorithm(self, **kwargs)

    @property
    def n_inputs(self):
        return self._n_inputs

    @property
    def n_outputs(self):
        return self._layers[-1].n_neurons

    @property
    def n_layers(self):
        return len(self._layers)

    @property
    def layer_sizes(self):
        return [layer.n_neurons for layer in self._layers]

    @property
    def layers(self):
        return tuple(self._layers)

    def __len__(self):
        return self.n_layers

    def __getitem__(self, layer):
        return self._layers[layer]

    def __iter__(self):
        return iter(self._layers)

    @property
    def learning_algorithm(self):
        return self._learning_algorithm

    @learning_algorithm.setter
    def learning_algorithm(self, value):
        # None is ignored; the current algorithm is kept
        if value is None:
            return

        if value.network is not self:
            msg = ("The learning algorithm {!r} is bound to another network; "
                   "create one for this network instead")
            raise ConfigurationError(msg.format(value))

        self._learning_algorithm = value

    def output(self, inputs):
        """ Compute the network output for the input vector `inputs`

        Parameters
        ----------
        inputs: sequence of float, length `n_inputs`

        Returns
        -------
        output: ndarray, shape=(n_outputs,)
            A new array on every call.

        """
        inputs = numpy.asarray(inputs, dtype=float)

        if inputs.ndim != 1 or len(inputs) != self._n_inputs:
            msg = "Network input has shape {} but the network has {} inputs"
            raise DimensionMismatch(msg.format(inputs.shape, self._n_inputs))

        result = inputs
        for layer in self._layers:
            result = layer.output(result)

        return result

    def learn(self, inputs, expected_outputs, on_iterate=None):
        """ Train the network with its learning algorithm. See
        :meth:`ffnn.learning.LearningAlgorithm.learn`
        """
        return self._learning_algorithm.learn(
            inputs, expected_outputs, on_iterate=on_iterate)

    def set_activation_function(self, activation):
        """ Set one activation function (shared) for every neuron
        """
        activation = get_activation_function(activation)
        for layer in self._layers:
            layer.set_activation_function(activation)

    def set_randomization_interval(self, low, high):
        """ Set the interval `[low, high)` in which weights and thresholds
        are randomized. Ignored unless `low < high`.
        """
        for layer in self._layers:
            layer.set_randomization_interval(low, high)

    def randomize_weights(self):
        for layer in self._layers:
            layer.randomize_weights()

    def randomize_thresholds(self):
        for layer in self._layers:
            layer.randomize_thresholds()

    def randomize_all(self):
        for layer in self._layers:
            layer.randomize_all()
