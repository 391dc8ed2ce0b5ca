import numpy

from ffnn.activation import get_activation_function
from ffnn.core.exception import DimensionMismatch
from ffnn.core.neuron import Neuron, validate_count


class Layer:
    """ A group of neurons sharing the same input vector::

                    / N[0] --->
        inputs ===> - N[1] --->  outputs (one per neuron)
                    \\ N[j] --->

    Every neuron of the layer has `n_inputs` inputs.
    """
    def __init__(self, n_neurons, n_inputs, activation='sigmoid',
                 random_state=None):
        """
        Parameters
        ----------
        n_neurons: int
            Number of neurons in the layer.

        n_inputs: int
            Number of inputs of every neuron of the layer.

        activation: ActivationFunction, str, or None, default='sigmoid'
            Resolved once, so every neuron of the layer shares the same
            function instance. None computes the identity.

        random_state: numpy.random.RandomState, default=None
            Shared by every neuron for weight and threshold randomization.

        """
        validate_count(n_neurons, 'n_neurons')
        validate_count(n_inputs, 'n_inputs')

        if random_state is None:
            random_state = numpy.random.RandomState()

        activation = get_activation_function(activation)

        self._neurons = [
            Neuron(n_inputs, activation=activation, random_state=random_state)
            for _ in range(n_neurons)
        ]
        self._n_inputs = n_inputs
        self._last_output = numpy.zeros(n_neurons)

    def __repr__(self):
        return "<Layer n_neurons=%d, n_inputs=%d>" % (
            self.n_neurons, self.n_inputs)

    @property
    def n_neurons(self):
        return len(self._neurons)

    @property
    def n_inputs(self):
        return self._n_inputs

    @property
    def neurons(self):
        return tuple(self._neurons)

    @property
    def last_output(self):
        """ The output vector of the last call to :meth:`output`
        """
        return self._last_output.copy()

    def __len__(self):
        return self.n_neurons

    def __getitem__(self, neuron):
        return self._neurons[neuron]

    def __iter__(self):
        return iter(self._neurons)

    def output(self, inputs):
        """ Compute the output of every neuron of the layer

        Parameters
        ----------
        inputs: sequence of float, length `n_inputs`

        Returns
        -------
        output: ndarray, shape=(n_neurons,)
            A new array on every call.

        """
        inputs = numpy.asarray(inputs, dtype=float)

        if inputs.ndim != 1 or len(inputs) != self._n_inputs:
            msg = "Layer input has shape {} but the layer has {} inputs"
            raise DimensionMismatch(msg.format(inputs.shape, self._n_inputs))

        for i, neuron in enumerate(self._neurons):
            self._last_output[i] = neuron.compute_output(inputs)

        return self._last_output.copy()

    def set_activation_function(self, activation):
        """ Set the same activation function for all neurons of the layer
        """
        activation = get_activation_function(activation)
        for neuron in self._neurons:
            neuron.activation = activation

    def set_randomization_interval(self, low, high):
        for neuron in self._neurons:
            neuron.set_randomization_interval(low, high)

    def randomize_weights(self):
        for neuron in self._neurons:
            neuron.randomize_weights()

    def randomize_thresholds(self):
        for neuron in self._neurons:
            neuron.randomize_threshold()

    def randomize_all(self):
        self.randomize_weights()
        self.randomize_thresholds()
