""" Save and restore networks in a versioned HDF5 layout

The format (version 1), assuming `hf` is an h5py `File`, is as follows::

    hf.attrs
    |_ format_version, n_inputs, n_layers
    'activations'
    |_ 'activation-i'            one group per distinct function instance
       |_ attrs: name, <params>
    'layer-i'
    |_ weights                   (n_neurons, n_inputs)
    |_ last-weights              (n_neurons, n_inputs)
    |_ thresholds                (n_neurons,)
    |_ last-thresholds           (n_neurons,)
    |_ randomization-interval    (n_neurons, 2)
    |_ activation-index          (n_neurons,), -1 for the identity
    |_ attrs: n_neurons, n_inputs
    'learning-algorithm'
    |_ attrs: name, <params>

Activation functions shared between neurons are stored once, so the sharing
survives a round trip.
"""
import io
import logging

import h5py
import numpy

from ffnn.activation import ACTIVATION_FUNCTIONS
from ffnn.core.exception import (
    ConfigurationError, DimensionMismatch, PersistenceError)
from ffnn.core.network import Network
from ffnn.learning import LEARNING_ALGORITHMS


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

FORMAT_VERSION = 1

ACTIVATIONS_KEY = 'activations'
ACTIVATION_KEY = 'activation-{:d}'
LAYER_KEY = 'layer-{:d}'
LEARNING_ALGORITHM_KEY = 'learning-algorithm'
WEIGHTS_KEY = 'weights'
LAST_WEIGHTS_KEY = 'last-weights'
THRESHOLDS_KEY = 'thresholds'
LAST_THRESHOLDS_KEY = 'last-thresholds'
RANDOMIZATION_INTERVAL_KEY = 'randomization-interval'
ACTIVATION_INDEX_KEY = 'activation-index'
IDENTITY_INDEX = -1


def save(network, filename):
    """ Write `network` to the HDF5 file `filename` (overwritten if it
    exists)
    """
    with h5py.File(filename, mode='w') as hf:
        _write_network(hf, network)

    msg = "Saved network {!r} to {}"
    logger.info(msg.format(network, filename))


def load(filename, random_state=None):
    """ Read a network written by :func:`save`

    Parameters
    ----------
    filename: str
        The HDF5 file.

    random_state: numpy.random.RandomState, default=None
        The random state given to the restored network; random states are
        not persisted.

    """
    try:
        hf = h5py.File(filename, mode='r')
    except OSError as e:
        msg = "Unable to open network file {}: {}"
        raise PersistenceError(msg.format(filename, e))

    with hf:
        return _read_network(hf, random_state)


def to_bytes(network):
    """ Encode `network` as an opaque blob of bytes
    """
    buffer = io.BytesIO()

    with h5py.File(buffer, mode='w') as hf:
        _write_network(hf, network)

    return buffer.getvalue()


def from_bytes(blob, random_state=None):
    """ Decode a network encoded with :func:`to_bytes`
    """
    try:
        hf = h5py.File(io.BytesIO(blob), mode='r')
    except OSError as e:
        msg = "Unable to decode network: {}"
        raise PersistenceError(msg.format(e))

    with hf:
        return _read_network(hf, random_state)


def _write_network(hf, network):
    hf.attrs['format_version'] = FORMAT_VERSION
    hf.attrs['n_inputs'] = network.n_inputs
    hf.attrs['n_layers'] = network.n_layers

    # Assign an index to each distinct activation function instance
    activations = []
    activation_ids = {}
    for layer in network:
        for neuron in layer:
            activation = neuron.activation
            if activation is None or id(activation) in activation_ids:
                continue
            activation_ids[id(activation)] = len(activations)
            activations.append(activation)

    group = hf.create_group(ACTIVATIONS_KEY)
    for iactivation, activation in enumerate(activations):
        g = group.create_group(ACTIVATION_KEY.format(iactivation))
        g.attrs['name'] = activation.name
        for key, value in activation.get_params().items():
            g.attrs[key] = value

    for ilayer, layer in enumerate(network):
        g = hf.create_group(LAYER_KEY.format(ilayer))
        g.attrs['n_neurons'] = layer.n_neurons
        g.attrs['n_inputs'] = layer.n_inputs

        params = [neuron.get_params() for neuron in layer]

        g.create_dataset(WEIGHTS_KEY,
                         data=numpy.array([p[0] for p in params]))
        g.create_dataset(LAST_WEIGHTS_KEY,
                         data=numpy.array([p[1] for p in params]))
        g.create_dataset(THRESHOLDS_KEY,
                         data=numpy.array([p[2] for p in params]))
        g.create_dataset(LAST_THRESHOLDS_KEY,
                         data=numpy.array([p[3] for p in params]))
        g.create_dataset(
            RANDOMIZATION_INTERVAL_KEY,
            data=numpy.array([[neuron.randomization_min,
                               neuron.randomization_max]
                              for neuron in layer]))
        g.create_dataset(
            ACTIVATION_INDEX_KEY,
            data=numpy.array([
                IDENTITY_INDEX if neuron.activation is None
                else activation_ids[id(neuron.activation)]
                for neuron in layer
            ], dtype=int))

    learning_algorithm = network.learning_algorithm
    g = hf.create_group(LEARNING_ALGORITHM_KEY)
    g.attrs['name'] = learning_algorithm.name or ''
    for key, value in learning_algorithm.get_params().items():
        g.attrs[key] = value


def _read_network(hf, random_state):
    format_version = hf.attrs.get('format_version')
    if format_version != FORMAT_VERSION:
        msg = "Unsupported format version {} (expected {})"
        raise PersistenceError(msg.format(format_version, FORMAT_VERSION))

    try:
        n_inputs = int(hf.attrs['n_inputs'])
        n_layers = int(hf.attrs['n_layers'])

        activations = [
            _read_activation(hf[ACTIVATIONS_KEY][ACTIVATION_KEY.format(i)])
            for i in range(len(hf[ACTIVATIONS_KEY]))
        ]

        layer_groups = [hf[LAYER_KEY.format(i)] for i in range(n_layers)]
        layer_sizes = [int(g.attrs['n_neurons']) for g in layer_groups]

        network = Network(n_inputs, layer_sizes, activation=None,
                          random_state=random_state)

        for layer, g in zip(network, layer_groups):
            weights = g[WEIGHTS_KEY][...]
            last_weights = g[LAST_WEIGHTS_KEY][...]
            thresholds = g[THRESHOLDS_KEY][...]
            last_thresholds = g[LAST_THRESHOLDS_KEY][...]
            intervals = g[RANDOMIZATION_INTERVAL_KEY][...]
            activation_index = g[ACTIVATION_INDEX_KEY][...]

            for i, neuron in enumerate(layer):
                neuron.set_params(weights[i], last_weights[i],
                                  thresholds[i], last_thresholds[i])
                neuron.set_randomization_interval(*intervals[i])

                index = int(activation_index[i])
                neuron.activation = (None if index == IDENTITY_INDEX
                                     else activations[index])

        params = dict(hf[LEARNING_ALGORITHM_KEY].attrs)
        name = _as_str(params.pop('name'))
    except (ConfigurationError, DimensionMismatch, KeyError, IndexError,
            ValueError) as e:
        msg = "Malformed network data: {}"
        raise PersistenceError(msg.format(e))

    if name not in LEARNING_ALGORITHMS:
        msg = "Unknown learning algorithm `{}`"
        raise PersistenceError(msg.format(name))

    network.learning_algorithm = LEARNING_ALGORITHMS[name](
        network, **{key: _as_scalar(value) for key, value in params.items()})

    return network


def _read_activation(group):
    params = dict(group.attrs)
    name = _as_str(params.pop('name', ''))

    if name not in ACTIVATION_FUNCTIONS:
        msg = "Unknown activation function `{}`"
        raise PersistenceError(msg.format(name))

    return ACTIVATION_FUNCTIONS[name](
        **{key: _as_scalar(value) for key, value in params.items()})


def _as_str(value):
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return str(value)


def _as_scalar(value):
    return numpy.asarray(value).item()
