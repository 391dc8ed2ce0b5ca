class ConfigurationError(Exception):
    """ Raised when a neuron, layer, or network is constructed with an
    invalid topology (e.g., zero layers or zero inputs)
    """


class DimensionMismatch(Exception):
    """ Raised when a vector's length disagrees with the declared width of
    the neuron, layer, or network receiving it
    """


class EmptyDataset(Exception):
    """ Raised when learning is requested with no input or output vectors
    """


class DatasetSizeMismatch(Exception):
    """ Raised when the number of input vectors and expected output vectors
    supplied for learning differ
    """


class OutputNotComputed(Exception):
    """ Raised when accessing values that require at least one forward pass
    """


class PersistenceError(Exception):
    """ Raised when a serialized network cannot be decoded
    """
