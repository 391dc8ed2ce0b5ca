# flake8: noqa

from ._version import version as __version__
from .activation import (
    ActivationFunction,
    Heaviside,
    Linear,
    Sigmoid,
)
from .core import (
    ConfigurationError,
    DatasetSizeMismatch,
    DimensionMismatch,
    EmptyDataset,
    Layer,
    Network,
    Neuron,
    OutputNotComputed,
    PersistenceError,
)
from .learning import BackPropagation, LearningAlgorithm
