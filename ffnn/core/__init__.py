# flake8: noqa

from .exception import (
    ConfigurationError,
    DatasetSizeMismatch,
    DimensionMismatch,
    EmptyDataset,
    OutputNotComputed,
    PersistenceError,
)
from .layer import Layer
from .network import Network
from .neuron import Neuron
