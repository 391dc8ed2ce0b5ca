# flake8: noqa

from .activation_function import (
    ACTIVATION_FUNCTIONS,
    ActivationFunction,
    get_activation_function,
    HEAVISIDE_IMPULSE,
    Heaviside,
    Linear,
    Sigmoid,
)
