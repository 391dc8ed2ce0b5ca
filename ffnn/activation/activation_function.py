""" Scalar nonlinearities applied to a neuron's weighted input sum.

Each function provides its value (:code:`output`) and derivative
(:code:`output_prime`). Both accept a scalar (and return a float) or an
array (and operate elementwise). Instances are meant to be shared: every
neuron holding a reference sees parameter changes immediately.
"""
import abc

import numpy
from scipy.special import expit


# Stand-in for the infinite derivative of the step at the origin
HEAVISIDE_IMPULSE = float(numpy.finfo(numpy.float32).max)
HEAVISIDE_IMPULSE_WIDTH = 1e-4


def _as_output(value):
    """ Return python floats for scalar results, arrays otherwise
    """
    value = numpy.asarray(value, dtype=float)
    if value.ndim == 0:
        return float(value)
    return value


class ActivationFunction(abc.ABC):
    """ The abstract base class for activation functions
    """
    name = None

    @abc.abstractmethod
    def output(self, x):
        """ Compute the function value at `x`
        """
        raise NotImplementedError

    @abc.abstractmethod
    def output_prime(self, x):
        """ Compute the derivative of the function at `x`
        """
        raise NotImplementedError

    def get_params(self):
        """ Returns a dictionary of the parameters that, passed as keyword
        arguments to the constructor, recreate this function
        """
        return {}

    def __call__(self, x):
        return self.output(x)

    def __repr__(self):
        params = ", ".join(
            "{}={!r}".format(key, value)
            for key, value in sorted(self.get_params().items()))

        if params:
            return "<{} {}>".format(self.__class__.__name__, params)
        return "<{}>".format(self.__class__.__name__)


class Sigmoid(ActivationFunction):
    """ The sigmoid function::

                       1
        f(x) = -----------------   beta > 0
                1 + e^(-beta*x)

        f'(x) = beta * f(x) * (1 - f(x))

    """
    name = 'sigmoid'

    def __init__(self, beta=1.0):
        self._beta = 1.0
        self.beta = beta

    @property
    def beta(self):
        return self._beta

    @beta.setter
    def beta(self, value):
        # Non-positive values are ignored; the previous beta is kept
        if value > 0:
            self._beta = float(value)

    def output(self, x):
        x = numpy.asarray(x, dtype=float)
        return _as_output(expit(self._beta * x))

    def output_prime(self, x):
        y = numpy.asarray(self.output(x))
        return _as_output(self._beta * y * (1 - y))

    def get_params(self):
        return {'beta': self._beta}


class Linear(ActivationFunction):
    """ The saturating linear function::

                 | 1            if x > 0.5/a
          f(x) = | a * x + 0.5  if -0.5/a <= x <= 0.5/a
                 | 0            if x < -0.5/a

    with a > 0. The derivative is `a` on the linear part and 0 elsewhere.
    """
    name = 'linear'

    def __init__(self, a=1.0):
        self._a = 1.0
        self.a = a

    @property
    def a(self):
        return self._a

    @a.setter
    def a(self, value):
        if value > 0:
            self._a = float(value)

    @property
    def threshold(self):
        """ The half-width of the linear region
        """
        return 0.5 / self._a

    def output(self, x):
        x = numpy.asarray(x, dtype=float)
        threshold = self.threshold

        y = numpy.where(x > threshold, 1.0,
                        numpy.where(x < -threshold, 0.0, self._a * x + 0.5))
        return _as_output(y)

    def output_prime(self, x):
        x = numpy.asarray(x, dtype=float)
        threshold = self.threshold

        saturated = (x > threshold) | (x < -threshold)
        return _as_output(numpy.where(saturated, 0.0, self._a))

    def get_params(self):
        return {'a': self._a}


class Heaviside(ActivationFunction):
    """ The unit step: f(x) = 1 if x > 0 else 0

    The derivative approximates an impulse at the origin: it is the large
    sentinel :data:`HEAVISIDE_IMPULSE` for `|x| < 1e-4` and 0 elsewhere.
    """
    name = 'heaviside'

    def output(self, x):
        x = numpy.asarray(x, dtype=float)
        return _as_output(numpy.where(x > 0, 1.0, 0.0))

    def output_prime(self, x):
        x = numpy.asarray(x, dtype=float)
        near_origin = numpy.abs(x) < HEAVISIDE_IMPULSE_WIDTH
        return _as_output(numpy.where(near_origin, HEAVISIDE_IMPULSE, 0.0))


ACTIVATION_FUNCTIONS = {
    Sigmoid.name: Sigmoid,
    Linear.name: Linear,
    Heaviside.name: Heaviside,
}


def get_activation_function(activation, **params):
    """ Resolve an activation function selection

    Parameters
    ----------
    activation: ActivationFunction, str, or None
        An instance is returned as-is (so it is shared by reference). A
        name from :data:`ACTIVATION_FUNCTIONS` creates a new instance with
        keyword arguments `params`. None means no activation function (the
        identity).

    Returns
    -------
    activation: ActivationFunction or None

    """
    if activation is None or isinstance(activation, ActivationFunction):
        if params:
            msg = "Parameters {} given without an activation function name"
            raise ValueError(msg.format(sorted(params)))
        return activation

    if isinstance(activation, str):
        try:
            cls = ACTIVATION_FUNCTIONS[activation.lower()]
        except KeyError:
            msg = "Unknown activation function `{}` (expected one of {})"
            raise ValueError(
                msg.format(activation, sorted(ACTIVATION_FUNCTIONS)))
        return cls(**params)

    msg = ("`activation` should be an ActivationFunction, a name, "
           "or None, but was {}")
    raise TypeError(msg.format(type(activation)))
