""" This module provides a few simple `on_iterate` functions that can be
passed to :meth:`ffnn.learning.LearningAlgorithm.learn`
"""


def collect_errors(error_list):
    """ Collects the total error of every epoch. Errors are appended to
    :code:`error_list` and so an empty list should be provided. Usage::

        errors = []
        network.learn(inputs, outputs, on_iterate=[collect_errors(errors)])
    """

    def on_iterate(i, error):
        error_list.append(error)

    return on_iterate


def plot_error_curve(ax=None, line_kwargs=None, pause=0.0):
    """ Redraw the error history on a matplotlib axis after every epoch.
    :code:`line_kwargs` is a dictionary of keyword arguments that, if
    provided, is supplied to the `plot` function. The current axis is used
    when `ax` is None.
    """

    import matplotlib.pyplot as plt

    errors = []
    lines_for_iter = []
    kwargs = line_kwargs or {'color': 'red'}

    def on_iterate(i, error):
        axis = ax if ax is not None else plt.gca()
        errors.append(error)

        for line in lines_for_iter:
            line.remove()
        lines_for_iter.clear()

        line = axis.plot(range(1, len(errors) + 1), errors, **kwargs)[0]
        lines_for_iter.append(line)

        axis.relim()
        axis.autoscale_view()

        if pause > 0:
            plt.pause(pause)

    return on_iterate
