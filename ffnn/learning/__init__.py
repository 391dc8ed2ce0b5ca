# flake8: noqa

from .learning_algorithm import (
    BackPropagation,
    LearningAlgorithm,
)


LEARNING_ALGORITHMS = {
    BackPropagation.name: BackPropagation,
}
