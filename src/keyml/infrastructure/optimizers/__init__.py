"""
Stateful optimizers and a name-based factory.

Importing this package registers every optimizer with the factory.
"""

from ._base import Optimizer, get_optimizer, available_optimizers
from ._sgd import SGD
from ._adam import Adam
from ._adamw import AdamW
from ._rmsprop import RMSprop
from ._adagrad import Adagrad

__all__ = [
    Optimizer.__name__,
    get_optimizer.__name__,
    available_optimizers.__name__,
    SGD.__name__,
    Adam.__name__,
    AdamW.__name__,
    RMSprop.__name__,
    Adagrad.__name__,
]
