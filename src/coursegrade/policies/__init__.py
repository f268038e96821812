from .attempts import take_best, best_attempt
from .exceptions import make_exceptions, Replace, Excuse

__all__ = [
    "take_best",
    "best_attempt",
    "make_exceptions",
    "Replace",
    "Excuse",
]
