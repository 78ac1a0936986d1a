from .action import IReversibleAction
from .endpoint import IEndpoint

__all__ = [
    "IEndpoint",
    "IReversibleAction",
]
