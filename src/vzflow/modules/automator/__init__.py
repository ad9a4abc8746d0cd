from .waiter import Predicate, WaitError, WaitTimeout, WaitCancelled, ConditionWaiter
from .automator import TextLike, MachineStateSource, Automator

__all__ = [
    "Predicate",
    "WaitError",
    "WaitTimeout",
    "WaitCancelled",
    "ConditionWaiter",
    "TextLike",
    "MachineStateSource",
    "Automator",
]
