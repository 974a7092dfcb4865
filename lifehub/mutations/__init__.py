"""Store mutation package."""

from lifehub.mutations.mutator import Clock, Mutator

__all__ = ["Clock", "Mutator"]
