"""Agents built on the kernel."""

from .dispatch import DispatchAgent, DispatchConfig, DispatchPolicy, DispatchResult, DispatchState

__all__ = [
    "DispatchAgent",
    "DispatchConfig",
    "DispatchPolicy",
    "DispatchResult",
    "DispatchState",
]
