
from __future__ import annotations
from typing import Any


class PIOError(Exception):
    """Base class for every error raised by pigeonopt."""


class InvalidConfiguration(PIOError, ValueError):
    def __init__(self, parameter: str, value: Any, reason: str):
        self.parameter, self.value, self.reason = parameter, value, reason
        super().__init__(f"invalid {parameter}={value!r}: {reason}")


class UnknownObjective(PIOError, KeyError):
    def __init__(self, name: str, known: tuple[str, ...] = ()):
        self.name, self.known = name, known
        super().__init__(name)
    def __str__(self) -> str:
        return f"unknown objective {self.name!r} (known: {', '.join(self.known)})"


class NumericInstability(PIOError, ArithmeticError):
    def __init__(self, cost: float, position):
        self.cost, self.position = cost, position
        super().__init__(f"non-finite cost {cost!r} at position {list(position)!r}")


class EngineStateError(PIOError, RuntimeError):
    pass
