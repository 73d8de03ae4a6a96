"""Shared fixtures: scripted random sources for exact-arithmetic tests."""

import pytest


class ScriptedSource:
    """Random source that replays fixed draws.

    A single value is repeated forever; a list is consumed in order and
    raises once exhausted so tests notice unexpected extra draws.
    """

    def __init__(self, values):
        if isinstance(values, (int, float)):
            self._values = None
            self._constant = float(values)
        else:
            self._values = list(values)
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        if self._values is None:
            return self._constant
        if not self._values:
            raise AssertionError("scripted random source exhausted")
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values) if self._values is not None else 0


@pytest.fixture
def scripted():
    """Factory: ``scripted(0.0)`` or ``scripted([0.1, 0.9, ...])``."""
    return ScriptedSource
