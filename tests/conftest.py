import numpy as np
import pytest


class ScriptedRng:
    """Random source double that replays fixed answers for integers() and choice()."""

    def __init__(self, integers=(), choices=()):
        self._integers = list(integers)
        self._choices = [list(c) for c in choices]
        self.integer_calls = []
        self.choice_calls = []

    def integers(self, high):
        self.integer_calls.append(high)
        if not self._integers:
            raise AssertionError(f"unexpected integers({high}) call")
        return self._integers.pop(0)

    def choice(self, n, size=None, replace=True):
        self.choice_calls.append((n, size, replace))
        if not self._choices:
            raise AssertionError(f"unexpected choice({n}, size={size}) call")
        return np.array(self._choices.pop(0))


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def rgba_buffer(colors, alpha=255):
    """Flat RGBA bytes for a row-major list of RGB triples."""
    out = bytearray()
    for r, g, b in colors:
        out.extend((r, g, b, alpha))
    return bytes(out)


@pytest.fixture
def make_rgba_buffer():
    return rgba_buffer
