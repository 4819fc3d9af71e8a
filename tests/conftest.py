import io
import logging

import pytest


def make_ppm(width, height, pixels, max_value=255, magic="P6"):
    """Build a binary Netpbm image: header + raw payload bytes."""
    return f"{magic} {width} {height} {max_value}\n".encode("ascii") + bytes(pixels)


class ShortReadStream(io.RawIOBase):
    """Binary stream that hands out at most `step` bytes per read."""

    def __init__(self, data, step=1):
        self._buf = io.BytesIO(data)
        self._step = step

    def readable(self):
        return True

    def read(self, n=-1):
        if n is None or n < 0:
            n = self._step
        return self._buf.read(min(n, self._step))


class UnreadableStream(io.RawIOBase):
    """Fails the test if anything tries to read from it."""

    def readable(self):
        return True

    def read(self, n=-1):
        raise AssertionError("stream must not be read")


@pytest.fixture
def sample_ppm():
    # 2x1 image: (10, 20, 30) and (200, 100, 50)
    return make_ppm(2, 1, [10, 20, 30, 200, 100, 50])


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop the handler main() installs so each test starts from a clean logger."""
    yield
    pkg = logging.getLogger("ppm_tone")
    for h in list(pkg.handlers):
        if getattr(h, "_ppm_tone_cli", False):
            pkg.removeHandler(h)
    pkg.setLevel(logging.NOTSET)
