import pytest

from bip340 import Scalar


MSG_PI = bytes.fromhex(
    "243F6A8885A308D313198A2E03707344A4093822299F31D0082EFA98EC4E6C89"
)


class FixedRandom:
    """Deterministic byte source that replays queued chunks."""

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = list(chunks)
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        chunk = self._chunks.pop(0)
        assert len(chunk) == n
        return chunk


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def seckey_three() -> bytes:
    return (3).to_bytes(32, "big")


@pytest.fixture
def some_scalars():
    return [Scalar(1), Scalar(2), Scalar(7), Scalar(0xDEADBEEF), Scalar(2**255 + 19)]
