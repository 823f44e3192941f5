"""Pytest configuration for the cryptonum test suite."""

import random
import sys
from pathlib import Path

import pytest

# Add the project root to path for cryptonum imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cryptonum.config import LimbOrder  # noqa: E402
from cryptonum.limb import LIMBS, Limb  # noqa: E402

DEFAULT_ROUNDS = 2_000


def pytest_addoption(parser):
    """Add --rounds option."""
    parser.addoption(
        "--rounds",
        action="store",
        type=int,
        default=DEFAULT_ROUNDS,
        help="Random cases per property test",
    )


@pytest.fixture
def rounds(request) -> int:
    return request.config.getoption("--rounds")


@pytest.fixture(params=list(LIMBS.values()), ids=list(LIMBS))
def limb(request) -> Limb:
    return request.param


@pytest.fixture(params=list(LimbOrder), ids=[o.value for o in LimbOrder])
def order(request) -> LimbOrder:
    return request.param


def weighted_limb(rng: random.Random, limb: Limb) -> int:
    """Random limb value biased toward 0, 1, all-ones and single-bit patterns."""
    pick = rng.randrange(8)
    if pick == 0:
        return 0
    if pick == 1:
        return 1
    if pick == 2:
        return limb.mask
    if pick == 3:
        return 1 << rng.randrange(limb.bits)
    if pick == 4:
        return limb.mask ^ (1 << rng.randrange(limb.bits))
    return rng.getrandbits(limb.bits)


def weighted_array(rng: random.Random, limb: Limb, n: int) -> list[int]:
    """Random limb array; sometimes with a run of zero limbs at the top."""
    array = [weighted_limb(rng, limb) for _ in range(n)]
    if rng.randrange(4) == 0:
        top = rng.randrange(n + 1)
        for j in range(top, n):
            array[j] = 0
    return array
