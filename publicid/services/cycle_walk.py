import logging

from publicid.services.feistel import permute

logger = logging.getLogger(__name__)


def sample(x: int, key: bytes, bits: int, capacity: int) -> int:
    """Restrict `permute` to a bijection on [0, capacity) by cycle walking.

    Each walk follows the permutation's cycle through x until it re-enters
    [0, capacity). Expected number of permutations is 2^bits / capacity.
    """
    if capacity < 1 or capacity > (1 << bits):
        raise ValueError(f"capacity {capacity} out of (0, 2^{bits}]")
    if x < 0 or x >= capacity:
        raise ValueError(f"x {x} out of [0, {capacity})")

    y = permute(x, key, bits)
    steps = 1
    while y >= capacity:
        y = permute(y, key, bits)
        steps += 1

    logger.debug("Cycle walk for x=%s settled after %s permutations", x, steps)
    return y
