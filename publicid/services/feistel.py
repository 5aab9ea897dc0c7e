"""Keyed Feistel permutation over power-of-two domains.

The round function is HMAC-SHA256 over ``key:round:right`` keyed with the
secret itself, truncated to the half width. With equal halves the network is
a bijection on [0, 2^bits) for any round function.
"""
import hashlib
import hmac

MIN_BITS = 2
MAX_BITS = 62


def round_count(bits: int) -> int:
    """Smaller domains are easier to enumerate, so they get more mixing."""
    if bits <= 10:
        return 12
    if bits <= 16:
        return 10
    if bits <= 24:
        return 8
    return 6


def _round_function(key: bytes, round_index: int, right: int, half_mask: int) -> int:
    data = key + b":" + str(round_index).encode() + b":" + str(right).encode()
    digest = hmac.new(key, data, hashlib.sha256).digest()
    return int.from_bytes(digest[:8], "big") & half_mask


def permute(x: int, key: bytes, bits: int) -> int:
    """Map `x` in [0, 2^bits) to a unique value in the same range."""
    if bits < MIN_BITS or bits > MAX_BITS:
        raise ValueError(f"bits {bits} out of range ({MIN_BITS}..{MAX_BITS})")
    domain_max = 1 << bits
    if x < 0 or x >= domain_max:
        raise ValueError(f"x {x} out of [0, {domain_max})")

    half_bits = bits // 2
    half_mask = (1 << half_bits) - 1

    left = (x >> half_bits) & half_mask
    right = x & half_mask

    for i in range(round_count(bits)):
        f = _round_function(key, i, right, half_mask)
        left, right = right, (left ^ f) & half_mask

    return (left << half_bits) | right
