from dataclasses import dataclass
from typing import Tuple
import logging

from publicid.core.errors import DomainTooLarge
from publicid.services.feistel import round_count
from publicid.utils.encoding import get_alphabet, validate_length

logger = logging.getLogger(__name__)

# Below 2^16 an attacker can enumerate the whole domain
DEFAULT_MIN_DOMAIN_BITS = 16
MAX_DOMAIN_BITS = 62


@dataclass(frozen=True)
class BandInfo:
    length: int
    alphabet_type: str
    base: int
    min_idx: int
    capacity: int
    bits: int
    rounds: int
    expected_evaluations: float


def size_band(length: int, base: int) -> Tuple[int, int]:
    """Return (min_idx, capacity) of the ids that encode to exactly `length` digits."""
    min_idx = base ** (length - 1)
    capacity = base ** length - min_idx
    return min_idx, capacity


def size_domain(capacity: int, min_bits: int = DEFAULT_MIN_DOMAIN_BITS) -> int:
    """Smallest even bit width >= min_bits whose power of two covers `capacity`."""
    if capacity < 1:
        raise ValueError(f"capacity must be positive, got {capacity}")

    bits = 0
    domain_max = 1
    while domain_max < capacity:
        domain_max *= 2
        bits += 1

    if bits < min_bits:
        bits = min_bits

    # Feistel halves must be the same width
    if bits % 2 == 1:
        bits += 1

    if bits > MAX_DOMAIN_BITS:
        logger.warning("Rejected band: capacity %s needs %s bits", capacity, bits)
        raise DomainTooLarge(
            f"capacity {capacity} needs {bits} bits (max {MAX_DOMAIN_BITS})"
        )
    return bits


def describe_band(length: int, alphabet_type: str,
                  min_bits: int = DEFAULT_MIN_DOMAIN_BITS) -> BandInfo:
    validate_length(length)
    base = len(get_alphabet(alphabet_type))
    min_idx, capacity = size_band(length, base)
    bits = size_domain(capacity, min_bits)
    return BandInfo(
        length=length,
        alphabet_type=alphabet_type,
        base=base,
        min_idx=min_idx,
        capacity=capacity,
        bits=bits,
        rounds=round_count(bits),
        expected_evaluations=(1 << bits) / capacity,
    )
