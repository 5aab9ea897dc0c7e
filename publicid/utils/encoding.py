"""Fixed-length, variable-base encoding over profanity-safe alphabets.

All alphabets drop vowels and the look-alike digits 0 and 1 so generated
ids can't spell words and survive being read aloud or retyped.
"""
from typing import Dict

from publicid.core.errors import EncodingOverflow, InvalidAlphabet, InvalidLength

MIN_LENGTH = 1
MAX_LENGTH = 12

LOWER = "23456789bcdfghjklmnpqrstvwxyz"
UPPER = "23456789BCDFGHJKLMNPQRSTVWXYZ"
BOTH = LOWER + UPPER[8:]

ALPHABETS: Dict[str, str] = {
    "lower": LOWER,
    "upper": UPPER,
    "both": BOTH,
}


def get_alphabet(alphabet_type: str) -> str:
    try:
        return ALPHABETS[alphabet_type]
    except KeyError:
        raise InvalidAlphabet(
            f"unsupported alphabet type {alphabet_type!r}. Use 'lower', 'upper', or 'both'"
        ) from None


def validate_length(length: int) -> int:
    if length < MIN_LENGTH or length > MAX_LENGTH:
        raise InvalidLength(
            f"length {length} not supported (must be {MIN_LENGTH}..{MAX_LENGTH})"
        )
    return length


def validate_alphabet(alphabet: str) -> int:
    """Return the base of `alphabet`, rejecting short or repetitive ones."""
    base = len(alphabet)
    if base < 2:
        raise InvalidAlphabet("alphabet must have at least 2 characters")
    if len(set(alphabet)) != base:
        raise InvalidAlphabet("alphabet characters must be unique")
    return base


def encode_fixed(n: int, length: int, alphabet: str) -> str:
    """Encode `n` as exactly `length` digits of `alphabet`, most significant first."""
    validate_length(length)
    base = validate_alphabet(alphabet)
    if n < 0:
        raise EncodingOverflow(f"number {n} is negative")

    out = []
    v = n
    for _ in range(length):
        v, digit = divmod(v, base)
        out.append(alphabet[digit])

    if v != 0:
        raise EncodingOverflow(
            f"number {n} does not fit into {length} base-{base} digits"
        )
    return ''.join(reversed(out))


def decode_fixed(s: str, alphabet: str) -> int:
    """Inverse of encode_fixed."""
    validate_length(len(s))
    base = validate_alphabet(alphabet)
    n = 0
    for ch in s:
        digit = alphabet.find(ch)
        if digit < 0:
            raise InvalidAlphabet(f"character {ch!r} is not in the alphabet")
        n = n * base + digit
    return n
