import logging

from publicid.core.config import settings
from publicid.core.errors import BandExhausted
from publicid.services.cycle_walk import sample
from publicid.services.providers import Counter, SecretProvider
from publicid.services.sizing import size_band, size_domain
from publicid.utils.encoding import encode_fixed, get_alphabet, validate_length

logger = logging.getLogger(__name__)


class PublicIdGenerator:
    """Turns counter values into fixed-length, non-sequential public ids.

    Collision freedom rests entirely on the counter never repeating a value
    and the secret staying fixed for the namespace.
    """

    def __init__(self, secret_provider: SecretProvider, counter: Counter,
                 namespace: str = settings.PUBLIC_ID_NAMESPACE,
                 min_domain_bits: int = settings.PUBLIC_ID_MIN_DOMAIN_BITS):
        self.secret_provider = secret_provider
        self.counter = counter
        self.namespace = namespace
        self.min_domain_bits = min_domain_bits

    def generate(self, length: int = settings.PUBLIC_ID_DEFAULT_LENGTH,
                 alphabet_type: str = settings.PUBLIC_ID_DEFAULT_ALPHABET) -> str:
        validate_length(length)
        alphabet = get_alphabet(alphabet_type)

        key = self.secret_provider.get_or_create_secret(self.namespace)

        min_idx, capacity = size_band(length, len(alphabet))
        bits = size_domain(capacity, self.min_domain_bits)

        seq_val = self.counter.next()
        x = seq_val - 1
        if x >= capacity:
            logger.warning("Band exhausted for length %s (%s): seq=%s cap=%s",
                           length, alphabet_type, seq_val, capacity)
            raise BandExhausted(
                f"out of IDs for length {length}, seq={seq_val} (cap={capacity})"
            )

        y = sample(x, key, bits, capacity)
        return encode_fixed(min_idx + y, length, alphabet)


def generate_public_id(secret_provider: SecretProvider, counter: Counter,
                       length: int = settings.PUBLIC_ID_DEFAULT_LENGTH,
                       alphabet_type: str = settings.PUBLIC_ID_DEFAULT_ALPHABET) -> str:
    return PublicIdGenerator(secret_provider, counter).generate(length, alphabet_type)
