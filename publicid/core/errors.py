class PublicIdError(ValueError):
    """Base class for every failure raised while generating a public id."""


class InvalidLength(PublicIdError):
    pass


class InvalidAlphabet(PublicIdError):
    pass


class DomainTooLarge(PublicIdError):
    """The band needs more than 62 bits of permutation domain."""


class BandExhausted(PublicIdError):
    """Every id of the requested length has already been issued."""


class EncodingOverflow(PublicIdError):
    """A value did not fit the fixed digit count. Indicates a defect upstream."""
