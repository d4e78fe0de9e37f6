"""Exceptions raised by the elliptic curve engine.

Every failure is terminal for the request that raised it. All exceptions derive from `EccError`, itself a
`ValueError`, so that callers can catch the whole family at the boundary and report the message verbatim.
"""


class EccError(ValueError):
    """Base class of all the errors raised by `ecc_elgamal`."""


class NoInverseError(EccError):
    """The element is not invertible modulo the given modulus, i.e., gcd(a, m) != 1."""


class InvalidInverseError(NoInverseError):
    """A slope denominator was not invertible while adding two points."""


class NoSquareRootError(EccError):
    """The element is not a quadratic residue modulo the given prime."""


class EmbeddingExhaustedError(NoSquareRootError):
    """No candidate x-coordinate within the search bound lies on the curve."""


class InvalidPointError(EccError):
    """The point is malformed or does not satisfy the curve equation."""


class InvalidCiphertextError(EccError):
    """The ciphertext is degenerate and cannot be decrypted."""


class MalformedInputError(EccError):
    """The input is non-numeric, out of range, or violates a precondition."""
