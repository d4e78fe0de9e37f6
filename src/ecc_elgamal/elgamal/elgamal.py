"""ElGamal encryption over an elliptic curve.

With generator G, private key d and public key Q = d * G, a message point Pm is encrypted with an ephemeral
scalar k as (C1, C2) = (k * G, Pm + k * Q). Decryption recomputes the shared secret S = d * C1 = k * Q and returns
C2 - S = Pm.

The ephemeral scalar must be fresh for every encryption: reusing it reveals the difference of the plaintexts.
Nothing in this module prevents reuse, and no operation is constant time.
"""

import secrets
from dataclasses import dataclass

from ecc_elgamal.elliptic_curves.curve_params import CurveParams, Point
from ecc_elgamal.elliptic_curves.ec_operations import point_add, point_multiply, point_negate
from ecc_elgamal.encoding.message_encoding import (
    DEFAULT_DIRECT_SEARCH_ATTEMPTS,
    DEFAULT_KOBLITZ_PADDING,
    EmbeddedMessage,
    EmbeddingMethod,
    embed_message,
    unembed_message,
)
from ecc_elgamal.errors import InvalidCiphertextError, InvalidPointError, MalformedInputError
from ecc_elgamal.util.trace import TraceSink, emit


@dataclass(frozen=True)
class Ciphertext:
    """An ElGamal ciphertext.

    Attributes:
        c1 (Point): The ephemeral public point k * G.
        c2 (Point): The masked message Pm + k * Q.
    """

    c1: Point
    c2: Point


@dataclass(frozen=True)
class KeyPair:
    """A private scalar d and the corresponding public point Q = d * G."""

    private_key: int
    public_key: Point


def _check_scalar(value: int, name: str):
    if not isinstance(value, int) or value <= 0:
        msg = f"The {name} must be a positive integer, got {value!r}"
        raise MalformedInputError(msg)


def _random_scalar(curve: CurveParams) -> int:
    if curve.order < 2:
        msg = f"Cannot draw a scalar in [1, {curve.order})"
        raise MalformedInputError(msg)
    return 1 + secrets.randbelow(curve.order - 1)


def generate_private_key(curve: CurveParams) -> int:
    """Draw a private key uniformly at random in [1, n)."""
    return _random_scalar(curve)


def generate_ephemeral_key(curve: CurveParams) -> int:
    """Draw an ephemeral scalar uniformly at random in [1, n). Use a fresh one for every encryption."""
    return _random_scalar(curve)


def generate_public_key(private_key: int, curve: CurveParams, trace: TraceSink | None = None) -> Point:
    """Compute the public key Q = d * G.

    Raises:
        MalformedInputError: If `private_key` is not a positive integer.
    """
    _check_scalar(private_key, "private key")
    emit(trace, f"Computing Q = d * G with d = {private_key}")
    public_key = point_multiply(private_key, curve.generator, curve, trace)
    emit(trace, f"Public key Q = {public_key}")
    return public_key


def generate_key_pair(
    curve: CurveParams, private_key: int | None = None, trace: TraceSink | None = None
) -> KeyPair:
    """Return the key pair of `private_key`, drawing a random private key if it is `None`."""
    if private_key is None:
        private_key = generate_private_key(curve)
    return KeyPair(private_key=private_key, public_key=generate_public_key(private_key, curve, trace))


def encrypt(
    message_point: Point,
    public_key: Point,
    ephemeral_key: int,
    curve: CurveParams,
    trace: TraceSink | None = None,
) -> Ciphertext:
    """Encrypt `message_point` for the owner of `public_key`.

    Args:
        message_point (Point): The embedded plaintext Pm.
        public_key (Point): The public key Q of the recipient.
        ephemeral_key (int): The ephemeral scalar k, fresh for every encryption.
        curve (CurveParams): The curve on which the points lie.
        trace (TraceSink | None): Sink receiving the steps of the computation. Defaults to `None`.

    Returns:
        The ciphertext (C1, C2) = (k * G, Pm + k * Q).

    Raises:
        InvalidPointError: If `message_point` is the point at infinity.
        MalformedInputError: If `ephemeral_key` is not positive, or if k * G is the point at infinity.
    """
    if message_point.infinity:
        msg = "The point at infinity cannot be encrypted"
        raise InvalidPointError(msg)
    _check_scalar(ephemeral_key, "ephemeral key")

    emit(trace, f"Ephemeral key k = {ephemeral_key}")
    emit(trace, f"Public key Q = {public_key}")
    emit(trace, f"Message point Pm = {message_point}")

    emit(trace, "Computing C1 = k * G...")
    c1 = point_multiply(ephemeral_key, curve.generator, curve)
    if c1.infinity:
        msg = f"The ephemeral key {ephemeral_key} is a multiple of the order of the generator"
        raise MalformedInputError(msg)
    emit(trace, f"C1 = {c1}")

    emit(trace, "Computing the shared secret S = k * Q...")
    shared_secret = point_multiply(ephemeral_key, public_key, curve)
    emit(trace, f"S = {shared_secret}")

    emit(trace, "Computing C2 = Pm + S...")
    c2 = point_add(message_point, shared_secret, curve)
    emit(trace, f"C2 = {c2}")

    return Ciphertext(c1=c1, c2=c2)


def decrypt(
    ciphertext: Ciphertext,
    private_key: int,
    curve: CurveParams,
    trace: TraceSink | None = None,
) -> Point:
    """Decrypt `ciphertext` with `private_key`.

    Args:
        ciphertext (Ciphertext): The ciphertext (C1, C2).
        private_key (int): The private key d of the recipient.
        curve (CurveParams): The curve on which the points lie.
        trace (TraceSink | None): Sink receiving the steps of the computation. Defaults to `None`.

    Returns:
        The message point Pm = C2 - d * C1.

    Raises:
        MalformedInputError: If `private_key` is not a positive integer.
        InvalidCiphertextError: If C1 is the point at infinity, or if the recovered point is the point at
            infinity.
    """
    _check_scalar(private_key, "private key")
    c1, c2 = ciphertext.c1, ciphertext.c2
    if c1.infinity:
        msg = "Invalid ciphertext: C1 is the point at infinity"
        raise InvalidCiphertextError(msg)

    emit(trace, f"Ciphertext: C1 = {c1}, C2 = {c2}")
    emit(trace, f"Private key d = {private_key}")

    emit(trace, "Computing S = d * C1...")
    shared_secret = point_multiply(private_key, c1, curve)
    emit(trace, f"S = {shared_secret}")

    minus_shared_secret = point_negate(shared_secret, curve)
    emit(trace, f"-S = {minus_shared_secret}")

    emit(trace, "Computing Pm = C2 + (-S)...")
    message_point = point_add(c2, minus_shared_secret, curve)
    if message_point.infinity:
        msg = "Invalid ciphertext: the recovered message point is the point at infinity"
        raise InvalidCiphertextError(msg)
    emit(trace, f"Recovered Pm = {message_point}")

    return message_point


def encrypt_message(
    message: int,
    public_key: Point,
    ephemeral_key: int,
    curve: CurveParams,
    method: EmbeddingMethod | str = EmbeddingMethod.KOBLITZ,
    padding: int = DEFAULT_KOBLITZ_PADDING,
    max_attempts: int = DEFAULT_DIRECT_SEARCH_ATTEMPTS,
    trace: TraceSink | None = None,
) -> tuple[Ciphertext, EmbeddedMessage]:
    """Embed `message` into a point with `method` and encrypt it.

    Returns:
        The ciphertext and the embedded message. With the direct search, the offset of the embedded message is
        needed to recover `message` exactly after decryption.
    """
    embedded = embed_message(message, method, curve, padding, max_attempts, trace)
    return encrypt(embedded.point, public_key, ephemeral_key, curve, trace), embedded


def decrypt_message(
    ciphertext: Ciphertext,
    private_key: int,
    curve: CurveParams,
    method: EmbeddingMethod | str = EmbeddingMethod.KOBLITZ,
    padding: int = DEFAULT_KOBLITZ_PADDING,
    offset: int = 0,
    trace: TraceSink | None = None,
) -> int:
    """Decrypt `ciphertext` and recover the integer message with the inverse of `method`."""
    message_point = decrypt(ciphertext, private_key, curve, trace)
    return unembed_message(message_point, method, padding, offset, trace)
