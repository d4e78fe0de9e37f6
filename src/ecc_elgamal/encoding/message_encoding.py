"""Embedding of integer messages into points of the curve, and back.

Two strategies are available:
    - Koblitz: the message m is encoded as the first valid x-coordinate among m*K, m*K + 1, .., m*K + K - 1.
      The message is recovered exactly as floor(x / K).
    - Direct search: the message m is encoded as the first valid x-coordinate among m, m + 1, m + 2, ...
      The offset between x and m must be known to recover m exactly: without it, x is only an approximation of m.

Candidate x-coordinates are never reduced modulo p: the search stops at the first candidate outside [0, p).
"""

from dataclasses import dataclass
from enum import Enum

from ecc_elgamal.elliptic_curves.curve_params import CurveParams, Point, curve_rhs
from ecc_elgamal.errors import EmbeddingExhaustedError, InvalidPointError, MalformedInputError
from ecc_elgamal.fields.modular_arithmetic import mod_sqrt
from ecc_elgamal.util.trace import TraceSink, emit

DEFAULT_KOBLITZ_PADDING = 20
DEFAULT_DIRECT_SEARCH_ATTEMPTS = 100


class EmbeddingMethod(Enum):
    """Strategy used to embed a message into a point."""

    KOBLITZ = "koblitz"
    DIRECT = "direct"


@dataclass(frozen=True)
class EmbeddedMessage:
    """A message embedded into a point.

    Attributes:
        point (Point): The point encoding the message.
        offset (int): The distance between the x-coordinate of `point` and the first candidate of the search,
            i.e., `j` for the Koblitz method and `x - m` for the direct search.
    """

    point: Point
    offset: int = 0


def _check_message(message: int):
    if not isinstance(message, int) or message < 0:
        msg = f"The message must be a non-negative integer, got {message!r}"
        raise MalformedInputError(msg)


def _check_bound(value: int, name: str):
    if not isinstance(value, int) or value < 1:
        msg = f"{name} must be a positive integer, got {value!r}"
        raise MalformedInputError(msg)


def is_valid_x(x: int, curve: CurveParams) -> int | None:
    """Check whether `x` is the x-coordinate of a point of the curve.

    Returns:
        A square root `y` of x^3 + a*x + b modulo p, so that (x, y) is on the curve, or `None` if there is none.
    """
    return mod_sqrt(curve_rhs(x, curve), curve.modulus)


def embed_message_koblitz(
    message: int,
    curve: CurveParams,
    padding: int = DEFAULT_KOBLITZ_PADDING,
    trace: TraceSink | None = None,
) -> Point:
    """Embed `message` into a point with the Koblitz method.

    Args:
        message (int): The non-negative integer to embed.
        curve (CurveParams): The curve in which the message is embedded.
        padding (int): The padding factor `K`. Defaults to `DEFAULT_KOBLITZ_PADDING`.
        trace (TraceSink | None): Sink receiving the steps of the computation. Defaults to `None`.

    Returns:
        The point (x, y) with x = message * padding + j for the smallest valid j in [0, padding).

    Raises:
        MalformedInputError: If `message` is negative or `padding` is not positive.
        EmbeddingExhaustedError: If no j in [0, padding) gives a valid x-coordinate in [0, p).
    """
    _check_message(message)
    _check_bound(padding, "The padding factor")

    emit(trace, f"Koblitz embedding (K = {padding}): trying x = {message} * {padding} + j")
    for j in range(padding):
        x = message * padding + j
        if x >= curve.modulus:
            emit(trace, f"x = {x} is not smaller than p = {curve.modulus}, stopping the search")
            break
        y = is_valid_x(x, curve)
        if y is not None:
            emit(trace, f"j = {j}: found Pm = ({x}, {y})")
            emit(trace, f"Check: {y}^2 = {x}^3 + {curve.a}*{x} + {curve.b} (mod {curve.modulus})")
            return Point(x=x, y=y)
        emit(trace, f"j = {j}: x = {x} is not a valid x-coordinate")

    msg = f"Cannot embed {message} with the Koblitz method (K = {padding}) in a field of size {curve.modulus}"
    raise EmbeddingExhaustedError(msg)


def unembed_message_koblitz(
    P: Point,  # noqa: N803
    padding: int = DEFAULT_KOBLITZ_PADDING,
    trace: TraceSink | None = None,
) -> int:
    """Recover the message embedded in `P` with the Koblitz method, i.e., floor(x / padding).

    Raises:
        InvalidPointError: If `P` is the point at infinity.
        MalformedInputError: If `padding` is not positive.
    """
    if P.infinity:
        msg = "The point at infinity does not encode a message"
        raise InvalidPointError(msg)
    _check_bound(padding, "The padding factor")

    message = P.x // padding
    emit(trace, f"Unembedding (Koblitz): m = floor(x / K) = floor({P.x} / {padding}) = {message}")
    return message


def embed_message_direct(
    message: int,
    curve: CurveParams,
    max_attempts: int = DEFAULT_DIRECT_SEARCH_ATTEMPTS,
    trace: TraceSink | None = None,
) -> EmbeddedMessage:
    """Embed `message` into a point by searching x = message, message + 1, ...

    Args:
        message (int): The non-negative integer to embed.
        curve (CurveParams): The curve in which the message is embedded.
        max_attempts (int): The maximum number of candidates. Defaults to `DEFAULT_DIRECT_SEARCH_ATTEMPTS`.
        trace (TraceSink | None): Sink receiving the steps of the computation. Defaults to `None`.

    Returns:
        The embedded message: the point found and the offset x - message, which must be transmitted separately
        for the message to be recovered exactly.

    Raises:
        MalformedInputError: If `message` is negative or `max_attempts` is not positive.
        EmbeddingExhaustedError: If no candidate in [message, message + max_attempts) is a valid x-coordinate
            in [0, p).
    """
    _check_message(message)
    _check_bound(max_attempts, "The number of attempts")

    emit(trace, f"Direct search: trying x = {message} + offset")
    for offset in range(max_attempts):
        x = message + offset
        if x >= curve.modulus:
            emit(trace, f"x = {x} is not smaller than p = {curve.modulus}, stopping the search")
            break
        y = is_valid_x(x, curve)
        if y is not None:
            emit(trace, f"Found a valid x at offset {offset}: x = {x}")
            emit(trace, f"Pm = ({x}, {y})")
            return EmbeddedMessage(point=Point(x=x, y=y), offset=offset)

    msg = f"Cannot embed {message} with the direct search ({max_attempts} attempts) in a field of size {curve.modulus}"
    raise EmbeddingExhaustedError(msg)


def unembed_message_direct(
    P: Point,  # noqa: N803
    offset: int = 0,
    trace: TraceSink | None = None,
) -> int:
    """Recover the message embedded in `P` by the direct search, i.e., x - offset.

    Without the offset returned by `embed_message_direct`, the x-coordinate is only an approximation of the
    original message.

    Raises:
        InvalidPointError: If `P` is the point at infinity.
        MalformedInputError: If `offset` is negative.
    """
    if P.infinity:
        msg = "The point at infinity does not encode a message"
        raise InvalidPointError(msg)
    if not isinstance(offset, int) or offset < 0:
        msg = f"The offset must be a non-negative integer, got {offset!r}"
        raise MalformedInputError(msg)

    if offset == 0:
        emit(trace, f"Unembedding (direct): using x = {P.x} as the message")
        emit(trace, "Note: if an offset was used, the exact message cannot be recovered without it")
    else:
        emit(trace, f"Unembedding (direct): m = x - offset = {P.x} - {offset} = {P.x - offset}")
    return P.x - offset


def as_embedding_method(method: EmbeddingMethod | str) -> EmbeddingMethod:
    """Convert `method` to an `EmbeddingMethod`, raising `MalformedInputError` if it is unknown."""
    try:
        return EmbeddingMethod(method)
    except ValueError:
        msg = f"Unknown embedding method {method!r}, expected one of: {', '.join(m.value for m in EmbeddingMethod)}"
        raise MalformedInputError(msg) from None


def embed_message(
    message: int,
    method: EmbeddingMethod | str,
    curve: CurveParams,
    padding: int = DEFAULT_KOBLITZ_PADDING,
    max_attempts: int = DEFAULT_DIRECT_SEARCH_ATTEMPTS,
    trace: TraceSink | None = None,
) -> EmbeddedMessage:
    """Embed `message` with the strategy `method`.

    `padding` is only used by the Koblitz method and `max_attempts` only by the direct search.
    """
    match as_embedding_method(method):
        case EmbeddingMethod.KOBLITZ:
            point = embed_message_koblitz(message, curve, padding, trace)
            return EmbeddedMessage(point=point, offset=point.x - message * padding)
        case EmbeddingMethod.DIRECT:
            return embed_message_direct(message, curve, max_attempts, trace)


def unembed_message(
    P: Point,  # noqa: N803
    method: EmbeddingMethod | str,
    padding: int = DEFAULT_KOBLITZ_PADDING,
    offset: int = 0,
    trace: TraceSink | None = None,
) -> int:
    """Recover the message embedded in `P` with the strategy `method`.

    `padding` is only used by the Koblitz method and `offset` only by the direct search.
    """
    match as_embedding_method(method):
        case EmbeddingMethod.KOBLITZ:
            return unembed_message_koblitz(P, padding, trace)
        case EmbeddingMethod.DIRECT:
            return unembed_message_direct(P, offset, trace)
