"""Arithmetic operations over the elliptic curve E(F_p).

Arithmetic is performed in affine coordinates. Every function is pure: the result only depends on the arguments,
and the optional `trace` sink receives a human-readable description of the intermediate values.
"""

from ecc_elgamal.elliptic_curves.curve_params import CurveParams, Point, curve_rhs
from ecc_elgamal.errors import InvalidInverseError, MalformedInputError, NoInverseError, NoSquareRootError
from ecc_elgamal.fields.modular_arithmetic import mod, mod_inverse, mod_sqrt
from ecc_elgamal.util.trace import TraceSink, emit

MAX_ENUMERATION_MODULUS = 100_000


def _canonical(P: Point, p: int) -> Point:  # noqa: N803
    return P if P.infinity else Point(x=mod(P.x, p), y=mod(P.y, p))


def point_negate(P: Point, curve: CurveParams) -> Point:  # noqa: N803
    """Return -P = (x, -y mod p). The point at infinity is its own negation."""
    if P.infinity:
        return P
    return Point(x=mod(P.x, curve.modulus), y=mod(-P.y, curve.modulus))


def point_add(P: Point, Q: Point, curve: CurveParams, trace: TraceSink | None = None) -> Point:  # noqa: N803
    """Compute P + Q with the chord-and-tangent law.

    The slope of the line through `P` and `Q` is:
        - lambda = (3 * x_P^2 + a) / (2 * y_P) if P = Q (doubling)
        - lambda = (y_Q - y_P) / (x_Q - x_P) otherwise
    and the sum is (lambda^2 - x_P - x_Q, lambda * (x_P - x_R) - y_P). Vertical lines, i.e., Q = -P or doubling
    a point with y = 0, give the point at infinity.

    Args:
        P (Point): The first summand.
        Q (Point): The second summand.
        curve (CurveParams): The curve on which `P` and `Q` lie.
        trace (TraceSink | None): Sink receiving the steps of the computation. Defaults to `None`.

    Returns:
        The point P + Q, with coordinates in [0, p).

    Raises:
        InvalidInverseError: If the denominator of the slope is not invertible, which only happens for points not
            on the curve or for a non-prime modulus.
    """
    p, a = curve.modulus, curve.a

    if P.infinity:
        return _canonical(Q, p)
    if Q.infinity:
        return _canonical(P, p)

    x_p, y_p = mod(P.x, p), mod(P.y, p)
    x_q, y_q = mod(Q.x, p), mod(Q.y, p)

    if x_p == x_q and y_p != y_q:
        emit(trace, "P + Q = infinity (vertical line)")
        return Point.at_infinity()

    try:
        if y_p == y_q and x_p == x_q:
            if y_p == 0:
                emit(trace, "2P = infinity (vertical tangent)")
                return Point.at_infinity()
            numerator = mod(3 * x_p * x_p + a, p)
            denominator = mod_inverse(2 * y_p, p)
            gradient = mod(numerator * denominator, p)
            emit(
                trace,
                f"Doubling P: lambda = (3*{x_p}^2 + {a}) / (2*{y_p}) = {numerator} * {denominator} mod {p} = {gradient}",
            )
        else:
            numerator = mod(y_q - y_p, p)
            denominator = mod_inverse(x_q - x_p, p)
            gradient = mod(numerator * denominator, p)
            emit(
                trace,
                f"Adding P+Q: lambda = ({y_q} - {y_p}) / ({x_q} - {x_p}) = {numerator} * {denominator} mod {p} = {gradient}",
            )
    except NoInverseError as err:
        msg = f"Cannot compute the slope through {P} and {Q}: {err}"
        raise InvalidInverseError(msg) from err

    x_r = mod(gradient * gradient - x_p - x_q, p)
    y_r = mod(gradient * (x_p - x_r) - y_p, p)

    emit(trace, f"Result: ({x_r}, {y_r})")
    return Point(x=x_r, y=y_r)


def point_multiply(k: int, P: Point, curve: CurveParams, trace: TraceSink | None = None) -> Point:  # noqa: N803
    """Compute k * P with the double-and-add algorithm.

    The binary expansion of `k` is written most significant bit first and consumed from its least significant
    end: a doubling point N, initially P, is added to the result whenever the current bit is 1 and is then
    doubled for the next bit. The cost is O(log k) point operations.

    Args:
        k (int): The scalar, must be non-negative.
        P (Point): The point to multiply.
        curve (CurveParams): The curve on which `P` lies.
        trace (TraceSink | None): Sink receiving the steps of the computation. Defaults to `None`.

    Returns:
        The point k * P. If `k = 0`, the point at infinity.

    Raises:
        MalformedInputError: If `k` is negative or not an integer.
    """
    if not isinstance(k, int) or k < 0:
        msg = f"The scalar must be a non-negative integer, got {k!r}"
        raise MalformedInputError(msg)

    bits = format(k, "b")
    emit(trace, f"Scalar multiplication: k = {k} (binary: {bits})")

    result = Point.at_infinity()
    doubling_point = P
    for i, bit in enumerate(reversed(bits)):
        if bit == "1":
            emit(trace, f"Bit 2^{i} is 1: add N = {doubling_point} to the result")
            result = point_add(result, doubling_point, curve)
        if i < len(bits) - 1:
            emit(trace, "Double N for the next bit")
            doubling_point = point_add(doubling_point, doubling_point, curve)

    emit(trace, f"Result: {k} * {P} = {result}")
    return result


def point_from_x(x: int, curve: CurveParams) -> Point:
    """Return a point of the curve with x-coordinate `x mod p`.

    Raises:
        NoSquareRootError: If x^3 + a*x + b is not a square modulo p.
    """
    x = mod(x, curve.modulus)
    rhs = curve_rhs(x, curve)
    y = mod_sqrt(rhs, curve.modulus)
    if y is None:
        msg = f"{rhs} = {x}^3 + {curve.a}*{x} + {curve.b} is not a square modulo {curve.modulus}"
        raise NoSquareRootError(msg)
    return Point(x=x, y=y)


def list_points(curve: CurveParams) -> list[Point]:
    """List all the points of a small curve, sorted by coordinates and followed by the point at infinity.

    Raises:
        MalformedInputError: If the modulus exceeds `MAX_ENUMERATION_MODULUS`.
    """
    p = curve.modulus
    if p > MAX_ENUMERATION_MODULUS:
        msg = f"Cannot enumerate the points of a curve with modulus {p} > {MAX_ENUMERATION_MODULUS}"
        raise MalformedInputError(msg)

    roots = {}
    for y in range(p):
        roots.setdefault(mod(y * y, p), []).append(y)

    points = [Point(x=x, y=y) for x in range(p) for y in roots.get(curve_rhs(x, curve), [])]
    points.append(Point.at_infinity())
    return points
