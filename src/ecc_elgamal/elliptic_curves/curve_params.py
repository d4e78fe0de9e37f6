"""Points and parameters of short Weierstrass curves y^2 = x^3 + a*x + b over F_p."""

from dataclasses import dataclass

from ecc_elgamal.errors import InvalidPointError, MalformedInputError
from ecc_elgamal.fields.modular_arithmetic import is_prime, mod


@dataclass(frozen=True)
class Point:
    """A point of an elliptic curve in affine coordinates.

    A point is either the point at infinity, which has no coordinates, or an affine point (x, y).

    Attributes:
        x (int | None): The x-coordinate, `None` for the point at infinity.
        y (int | None): The y-coordinate, `None` for the point at infinity.
        infinity (bool): Whether the point is the point at infinity.
    """

    x: int | None = None
    y: int | None = None
    infinity: bool = False

    def __post_init__(self):
        """Check that the coordinates are consistent with `infinity`."""
        if self.infinity and (self.x is not None or self.y is not None):
            msg = f"The point at infinity has no coordinates, got x: {self.x}, y: {self.y}"
            raise InvalidPointError(msg)
        if not self.infinity and (self.x is None or self.y is None):
            msg = f"An affine point needs both coordinates, got x: {self.x}, y: {self.y}"
            raise InvalidPointError(msg)

    @classmethod
    def at_infinity(cls) -> "Point":
        """Return the point at infinity, the identity of the group law."""
        return cls(infinity=True)

    def __str__(self) -> str:
        return "infinity" if self.infinity else f"({self.x}, {self.y})"


@dataclass(frozen=True)
class CurveParams:
    """Parameters of the curve E: y^2 = x^3 + a*x + b over F_p, together with a generator.

    Attributes:
        a (int): The `a` coefficient of the curve equation, reduced modulo `modulus`.
        b (int): The `b` coefficient of the curve equation, reduced modulo `modulus`.
        modulus (int): The prime `p`, characteristic of the field F_p.
        generator (Point): The designated generator `G`.
        order (int): The (claimed) order `n` of `G`.
        name (str): A label used when displaying the curve.
    """

    a: int
    b: int
    modulus: int
    generator: Point
    order: int
    name: str = "custom"

    def __str__(self) -> str:
        return f"{self.name}: y^2 = x^3 + {self.a}x + {self.b} (mod {self.modulus}), G = {self.generator}, n = {self.order}"


def curve_rhs(x: int, curve: CurveParams) -> int:
    """Evaluate the right-hand side x^3 + a*x + b of the curve equation modulo p."""
    return mod(x**3 + curve.a * x + curve.b, curve.modulus)


def is_on_curve(P: Point, curve: CurveParams) -> bool:  # noqa: N803
    """Check whether `P` belongs to the curve.

    The point at infinity belongs to every curve. An affine point belongs to the curve if its coordinates are in
    [0, p) and satisfy y^2 = x^3 + a*x + b mod p.
    """
    if P.infinity:
        return True
    if not (0 <= P.x < curve.modulus and 0 <= P.y < curve.modulus):
        return False
    return mod(P.y * P.y, curve.modulus) == curve_rhs(P.x, curve)


def validate_point(P: Point, curve: CurveParams) -> Point:  # noqa: N803
    """Return `P` if it belongs to the curve, raise `InvalidPointError` otherwise."""
    if not is_on_curve(P, curve):
        msg = f"The point {P} does not lie on y^2 = x^3 + {curve.a}x + {curve.b} (mod {curve.modulus})"
        raise InvalidPointError(msg)
    return P


def validate_curve_params(curve: CurveParams) -> CurveParams:
    """Check that `curve` describes a non-singular curve over a prime field with a valid generator.

    Args:
        curve (CurveParams): The parameters to check.

    Returns:
        The same `curve`, so that the function can be chained.

    Raises:
        MalformedInputError: If either of the following happens:
            - `modulus` is not a prime greater than 3
            - `a` or `b` is not reduced modulo `modulus`
            - the discriminant 4a^3 + 27b^2 vanishes modulo `modulus`
            - `order` is not positive
        InvalidPointError: If the generator is the point at infinity or does not satisfy the curve equation.
    """
    p = curve.modulus
    if p <= 3 or not is_prime(p):
        msg = f"The modulus must be a prime greater than 3, got {p}"
        raise MalformedInputError(msg)
    if not (0 <= curve.a < p and 0 <= curve.b < p):
        msg = f"The coefficients must be reduced modulo {p}, got a: {curve.a}, b: {curve.b}"
        raise MalformedInputError(msg)
    if mod(4 * curve.a**3 + 27 * curve.b**2, p) == 0:
        msg = f"The curve y^2 = x^3 + {curve.a}x + {curve.b} (mod {p}) is singular"
        raise MalformedInputError(msg)
    if curve.order <= 0:
        msg = f"The order of the generator must be positive, got {curve.order}"
        raise MalformedInputError(msg)
    if curve.generator.infinity:
        msg = "The generator cannot be the point at infinity"
        raise InvalidPointError(msg)
    validate_point(curve.generator, curve)
    return curve


def make_curve(a: int, b: int, modulus: int, generator: Point, order: int, name: str = "custom") -> CurveParams:
    """Build validated curve parameters from user-supplied values.

    The coefficients `a` and `b` are reduced modulo `modulus` before validation.

    Raises:
        MalformedInputError: If the parameters do not describe a valid curve (see `validate_curve_params`).
        InvalidPointError: If the generator does not lie on the curve.
    """
    if modulus <= 0:
        msg = f"The modulus must be positive, got {modulus}"
        raise MalformedInputError(msg)
    curve = CurveParams(
        a=mod(a, modulus),
        b=mod(b, modulus),
        modulus=modulus,
        generator=generator,
        order=order,
        name=name,
    )
    return validate_curve_params(curve)
