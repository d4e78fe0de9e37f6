"""Conversion of user-supplied values into engine values.

These helpers sit at the boundary between the engine and its front ends: they accept text or configuration
files and raise `MalformedInputError` (or `InvalidPointError`) instead of letting malformed values reach the
arithmetic.
"""

import tomllib
from pathlib import Path

from ecc_elgamal.elliptic_curves.curve_params import CurveParams, Point, make_curve, validate_point
from ecc_elgamal.errors import MalformedInputError

INFINITY_LABELS = ("inf", "infinity", "o")


def parse_int(text: str, name: str, minimum: int | None = None) -> int:
    """Parse `text` as a decimal (or 0x-prefixed hexadecimal) integer.

    Args:
        text (str): The text to parse.
        name (str): The name of the value, used in error messages.
        minimum (int | None): If not `None`, the smallest accepted value. Defaults to `None`.

    Raises:
        MalformedInputError: If `text` is not an integer or is smaller than `minimum`.
    """
    try:
        digits = text.strip()
        is_hexadecimal = digits.lstrip("+-")[:2].lower() == "0x"
        value = int(digits, 16 if is_hexadecimal else 10)
    except (AttributeError, ValueError):
        msg = f"{name} must be an integer, got {text!r}"
        raise MalformedInputError(msg) from None
    if minimum is not None and value < minimum:
        msg = f"{name} must be at least {minimum}, got {value}"
        raise MalformedInputError(msg)
    return value


def parse_point(text: str, curve: CurveParams, check_on_curve: bool = True) -> Point:
    """Parse a point written as `x,y` (parentheses allowed) or `inf`.

    Args:
        text (str): The text to parse.
        curve (CurveParams): The curve the point belongs to.
        check_on_curve (bool): If `True`, check that the point satisfies the curve equation. Defaults to `True`.

    Raises:
        MalformedInputError: If `text` is not a pair of integers in [0, p).
        InvalidPointError: If `check_on_curve` is `True` and the point is not on the curve.
    """
    stripped = text.strip().strip("()").strip()
    if stripped.lower() in INFINITY_LABELS:
        return Point.at_infinity()

    coordinates = stripped.split(",")
    if len(coordinates) != 2:  # noqa: PLR2004
        msg = f"A point must be written as 'x,y' or 'inf', got {text!r}"
        raise MalformedInputError(msg)
    x, y = (parse_int(coordinate, name) for coordinate, name in zip(coordinates, ["x", "y"]))
    for value, name in ((x, "x"), (y, "y")):
        if not 0 <= value < curve.modulus:
            msg = f"{name} must be in [0, {curve.modulus}), got {value}"
            raise MalformedInputError(msg)

    point = Point(x=x, y=y)
    return validate_point(point, curve) if check_on_curve else point


def format_point(P: Point) -> str | list[int]:  # noqa: N803
    """Return `P` as `[x, y]`, or as the string `"infinity"`, for JSON output."""
    return "infinity" if P.infinity else [P.x, P.y]


def curve_from_dict(data: dict) -> CurveParams:
    """Build validated curve parameters from a mapping with keys `a`, `b`, `p`, `order`, `generator` and `name`.

    Raises:
        MalformedInputError: If a key is missing or has the wrong type, or if the curve is not valid.
        InvalidPointError: If the generator does not lie on the curve.
    """
    missing = [key for key in ("a", "b", "p", "order", "generator") if key not in data]
    if missing:
        msg = f"Missing curve parameters: {', '.join(missing)}"
        raise MalformedInputError(msg)

    for key in ("a", "b", "p", "order"):
        if not isinstance(data[key], int) or isinstance(data[key], bool):
            msg = f"Curve parameter {key} must be an integer, got {data[key]!r}"
            raise MalformedInputError(msg)
    generator = data["generator"]
    if not (isinstance(generator, list) and len(generator) == 2 and all(isinstance(c, int) for c in generator)):  # noqa: PLR2004
        msg = f"The generator must be a list of two integers, got {generator!r}"
        raise MalformedInputError(msg)

    return make_curve(
        a=data["a"],
        b=data["b"],
        modulus=data["p"],
        generator=Point(x=generator[0], y=generator[1]),
        order=data["order"],
        name=str(data.get("name", "custom")),
    )


def load_curve_file(path: Path | str) -> CurveParams:
    """Load curve parameters from the `[curve]` table of a TOML file.

    Example of file:
        [curve]
        name = "toy"
        a = 1
        b = 6
        p = 11
        order = 13
        generator = [2, 4]

    Raises:
        MalformedInputError: If the file cannot be read or parsed, or if the parameters are not valid.
        InvalidPointError: If the generator does not lie on the curve.
    """
    try:
        with Path(path).open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as err:
        msg = f"Cannot read the curve file {path}: {err}"
        raise MalformedInputError(msg) from err

    if not isinstance(config.get("curve"), dict):
        msg = f"The curve file {path} has no [curve] table"
        raise MalformedInputError(msg)
    return curve_from_dict(config["curve"])
