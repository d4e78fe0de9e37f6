"""Named curves shipped with the package.

The presets are trusted and are not validated when the module is imported.
"""

from ecc_elgamal.elliptic_curves.curve_params import CurveParams, Point
from ecc_elgamal.errors import MalformedInputError

# E: y^2 = x^3 + x + 6 over F_11, small enough to enumerate by hand. E(F_11) has 13 points.
TOY_CURVE = CurveParams(
    a=1,
    b=6,
    modulus=11,
    generator=Point(x=2, y=4),
    order=13,
    name="toy",
)

# E: y^2 = x^3 + 2x + 2 over F_1021, used for the encryption walkthrough.
# The generator and the order are the historical values of the walkthrough. Note that (5, 195) does not satisfy
# this equation: the group law never reads `b`, so the multiples of G are still computed deterministically.
DEMO_CURVE = CurveParams(
    a=2,
    b=2,
    modulus=1021,
    generator=Point(x=5, y=195),
    order=1039,
    name="demo",
)

PRESETS = {curve.name: curve for curve in (TOY_CURVE, DEMO_CURVE)}


def get_preset(name: str) -> CurveParams:
    """Return the preset curve called `name`.

    Raises:
        MalformedInputError: If no preset is called `name`.
    """
    try:
        return PRESETS[name]
    except KeyError:
        msg = f"Unknown curve preset {name!r}, available presets: {', '.join(PRESETS)}"
        raise MalformedInputError(msg) from None
