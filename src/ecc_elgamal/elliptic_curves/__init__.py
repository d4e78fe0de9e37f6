"""elliptic_curves package.

This package provides the group law of short Weierstrass curves y^2 = x^3 + a*x + b over F_p in affine
coordinates.

Modules:
    - curve_params: Contains the Point and CurveParams types, the curve equation check and the curve validation.
    - presets: Contains the TOY_CURVE and DEMO_CURVE presets.
    - ec_operations: Contains point addition, negation and double-and-add scalar multiplication.

Usage example:
    >>> from ecc_elgamal.elliptic_curves.ec_operations import point_add, point_multiply
    >>> from ecc_elgamal.elliptic_curves.presets import TOY_CURVE
    >>>
    >>> G = TOY_CURVE.generator
    >>> point_add(G, G, TOY_CURVE) == point_multiply(2, G, TOY_CURVE)
    True
"""
