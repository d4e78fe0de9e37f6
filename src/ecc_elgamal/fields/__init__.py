"""fields package.

This package provides the prime field arithmetic on which the elliptic curve operations are built.

Modules:
    - modular_arithmetic: Canonical reduction, inversion, exponentiation and square roots modulo a prime.

Usage example:
    >>> from ecc_elgamal.fields.modular_arithmetic import mod_inverse, mod_sqrt
    >>>
    >>> mod_inverse(2, 11)
    6
    >>> mod_sqrt(5, 11)
    4
"""
