"""elgamal package.

This package provides ElGamal encryption and decryption of curve points.

Modules:
    - elgamal: Contains key generation, encrypt and decrypt, and their message-level counterparts.

Usage example:
    >>> from ecc_elgamal.elgamal.elgamal import decrypt_message, encrypt_message, generate_public_key
    >>> from ecc_elgamal.elliptic_curves.presets import TOY_CURVE
    >>>
    >>> public_key = generate_public_key(7, TOY_CURVE)
    >>> ciphertext, _ = encrypt_message(2, public_key, 5, TOY_CURVE, method="koblitz", padding=2)
    >>> decrypt_message(ciphertext, 7, TOY_CURVE, method="koblitz", padding=2)
    2
"""
