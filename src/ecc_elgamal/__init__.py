"""ecc_elgamal: elliptic curve arithmetic and ElGamal encryption over prime fields.

The `ecc_elgamal` package implements the group law of short Weierstrass curves y^2 = x^3 + a*x + b over F_p in
affine coordinates, the embedding of integer messages into curve points, and ElGamal encryption on top of them.
Every operation can report its intermediate values as human-readable trace lines, so that the computations can be
followed step by step. The arithmetic is meant for teaching: it is neither constant time nor side-channel
resistant.

Usage example:
    Encrypt and decrypt a message on the toy curve y^2 = x^3 + x + 6 over F_11:

    >>> from ecc_elgamal.elgamal.elgamal import decrypt, encrypt, generate_public_key
    >>> from ecc_elgamal.elliptic_curves.presets import TOY_CURVE
    >>> from ecc_elgamal.encoding.message_encoding import embed_message_koblitz
    >>> from ecc_elgamal.util.trace import TraceRecorder
    >>>
    >>> public_key = generate_public_key(3, TOY_CURVE)
    >>> message_point = embed_message_koblitz(4, TOY_CURVE, padding=2)
    >>> trace = TraceRecorder()
    >>> ciphertext = encrypt(message_point, public_key, 6, TOY_CURVE, trace)
    >>> decrypt(ciphertext, 3, TOY_CURVE) == message_point
    True
"""
