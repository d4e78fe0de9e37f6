"""encoding package.

This package maps integer messages to points of an elliptic curve and back.

Modules:
    - message_encoding: Contains the Koblitz and direct-search embeddings and the EmbeddingMethod dispatch.

Usage example:
    >>> from ecc_elgamal.elliptic_curves.presets import DEMO_CURVE
    >>> from ecc_elgamal.encoding.message_encoding import embed_message, unembed_message
    >>>
    >>> embedded = embed_message(12, "koblitz", DEMO_CURVE)
    >>> unembed_message(embedded.point, "koblitz")
    12
"""
