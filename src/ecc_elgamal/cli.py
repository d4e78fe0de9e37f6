"""Command line front end for the elliptic curve engine.

Every command prints its result followed by the trace of the computation, or a single JSON object with `--json`.
Errors raised by the engine are reported verbatim, together with the trace produced so far, and the command exits
with status 1.

Input points are checked against the curve equation unless `--no-point-check` is given. The generator of the
`demo` preset does not satisfy its curve equation, and neither do its multiples, so public keys and ciphertexts of
that curve are only accepted with `--no-point-check`.

Example:
    $ ecc-elgamal --curve toy add 2,4 2,4
    $ ecc-elgamal --curve demo keygen --private-key 15
    $ ecc-elgamal --curve demo --no-point-check encrypt 12 --public-key 981,659 --ephemeral-key 7
    $ ecc-elgamal --curve-file curve.toml encrypt 12 --public-key 3,6 --ephemeral-key 7
"""

import argparse
import json
import logging
import sys

from ecc_elgamal.elgamal.elgamal import (
    Ciphertext,
    decrypt,
    encrypt,
    generate_ephemeral_key,
    generate_key_pair,
)
from ecc_elgamal.elliptic_curves.curve_params import CurveParams, Point
from ecc_elgamal.elliptic_curves.ec_operations import point_add, point_multiply
from ecc_elgamal.elliptic_curves.presets import PRESETS, get_preset
from ecc_elgamal.encoding.message_encoding import (
    DEFAULT_DIRECT_SEARCH_ATTEMPTS,
    DEFAULT_KOBLITZ_PADDING,
    EmbeddingMethod,
    embed_message,
    unembed_message,
)
from ecc_elgamal.errors import EccError
from ecc_elgamal.util.input_parsing import format_point, load_curve_file, parse_int, parse_point
from ecc_elgamal.util.trace import TraceRecorder

logger = logging.getLogger(__name__)


def curve_setup(args: argparse.Namespace) -> CurveParams:
    """Map the command line curve arguments to curve parameters."""
    if args.curve_file is not None:
        return load_curve_file(args.curve_file)
    return get_preset(args.curve)


def point_argument(text: str, curve: CurveParams, args: argparse.Namespace) -> Point:
    return parse_point(text, curve, check_on_curve=not args.no_point_check)


def command_curve(args, curve, trace):
    return {
        "name": curve.name,
        "a": curve.a,
        "b": curve.b,
        "p": curve.modulus,
        "generator": curve.generator,
        "order": curve.order,
    }


def command_add(args, curve, trace):
    P = point_argument(args.P, curve, args)  # noqa: N806
    Q = point_argument(args.Q, curve, args)  # noqa: N806
    return {"result": point_add(P, Q, curve, trace)}


def command_multiply(args, curve, trace):
    k = parse_int(args.k, "k", minimum=0)
    P = curve.generator if args.P is None else point_argument(args.P, curve, args)  # noqa: N806
    return {"result": point_multiply(k, P, curve, trace)}


def command_keygen(args, curve, trace):
    private_key = None if args.private_key is None else parse_int(args.private_key, "private key", minimum=1)
    key_pair = generate_key_pair(curve, private_key, trace)
    return {"private_key": key_pair.private_key, "public_key": key_pair.public_key}


def command_embed(args, curve, trace):
    message = parse_int(args.message, "message", minimum=0)
    embedded = embed_message(message, args.method, curve, args.padding, args.max_attempts, trace)
    return {"point": embedded.point, "offset": embedded.offset}


def command_unembed(args, curve, trace):
    P = point_argument(args.P, curve, args)  # noqa: N806
    return {"message": unembed_message(P, args.method, args.padding, args.offset, trace)}


def command_encrypt(args, curve, trace):
    message = parse_int(args.message, "message", minimum=0)
    public_key = point_argument(args.public_key, curve, args)
    if args.ephemeral_key is None:
        ephemeral_key = generate_ephemeral_key(curve)
    else:
        ephemeral_key = parse_int(args.ephemeral_key, "ephemeral key", minimum=1)

    embedded = embed_message(message, args.method, curve, args.padding, args.max_attempts, trace)
    ciphertext = encrypt(embedded.point, public_key, ephemeral_key, curve, trace)
    return {
        "c1": ciphertext.c1,
        "c2": ciphertext.c2,
        "ephemeral_key": ephemeral_key,
        "offset": embedded.offset,
    }


def command_decrypt(args, curve, trace):
    ciphertext = Ciphertext(c1=point_argument(args.C1, curve, args), c2=point_argument(args.C2, curve, args))
    private_key = parse_int(args.private_key, "private key", minimum=1)
    message_point = decrypt(ciphertext, private_key, curve, trace)
    message = unembed_message(message_point, args.method, args.padding, args.offset, trace)
    return {"point": message_point, "message": message}


COMMANDS = {
    "curve": command_curve,
    "add": command_add,
    "multiply": command_multiply,
    "keygen": command_keygen,
    "embed": command_embed,
    "unembed": command_unembed,
    "encrypt": command_encrypt,
    "decrypt": command_decrypt,
}


def add_embedding_arguments(parser: argparse.ArgumentParser, with_offset: bool = False):
    parser.add_argument(
        "--method",
        type=str,
        choices=[method.value for method in EmbeddingMethod],
        default=EmbeddingMethod.KOBLITZ.value,
        help="Embedding method",
    )
    parser.add_argument("--padding", type=int, default=DEFAULT_KOBLITZ_PADDING, help="Koblitz padding factor K")
    if with_offset:
        parser.add_argument("--offset", type=int, default=0, help="Offset returned by the direct search")
    else:
        parser.add_argument(
            "--max-attempts", type=int, default=DEFAULT_DIRECT_SEARCH_ATTEMPTS, help="Direct search bound"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecc-elgamal",
        description="Elliptic curve arithmetic and ElGamal encryption over prime fields, step by step.",
    )
    parser.add_argument(
        "--curve",
        type=str,
        choices=list(PRESETS),
        default="toy",
        help="Preset curve. Points of the demo curve need --no-point-check, its generator is off the curve",
    )
    parser.add_argument("--curve-file", type=str, help="TOML file with a [curve] table", required=False)
    parser.add_argument("--json", action="store_true", help="Print the result and the trace as JSON")
    parser.add_argument(
        "--no-point-check", action="store_true", help="Do not check that input points satisfy the curve equation"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("curve", help="Print the curve parameters")

    add_parser = subparsers.add_parser("add", help="Compute P + Q")
    add_parser.add_argument("P", help="Point 'x,y' or 'inf'")
    add_parser.add_argument("Q", help="Point 'x,y' or 'inf'")

    multiply_parser = subparsers.add_parser("multiply", help="Compute k * P")
    multiply_parser.add_argument("k", help="Non-negative scalar")
    multiply_parser.add_argument("P", nargs="?", help="Point 'x,y', defaults to the generator")

    keygen_parser = subparsers.add_parser("keygen", help="Compute the public key Q = d * G")
    keygen_parser.add_argument("--private-key", help="Private key d, random if omitted")

    embed_parser = subparsers.add_parser("embed", help="Embed an integer message into a point")
    embed_parser.add_argument("message", help="Non-negative integer message")
    add_embedding_arguments(embed_parser)

    unembed_parser = subparsers.add_parser("unembed", help="Recover the message embedded into a point")
    unembed_parser.add_argument("P", help="Point 'x,y'")
    add_embedding_arguments(unembed_parser, with_offset=True)

    encrypt_parser = subparsers.add_parser("encrypt", help="Embed and encrypt an integer message")
    encrypt_parser.add_argument("message", help="Non-negative integer message")
    encrypt_parser.add_argument("--public-key", required=True, help="Public key 'x,y'")
    encrypt_parser.add_argument("--ephemeral-key", help="Ephemeral key k, random if omitted")
    add_embedding_arguments(encrypt_parser)

    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt a ciphertext and recover the message")
    decrypt_parser.add_argument("C1", help="Point 'x,y'")
    decrypt_parser.add_argument("C2", help="Point 'x,y' or 'inf'")
    decrypt_parser.add_argument("--private-key", required=True, help="Private key d")
    add_embedding_arguments(decrypt_parser, with_offset=True)

    return parser


def to_json(value):
    return format_point(value) if isinstance(value, Point) else value


def print_output(result: dict | None, trace: list[str], error: str | None, as_json: bool):
    if as_json:
        output = {"trace": list(trace)}
        if result is not None:
            output["result"] = {key: to_json(value) for key, value in result.items()}
        if error is not None:
            output["error"] = error
        print(json.dumps(output))
        return

    if result is not None:
        for key, value in result.items():
            print(f"{key}: {value}")
    if error is not None:
        print(f"error: {error}")
    if trace:
        print("trace:")
        for line in trace:
            print(f"  {line}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    trace = TraceRecorder()
    try:
        curve = curve_setup(args)
        logger.debug("Using curve %s", curve)
        result = COMMANDS[args.command](args, curve, trace)
    except EccError as err:
        logger.error("%s", err)
        print_output(None, trace, str(err), args.json)
        return 1

    print_output(result, trace, None, args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
