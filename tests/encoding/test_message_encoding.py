from dataclasses import dataclass

import pytest

from ecc_elgamal.elliptic_curves.curve_params import Point, is_on_curve
from ecc_elgamal.elliptic_curves.presets import DEMO_CURVE, TOY_CURVE
from ecc_elgamal.encoding.message_encoding import (
    DEFAULT_KOBLITZ_PADDING,
    EmbeddedMessage,
    EmbeddingMethod,
    embed_message,
    embed_message_direct,
    embed_message_koblitz,
    is_valid_x,
    unembed_message,
    unembed_message_direct,
    unembed_message_koblitz,
)
from ecc_elgamal.errors import EmbeddingExhaustedError, InvalidPointError, MalformedInputError, NoSquareRootError
from ecc_elgamal.util.trace import TraceRecorder


@dataclass
class Toy:
    curve = TOY_CURVE
    filename = "toy_encoding"
    test_data = {
        "test_koblitz": [
            {"message": 1, "padding": 2, "expected": Point(2, 4)},
            {"message": 2, "padding": 2, "expected": Point(5, 9)},
            {"message": 3, "padding": 2, "expected": Point(7, 9)},
            {"message": 4, "padding": 2, "expected": Point(8, 3)},
            {"message": 5, "padding": 2, "expected": Point(10, 9)},
            {"message": 0, "padding": 20, "expected": Point(2, 4)},
        ],
        "test_koblitz_exhausted": [
            # x = 0 and x = 1 are not valid x-coordinates
            {"message": 0, "padding": 2},
            # x = 12 is outside F_11
            {"message": 6, "padding": 2},
            {"message": 1, "padding": 20},
        ],
        "test_direct": [
            {"message": 0, "expected": Point(2, 4), "offset": 2},
            {"message": 2, "expected": Point(2, 4), "offset": 0},
            {"message": 4, "expected": Point(5, 9), "offset": 1},
            {"message": 6, "expected": Point(7, 9), "offset": 1},
            {"message": 9, "expected": Point(10, 9), "offset": 1},
        ],
    }


def generate_test_cases(test_name):
    configurations = [Toy]
    return [
        (config, *case.values())
        for config in configurations
        if test_name in config.test_data
        for case in config.test_data[test_name]
    ]


@pytest.mark.parametrize(("config", "message", "padding", "expected"), generate_test_cases("test_koblitz"))
def test_koblitz(config, message, padding, expected, save_trace):
    trace = TraceRecorder()

    point = embed_message_koblitz(message, config.curve, padding, trace)
    assert point == expected
    assert is_on_curve(point, config.curve)
    assert unembed_message_koblitz(point, padding) == message
    save_trace(trace, config.filename)


@pytest.mark.parametrize(("config", "message", "padding"), generate_test_cases("test_koblitz_exhausted"))
def test_koblitz_exhausted(config, message, padding):
    with pytest.raises(EmbeddingExhaustedError) as excinfo:
        embed_message_koblitz(message, config.curve, padding)
    assert isinstance(excinfo.value, NoSquareRootError)


@pytest.mark.parametrize(("config", "message", "expected", "offset"), generate_test_cases("test_direct"))
def test_direct(config, message, expected, offset, save_trace):
    trace = TraceRecorder()

    embedded = embed_message_direct(message, config.curve, trace=trace)
    assert embedded == EmbeddedMessage(point=expected, offset=offset)
    assert unembed_message_direct(embedded.point, embedded.offset) == message
    # Without the offset only the x-coordinate is recovered
    assert unembed_message_direct(embedded.point) == expected.x
    save_trace(trace, config.filename)


def test_koblitz_trace():
    trace = TraceRecorder()
    embed_message_koblitz(2, TOY_CURVE, 2, trace)

    assert trace == [
        "Koblitz embedding (K = 2): trying x = 2 * 2 + j",
        "j = 0: x = 4 is not a valid x-coordinate",
        "j = 1: found Pm = (5, 9)",
        "Check: 9^2 = 5^3 + 1*5 + 6 (mod 11)",
    ]


def test_direct_search_exhausted():
    # x = 11 is outside F_11
    with pytest.raises(EmbeddingExhaustedError):
        embed_message_direct(11, TOY_CURVE)
    # x = 4 is not a valid x-coordinate and only one attempt is allowed
    with pytest.raises(EmbeddingExhaustedError):
        embed_message_direct(4, TOY_CURVE, max_attempts=1)


def test_koblitz_round_trip_on_demo_curve():
    recovered = []
    for message in range(60):
        try:
            point = embed_message_koblitz(message, DEMO_CURVE)
        except EmbeddingExhaustedError:
            continue
        assert is_on_curve(point, DEMO_CURVE)
        assert point.x // DEFAULT_KOBLITZ_PADDING == message
        assert unembed_message_koblitz(point) == message
        recovered.append(message)

    assert recovered
    assert max(recovered) * DEFAULT_KOBLITZ_PADDING < DEMO_CURVE.modulus


def test_is_valid_x():
    assert is_valid_x(2, TOY_CURVE) == 4
    assert is_valid_x(0, TOY_CURVE) is None


@pytest.mark.parametrize(
    ("function", "kwargs"),
    [
        (embed_message_koblitz, {"message": -1, "curve": TOY_CURVE}),
        (embed_message_koblitz, {"message": 1, "curve": TOY_CURVE, "padding": 0}),
        (embed_message_direct, {"message": -5, "curve": TOY_CURVE}),
        (embed_message_direct, {"message": 1, "curve": TOY_CURVE, "max_attempts": 0}),
        (unembed_message_koblitz, {"P": Point(5, 9), "padding": -2}),
        (unembed_message_direct, {"P": Point(5, 9), "offset": -1}),
        (embed_message, {"message": 1, "method": "elgamal", "curve": TOY_CURVE}),
        (unembed_message, {"P": Point(5, 9), "method": "unknown"}),
    ],
)
def test_malformed_inputs(function, kwargs):
    with pytest.raises(MalformedInputError):
        function(**kwargs)


@pytest.mark.parametrize("function", [unembed_message_koblitz, unembed_message_direct])
def test_unembedding_infinity(function):
    with pytest.raises(InvalidPointError):
        function(Point.at_infinity())


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        (EmbeddingMethod.KOBLITZ, EmbeddedMessage(point=Point(5, 9), offset=1)),
        ("koblitz", EmbeddedMessage(point=Point(5, 9), offset=1)),
        (EmbeddingMethod.DIRECT, EmbeddedMessage(point=Point(2, 4), offset=0)),
        ("direct", EmbeddedMessage(point=Point(2, 4), offset=0)),
    ],
)
def test_embedding_dispatch(method, expected):
    embedded = embed_message(2, method, TOY_CURVE, padding=2)

    assert embedded == expected
    assert unembed_message(embedded.point, method, padding=2, offset=embedded.offset) == 2
