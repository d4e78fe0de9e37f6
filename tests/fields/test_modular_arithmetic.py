import pytest

from ecc_elgamal.errors import MalformedInputError, NoInverseError
from ecc_elgamal.fields.modular_arithmetic import is_prime, mod, mod_inverse, mod_pow, mod_sqrt


@pytest.mark.parametrize(
    ("n", "p", "expected"),
    [
        (25, 11, 3),
        (-1, 11, 10),
        (-22, 11, 0),
        (0, 11, 0),
        (-1025, 1021, 1017),
        (2**130 + 5, 2**127 - 1, 13),
    ],
)
def test_mod(n, p, expected):
    assert mod(n, p) == expected


@pytest.mark.parametrize("p", [0, -11])
def test_mod_rejects_non_positive_modulus(p):
    with pytest.raises(MalformedInputError):
        mod(5, p)


@pytest.mark.parametrize(
    ("a", "m", "expected"),
    [
        (2, 11, 6),
        (3, 11, 4),
        (-1, 11, 10),
        (13, 11, 6),
        (10, 1021, 919),
        (1, 2, 1),
    ],
)
def test_mod_inverse(a, m, expected):
    inverse = mod_inverse(a, m)

    assert inverse == expected
    assert mod(a * inverse, m) == 1


@pytest.mark.parametrize(("a", "m"), [(0, 11), (22, 11), (6, 9), (5, 15)])
def test_mod_inverse_fails_when_not_coprime(a, m):
    with pytest.raises(NoInverseError):
        mod_inverse(a, m)


def test_mod_inverse_of_every_non_zero_element():
    p = 1021
    for a in range(1, p):
        assert mod(a * mod_inverse(a, p), p) == 1


@pytest.mark.parametrize(
    ("base", "exp", "m", "expected"),
    [
        (2, 10, 1000, 24),
        (3, 0, 7, 1),
        (5, 3, 11, 4),
        (-2, 3, 11, 3),
        (7, 1020, 1021, 1),
        (123456789, 65537, 2**61 - 1, pow(123456789, 65537, 2**61 - 1)),
    ],
)
def test_mod_pow(base, exp, m, expected):
    assert mod_pow(base, exp, m) == expected


def test_mod_pow_rejects_negative_exponent():
    with pytest.raises(MalformedInputError):
        mod_pow(3, -1, 11)


@pytest.mark.parametrize(
    ("a", "p", "expected"),
    [
        # p = 3 mod 4: closed form a^((p+1)/4)
        (5, 11, 4),
        (3, 11, 5),
        (4, 11, 9),
        (9, 11, 3),
        (16, 11, 4),
        (0, 11, 0),
        # p = 1 mod 4: smallest root found by the search
        (4, 13, 2),
        (3, 13, 4),
        (12, 13, 5),
    ],
)
def test_mod_sqrt(a, p, expected):
    assert mod_sqrt(a, p) == expected


@pytest.mark.parametrize(("a", "p"), [(2, 11), (6, 11), (7, 11), (8, 11), (10, 11), (2, 13), (5, 13)])
def test_mod_sqrt_of_non_residue(a, p):
    assert mod_sqrt(a, p) is None


@pytest.mark.parametrize("p", [11, 13, 1019, 1021])
def test_mod_sqrt_finds_exactly_the_residues(p):
    residues = {mod(y * y, p) for y in range(1, p)}
    for a in range(1, p):
        r = mod_sqrt(a, p)
        if a in residues:
            assert mod(r * r, p) == a
        else:
            assert r is None
    assert len(residues) == (p - 1) // 2


@pytest.mark.parametrize(
    ("n", "expected"),
    [
        (2, True),
        (3, True),
        (11, True),
        (13, True),
        (1021, True),
        (2**61 - 1, True),
        (2**127 - 1, True),
        (0, False),
        (1, False),
        (15, False),
        (561, False),
        (1023, False),
        (2**67 - 1, False),
        # Strong pseudoprime to the first twelve prime bases
        (318665857834031151167461, False),
        # Strong pseudoprime to the first thirteen prime bases
        (3317044064679887385961981, False),
        (2**89 - 1, True),
    ],
)
def test_is_prime(n, expected):
    assert is_prime(n) is expected
