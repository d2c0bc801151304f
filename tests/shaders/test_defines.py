import pytest

from shaderkit.shaders.defines import canonicalize_defines, defines_hash, split_define


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  A   B  ", "A B"),
        ("", ""),
        ("   ", ""),
        ("A", "A"),
        ("A B C", "A B C"),
        ("NUMLIGHTS=4  SHADOW", "NUMLIGHTS=4 SHADOW"),
    ],
)
def test_canonicalize_collapses_spaces(raw, expected):
    assert canonicalize_defines(raw) == expected


def test_canonicalize_is_idempotent():
    for raw in ["  A   B  ", "X", "   ", " a  b c   d "]:
        once = canonicalize_defines(raw)
        assert canonicalize_defines(once) == once


def test_canonicalize_keeps_order_and_case():
    assert canonicalize_defines("B A") == "B A"
    assert canonicalize_defines("a A") == "a A"
    # Duplicates are not removed
    assert canonicalize_defines("A  A") == "A A"


def test_canonicalize_only_touches_spaces():
    assert canonicalize_defines("A\tB") == "A\tB"


def test_defines_hash_is_stable():
    assert defines_hash("A B") == defines_hash("A B")
    assert defines_hash("A B") != defines_hash("B A")


def test_split_define():
    assert split_define("COUNT=4") == ("COUNT", "4")
    assert split_define("SKINNED") == ("SKINNED", "")
