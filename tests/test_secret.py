import pytest

from petlib.bn import Bn

from zksmp.consts import SM_ORDER
from zksmp.secret import derive_secret_exponent


def test_known_vector():
    # SHA-256 of 01 || "alice" || "bob" || "ssid" || "xyz"; the digest is below q.
    expected = Bn.from_hex(
        "6a0497b152720c6e42940b71b63dc63cca1b89e84dc4f0ff8582793b803ee059"
    )
    assert derive_secret_exponent("xyz", b"alice", b"bob", b"ssid") == expected


def test_independent_of_role():
    a = derive_secret_exponent("xyz", b"alice", b"bob", b"ssid")
    b = derive_secret_exponent("xyz", b"bob", b"alice", b"ssid")
    assert a == b


def test_text_is_utf8():
    text = derive_secret_exponent("café", b"alice", b"bob", b"ssid")
    raw = derive_secret_exponent("café".encode("utf-8"), b"alice", b"bob", b"ssid")
    assert text == raw


@pytest.mark.parametrize(
    "args",
    [
        ("abc", b"alice", b"bob", b"ssid"),
        ("xyz", b"alice", b"mallory", b"ssid"),
        ("xyz", b"alice", b"bob", b"other"),
    ],
)
def test_bound_to_every_input(args):
    reference = derive_secret_exponent("xyz", b"alice", b"bob", b"ssid")
    assert derive_secret_exponent(*args) != reference


def test_in_range():
    value = derive_secret_exponent(b"", b"", b"", b"")
    assert 0 <= value < SM_ORDER
