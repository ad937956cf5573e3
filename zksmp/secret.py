"""
Derivation of the exponent that is actually compared.

The user's secret is never used directly: it is hashed together with both identity fingerprints
and the session identifier, so that a match also proves both parties are talking to each other
in this very session.
"""

from hashlib import sha256

from petlib.bn import Bn

from zksmp.consts import SECRET_VERSION, SM_ORDER


def derive_secret_exponent(secret, local_fingerprint, remote_fingerprint, session_id):
    """
    Compute :math:`SHA256(1 \\| fp_{min} \\| fp_{max} \\| ssid \\| secret) \\bmod q`.

    Fingerprints are taken in sorted order rather than local-then-remote, so that both sides
    derive the same exponent for the same secret.

    >>> a = derive_secret_exponent("xyz", b"alice", b"bob", b"ssid")
    >>> a == derive_secret_exponent(b"xyz", b"bob", b"alice", b"ssid")
    True
    >>> a == derive_secret_exponent("abc", b"alice", b"bob", b"ssid")
    False

    Args:
        secret (str or bytes): Shared secret; text is UTF-8 encoded.
        local_fingerprint (bytes): Fingerprint of our long-term key.
        remote_fingerprint (bytes): Fingerprint of the peer's long-term key.
        session_id (bytes): Identifier of the encrypted session.

    Returns:
        Bn: Exponent in :math:`[0, q-1]`.
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    first, second = sorted([bytes(local_fingerprint), bytes(remote_fingerprint)])
    digest = sha256(
        SECRET_VERSION + first + second + bytes(session_id) + secret
    ).digest()
    return Bn.from_binary(digest) % SM_ORDER
