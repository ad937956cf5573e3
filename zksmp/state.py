"""
Per-attempt protocol state.

Each phase is an immutable value carrying exactly what the next step needs. A transition builds a
new value and drops the old one, which is the only way Python lets us forget the exponents.
Exponents are excluded from ``repr`` so they cannot end up in logs.
"""

import enum

import attr


class Phase(enum.Enum):
    AWAITING_START = 1
    AWAITING_MESSAGE_2 = 2
    AWAITING_MESSAGE_3 = 3
    AWAITING_MESSAGE_4 = 4


@attr.s(frozen=True)
class PendingRequest:
    """Validated first message of the peer, waiting for our secret."""

    g2a = attr.ib()
    g3a = attr.ib()
    question = attr.ib(default=None)


@attr.s(frozen=True)
class AwaitingStart:
    phase = Phase.AWAITING_START

    request = attr.ib(default=None)


@attr.s(frozen=True)
class AwaitingMessage2:
    """Initiator, after sending the first message."""

    phase = Phase.AWAITING_MESSAGE_2

    x2 = attr.ib(repr=False)
    x3 = attr.ib(repr=False)
    secret = attr.ib(repr=False)


@attr.s(frozen=True)
class AwaitingMessage3:
    """Responder, after sending the second message."""

    phase = Phase.AWAITING_MESSAGE_3

    x3 = attr.ib(repr=False)
    g2 = attr.ib()
    g3 = attr.ib()
    # Peer's public value for its third-base exponent.
    g3o = attr.ib()
    p = attr.ib()
    q = attr.ib()


@attr.s(frozen=True)
class AwaitingMessage4:
    """Initiator, after sending the third message."""

    phase = Phase.AWAITING_MESSAGE_4

    x3 = attr.ib(repr=False)
    g3o = attr.ib()
    pab = attr.ib()
    qab = attr.ib()
