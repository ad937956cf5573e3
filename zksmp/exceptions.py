"""
Common exception classes.

Subclasses of :py:class:`SMPError` abort a comparison attempt. The state machine catches them
and reports them through :py:class:`zksmp.smp.Outcome`, so they never reach the caller as
exceptions.
"""


class IncompleteValuesError(Exception):
    """Cannot evaluate an expression as not all secret values are set."""


class InvalidExpression(Exception):
    pass


class SMPError(Exception):
    """The current comparison attempt must be aborted."""


class MalformedRecord(SMPError):
    """Wrong field count or length for the declared record type."""


class InvalidGroupElement(SMPError):
    """Value received from the peer lies outside of [2, p-2]."""


class ProofVerificationFailed(SMPError):
    """A zero-knowledge proof sent by the peer does not verify."""


class UnexpectedPhase(SMPError):
    """Record type does not match the phase of the attempt."""
