"""
Socialist Millionaires Protocol state machine.

Alice (the initiator) and Bob (the responder) exchange four messages and learn whether they hold
the same secret, and nothing else::

    Alice                                   Bob
    initiate(secret, initiator) --- M1 ---> process_incoming     (asks Bob for a secret)
                                            initiate(secret, responder)
    process_incoming           <--- M2 ---
                               --- M3 ---> process_incoming      (Bob's verdict)
    process_incoming           <--- M4 ---                       (Alice's verdict)

Any malformed record, out-of-range value, failing proof or out-of-order message aborts the
attempt: the machine resets and returns an abort record for the peer along with the error. A
secret mismatch is not an error but a completed comparison with a negative verdict.

See "`Off-the-Record Messaging Protocol version 3`_", section "Socialist Millionaires' Protocol".

.. _`Off-the-Record Messaging Protocol version 3`:
    https://otr.cypherpunks.ca/Protocol-v3-4.1.1.html
"""

import abc
import enum
import logging
import threading

import attr

from zksmp.codec import (
    Abort,
    Message1,
    Message2,
    Message3,
    Message4,
    Record,
    decode_message,
)
from zksmp.consts import DEFAULT_GROUP
from zksmp.exceptions import ProofVerificationFailed, SMPError, UnexpectedPhase
from zksmp.primitives import DLEquality, DLKnowledge, JointKnowledge
from zksmp.secret import derive_secret_exponent
from zksmp.state import (
    AwaitingMessage2,
    AwaitingMessage3,
    AwaitingMessage4,
    AwaitingStart,
    PendingRequest,
)

logger = logging.getLogger(__name__)


class Progress(enum.Enum):
    IN_PROGRESS = 0
    SUCCEEDED = 1
    FAILED = -1
    ABORTED = -3
    # The peer sent something that does not follow the protocol.
    CHEATED = -2


@attr.s(frozen=True)
class Outcome:
    """
    Result of one step.

    Args:
        record (:py:class:`zksmp.codec.Record`): Record to deliver to the peer, if any.
        progress (:py:class:`Progress`): Where the attempt stands after the step.
        error (:py:class:`zksmp.exceptions.SMPError`): Why the attempt was aborted, if it was.
    """

    record = attr.ib(default=None)
    progress = attr.ib(default=Progress.IN_PROGRESS)
    error = attr.ib(default=None)

    @property
    def verified(self):
        """Verdict of the comparison, or None if this step did not render one."""
        if self.progress == Progress.SUCCEEDED:
            return True
        if self.progress == Progress.FAILED:
            return False
        return None

    @property
    def aborted(self):
        return self.progress in (Progress.ABORTED, Progress.CHEATED)


class SMPHost(metaclass=abc.ABCMeta):
    """
    Capabilities the state machine needs from the surrounding session.
    """

    @abc.abstractmethod
    def local_fingerprint(self):
        """Fingerprint (bytes) of our long-term key."""

    @abc.abstractmethod
    def remote_fingerprint(self):
        """Fingerprint (bytes) of the peer's long-term key."""

    @abc.abstractmethod
    def session_id(self):
        """Identifier (bytes) of the encrypted session."""

    @abc.abstractmethod
    def set_verified(self, verified):
        """Persist the verdict for the peer's identity."""

    def ask_for_secret(self, question):
        """
        The peer started a comparison. Override to prompt the user, showing the question if any.
        """


class SMPStateMachine:
    """
    One side of a conversation.

    Entry points are serialized with a lock, so records may be fed from several threads. Host
    callbacks run while the lock is held and must not call back into the machine.

    Args:
        host (:py:class:`SMPHost`): Session collaborator. Not owned.
        group (:py:class:`zksmp.group.ModPGroup`): Group of the protocol.
    """

    def __init__(self, host, group=DEFAULT_GROUP):
        self.host = host
        self.group = group
        self._state = AwaitingStart()
        self._lock = threading.Lock()

    @property
    def phase(self):
        return self._state.phase

    @property
    def in_progress(self):
        """Whether an attempt has started, on either side."""
        state = self._state
        return not isinstance(state, AwaitingStart) or state.request is not None

    def initiate(self, question, secret, is_initiator=True):
        """
        Supply our secret, either to start a comparison or to answer the peer's.

        Args:
            question (str): Question shown to the peer. Only for the initiator.
            secret (str or bytes): Our secret.
            is_initiator (bool): False to answer a first message already received.

        Returns:
            Outcome: With the first (initiator) or second (responder) message.
        """
        if question is not None and not is_initiator:
            raise ValueError("Only the initiator can ask a question")

        with self._lock:
            if is_initiator:
                return self._start(question, secret)
            try:
                return self._respond(secret)
            except SMPError as exc:
                logger.error("Cannot answer: {}".format(exc))
                self._reset()
                return Outcome(progress=Progress.ABORTED, error=exc)

    def process_incoming(self, record):
        """
        Handle a record received from the peer.

        Args:
            record: :py:class:`zksmp.codec.Record`, or its TLV encoding.

        Returns:
            Outcome: With the next message, if any, and the verdict once known.
        """
        with self._lock:
            try:
                if not isinstance(record, Record):
                    record = Record.from_bytes(record)
                message = decode_message(record)
                logger.debug(
                    "Handling {} in {}".format(type(message).__name__, self.phase.name)
                )
                return self._dispatch(message)
            except SMPError as exc:
                logger.error("Aborting comparison: {}".format(exc))
                self._reset()
                return Outcome(
                    record=Abort().to_record(), progress=Progress.CHEATED, error=exc
                )

    def abort(self):
        """
        Give up the current attempt, e.g. when the user cancels.

        Returns:
            Outcome: With the abort record for the peer.
        """
        with self._lock:
            logger.debug("Aborting comparison on request")
            self._reset()
            return Outcome(record=Abort().to_record(), progress=Progress.ABORTED)

    def _reset(self):
        self._state = AwaitingStart()

    def _derive_secret(self, secret):
        return derive_secret_exponent(
            secret,
            self.host.local_fingerprint(),
            self.host.remote_fingerprint(),
            self.host.session_id(),
        )

    def _expect(self, state_cls, message):
        if not isinstance(self._state, state_cls):
            raise UnexpectedPhase(
                "{} received in {}".format(type(message).__name__, self.phase.name)
            )
        return self._state

    def _check(self, stmt, proof, instance_id):
        if not stmt.verify(proof, instance_id):
            raise ProofVerificationFailed(
                "Proof {} does not verify".format(instance_id)
            )

    def _report(self, verified):
        verified = bool(verified)
        if verified:
            logger.info("Secrets matched")
        else:
            logger.info("Secrets do not match")
        self.host.set_verified(verified)
        return Progress.SUCCEEDED if verified else Progress.FAILED

    def _dispatch(self, message):
        if isinstance(message, Abort):
            self._reset()
            return Outcome(progress=Progress.ABORTED)
        if isinstance(message, Message1):
            return self._receive_message1(message)
        if isinstance(message, Message2):
            return self._receive_message2(message)
        if isinstance(message, Message3):
            return self._receive_message3(message)
        return self._receive_message4(message)

    def _start(self, question, secret):
        if self.in_progress:
            logger.warning("Discarding the comparison in progress")
        group = self.group
        g = group.generator()

        x2 = group.random_exponent()
        x3 = group.random_exponent()
        g2a = x2 * g
        g3a = x3 * g
        message = Message1(
            g2=g2a.value,
            g2_proof=DLKnowledge(g2a).generate(1, x2),
            g3=g3a.value,
            g3_proof=DLKnowledge(g3a).generate(2, x3),
            question=question,
        )

        self._state = AwaitingMessage2(x2=x2, x3=x3, secret=self._derive_secret(secret))
        return Outcome(record=message.to_record())

    def _receive_message1(self, message):
        self._expect(AwaitingStart, message)
        g2a = self.group.element(message.g2)
        g3a = self.group.element(message.g3)

        self._check(DLKnowledge(g2a), message.g2_proof, 1)
        self._check(DLKnowledge(g3a), message.g3_proof, 2)

        self._state = AwaitingStart(
            request=PendingRequest(g2a=g2a, g3a=g3a, question=message.question)
        )
        self.host.ask_for_secret(message.question)
        return Outcome()

    def _respond(self, secret):
        state = self._state
        if not isinstance(state, AwaitingStart) or state.request is None:
            raise UnexpectedPhase("No comparison to answer")
        request = state.request
        group = self.group
        g = group.generator()

        y = self._derive_secret(secret)
        x2 = group.random_exponent()
        x3 = group.random_exponent()
        g2b = x2 * g
        g3b = x3 * g

        # Combined generators.
        g2 = x2 * request.g2a
        g3 = x3 * request.g3a

        r = group.random_exponent()
        pb = r * g3
        qb = r * g + y * g2
        message = Message2(
            g2=g2b.value,
            g2_proof=DLKnowledge(g2b).generate(3, x2),
            g3=g3b.value,
            g3_proof=DLKnowledge(g3b).generate(4, x3),
            p=pb.value,
            q=qb.value,
            pq_proof=JointKnowledge(pb, qb, g3, g, g2).generate(5, r, y),
        )

        self._state = AwaitingMessage3(x3=x3, g2=g2, g3=g3, g3o=request.g3a, p=pb, q=qb)
        return Outcome(record=message.to_record())

    def _receive_message2(self, message):
        state = self._expect(AwaitingMessage2, message)
        group = self.group
        g = group.generator()
        g2b = group.element(message.g2)
        g3b = group.element(message.g3)
        pb = group.element(message.p)
        qb = group.element(message.q)

        self._check(DLKnowledge(g2b), message.g2_proof, 3)
        self._check(DLKnowledge(g3b), message.g3_proof, 4)

        g2 = state.x2 * g2b
        g3 = state.x3 * g3b
        self._check(JointKnowledge(pb, qb, g3, g, g2), message.pq_proof, 5)

        s = group.random_exponent()
        pa = s * g3
        qa = s * g + state.secret * g2
        pab = pa - pb
        qab = qa - qb
        ra = state.x3 * qab
        reply = Message3(
            p=pa.value,
            q=qa.value,
            pq_proof=JointKnowledge(pa, qa, g3, g, g2).generate(6, s, state.secret),
            r=ra.value,
            r_proof=DLEquality(state.x3 * g, g, ra, qab).generate(7, state.x3),
        )

        self._state = AwaitingMessage4(x3=state.x3, g3o=g3b, pab=pab, qab=qab)
        return Outcome(record=reply.to_record())

    def _receive_message3(self, message):
        state = self._expect(AwaitingMessage3, message)
        group = self.group
        g = group.generator()
        pa = group.element(message.p)
        qa = group.element(message.q)
        ra = group.element(message.r)

        self._check(JointKnowledge(pa, qa, state.g3, g, state.g2), message.pq_proof, 6)

        pab = pa - state.p
        qab = qa - state.q
        self._check(DLEquality(state.g3o, g, ra, qab), message.r_proof, 7)

        rb = state.x3 * qab
        reply = Message4(
            r=rb.value,
            r_proof=DLEquality(state.x3 * g, g, rb, qab).generate(8, state.x3),
        )
        rab = state.x3 * ra

        self._reset()
        progress = self._report(rab == pab)
        return Outcome(record=reply.to_record(), progress=progress)

    def _receive_message4(self, message):
        state = self._expect(AwaitingMessage4, message)
        g = self.group.generator()
        rb = self.group.element(message.r)

        self._check(DLEquality(state.g3o, g, rb, state.qab), message.r_proof, 8)

        rab = state.x3 * rb

        self._reset()
        return Outcome(progress=self._report(rab == state.pab))
