"""
Utils that can be useful for debugging.
"""

import attr

from zksmp.smp import SMPHost


class SigmaProtocol:
    """
    Interactive sigma-protocol runner, for debugging statements.

    The protocol only sends non-interactive proofs; this runs the same prover and
    verifier with a live random challenge instead.

    Args:
        verifier: Verifier object
        prover: Prover object
    """

    def __init__(self, verifier, prover):
        self.verifier = verifier
        self.prover = prover

    def verify(self, verbose=True):
        """Run the verification process."""

        # Funky names.
        victor = self.verifier
        peggy = self.prover

        commitment = peggy.internal_commit()
        challenge = victor.send_challenge(commitment)
        response = peggy.compute_response(challenge)
        result = victor.verify(response)

        if verbose:
            if result:
                print("Verified for {0}".format(victor.__class__.__name__))
            else:
                print("Not verified for {0}".format(victor.__class__.__name__))

        return result


class StaticHost(SMPHost):
    """
    Host with fixed session binding that remembers the verdict and the question.

    Args:
        local_fp (bytes): Our fingerprint.
        remote_fp (bytes): The peer's fingerprint.
        ssid (bytes): Session identifier.
    """

    def __init__(self, local_fp, remote_fp, ssid=b"\x00" * 8):
        self.local_fp = local_fp
        self.remote_fp = remote_fp
        self.ssid = ssid
        self.verified = None
        self.question = None
        self.asked = False

    def local_fingerprint(self):
        return self.local_fp

    def remote_fingerprint(self):
        return self.remote_fp

    def session_id(self):
        return self.ssid

    def set_verified(self, verified):
        self.verified = verified

    def ask_for_secret(self, question):
        self.asked = True
        self.question = question


@attr.s
class Transcript:
    """Records exchanged by a run, in order, and the last outcome of each side."""

    records = attr.ib(factory=list)
    initiator_outcome = attr.ib(default=None)
    responder_outcome = attr.ib(default=None)


class SMPExchange:
    """
    Runs a full comparison between two state machines, delivering records in memory.

    Args:
        initiator: :py:class:`zksmp.smp.SMPStateMachine` that starts.
        responder: :py:class:`zksmp.smp.SMPStateMachine` that answers.
    """

    def __init__(self, initiator, responder):
        self.initiator = initiator
        self.responder = responder

    def run(self, initiator_secret, responder_secret, question=None, verbose=False):
        """
        Run the four messages.

        Returns:
            Transcript: Records and the final outcome of each side.
        """
        # Funky names.
        alice = self.initiator
        bob = self.responder
        transcript = Transcript()

        outcome = alice.initiate(question, initiator_secret, True)
        transcript.records.append(outcome.record)
        bob.process_incoming(outcome.record)

        outcome = bob.initiate(None, responder_secret, False)
        if outcome.record is None:
            transcript.responder_outcome = outcome
            return transcript
        transcript.records.append(outcome.record)

        # Pass records back and forth until a side has nothing more to say.
        sides = [alice, bob]
        turn = 0
        record = outcome.record
        while record is not None:
            outcome = sides[turn].process_incoming(record)
            if turn == 0:
                transcript.initiator_outcome = outcome
            else:
                transcript.responder_outcome = outcome
            record = outcome.record
            if record is not None:
                transcript.records.append(record)
            turn = 1 - turn

        if verbose:
            sides = (
                ("initiator", transcript.initiator_outcome),
                ("responder", transcript.responder_outcome),
            )
            for name, side in sides:
                print("{}: {}".format(name, side.progress.name if side else None))

        return transcript
