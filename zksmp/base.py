"""
Common classes: non-interactive proof transcripts, challenge derivation, provers and verifiers.
"""

import abc
import struct
from hashlib import sha256

import attr
from petlib.bn import Bn

from zksmp.consts import CHALLENGE_LENGTH
from zksmp.utils import ensure_bn, get_random_num, pack_mpi


@attr.s
class NIZK:
    """
    Non-interactive zero-knowledge proof.

    Only the challenge and the responses travel: the verifier recomputes the commitment.
    """

    challenge = attr.ib()
    responses = attr.ib(converter=tuple)


def build_fiat_shamir_challenge(instance_id, *commitments):
    """Generate a Fiat-Shamir challenge.

    The challenge is :math:`SHA256(id \\| MPI(t_1) \\| ... \\| MPI(t_n))`, where the one-byte
    instance id binds the proof to its use site, so that a proof produced for one message does
    not verify for another.

    >>> from zksmp.consts import DEFAULT_GROUP
    >>> g = DEFAULT_GROUP.generator()
    >>> c = build_fiat_shamir_challenge(1, 5 * g)
    >>> isinstance(c, Bn)
    True
    >>> c == build_fiat_shamir_challenge(2, 5 * g)
    False

    Args:
        instance_id (int): Tag of the use site, between 0 and 255.
        commitments: Group elements, in statement order.
    """
    prehash = sha256(struct.pack("B", instance_id))
    for elem in commitments:
        prehash.update(pack_mpi(elem.value))
    return Bn.from_binary(prehash.digest())


class Prover(metaclass=abc.ABCMeta):
    """
    Abstract interface representing the prover of a statement.

    Args:
        stmt: The statement from which we draw the Prover.
        secret_values: The values of the secrets, keyed by secret name.
    """

    def __init__(self, stmt, secret_values):
        self.stmt = stmt
        self.secret_values = secret_values

    @abc.abstractmethod
    def internal_commit(self, randomizers_dict=None):
        """
        Draw the randomizers and return the commitments, one per clause.
        """

    @abc.abstractmethod
    def compute_response(self, challenge):
        """
        Compute the responses, one per distinct secret of the statement.
        """

    def get_nizk_proof(self, instance_id):
        """
        Construct a non-interactive proof transcript using the Fiat-Shamir heuristic.

        Args:
            instance_id (int): Tag of the use site.
        """
        commitment = self.internal_commit()
        challenge = build_fiat_shamir_challenge(instance_id, *commitment)
        responses = self.compute_response(challenge)
        return NIZK(challenge=challenge, responses=responses)


class Verifier:
    """
    Verifier of non-interactive proofs for a statement.
    """

    def __init__(self, stmt):
        self.stmt = stmt

    def check_responses(self, responses):
        """
        Responses must be exponents, one per secret of the statement.
        """
        group = self.stmt.group
        return len(responses) == len(self.stmt.secret_vars) and all(
            group.check_exponent(resp) for resp in responses
        )

    def send_challenge(self, commitment):
        """
        Store the received commitment and draw a challenge of ``CHALLENGE_LENGTH`` bits.

        Interactive verification is a debugging aid, driven by
        :py:class:`zksmp.utils.debug.SigmaProtocol`. The protocol itself only exchanges
        non-interactive proofs.
        """
        self.commitment = commitment
        self.challenge = get_random_num(bits=CHALLENGE_LENGTH)
        return self.challenge

    def verify(self, responses):
        """
        Verify the responses of an interactive sigma protocol. Debugging aid, as
        :py:meth:`send_challenge`.

        Returns:
            bool: True if the pseudo-commitment matches the stored commitment.
        """
        if not self.check_responses(responses):
            return False
        return self.commitment == self.stmt.recompute_commitment(
            self.challenge, responses
        )

    def verify_nizk(self, nizk, instance_id):
        """
        Verify a non-interactive proof.

        Recomputes the commitment from the challenge and the responses, derives a
        pseudo-challenge from it and compares both challenges.

        Args:
            nizk (:py:class:`NIZK`): Non-interactive proof.
            instance_id (int): Tag of the use site the proof is expected from.

        Return:
            bool: True if verification succeeded, False otherwise.
        """
        if ensure_bn(nizk.challenge).num_bits() > CHALLENGE_LENGTH:
            return False
        if not self.check_responses(nizk.responses):
            return False

        commitment_prime = self.stmt.recompute_commitment(
            nizk.challenge, nizk.responses
        )
        challenge_prime = build_fiat_shamir_challenge(instance_id, *commitment_prime)
        return nizk.challenge == challenge_prime
