r"""
ZK proof for representations of discrete logarithms, our basic building block.

An example of such proof is :math:`PK\{ (x_0, x_1): y = g_0^{x_0} g_1^{x_1} \}`, written
``DLRep(y, x0 * g0 + x1 * g1)`` since :py:mod:`zksmp.group` writes the group additively.
Conjunctions share one challenge and, for a secret that re-occurs, one response:

.. math::
    PK\{ (r, y): P = g_3^r \land Q = g_1^r g_2^y \}

is ``DLRep(P, r * g3) & DLRep(Q, r * g1 + y * g2)``.

Responses are computed as :math:`d = k - c x \bmod q` and checked by recomputing the
commitment :math:`\prod_j g_j^{d_j} \cdot y^c`.

See "`Proof Systems for General Statements about Discrete Logarithms`_" by Camenisch and Stadler,
1997 for the details.

.. _`Proof Systems for General Statements about Discrete Logarithms`:
    ftp://ftp.inf.ethz.ch/pub/crypto/publications/CamSta97b.pdf

"""

from zksmp.base import Prover, Verifier
from zksmp.expr import Expression
from zksmp.exceptions import IncompleteValuesError, InvalidExpression
from zksmp.utils import ensure_bn


class DLRep:
    r"""
    Proof statement for a discrete-logarithm representation proof.

    Supports conjunctions of clauses of the following form:

    .. math::
        PK\{ (x_0, x_1, ..., x_n): Y = G_0^{x_0} G_1^{x_1} ... G_n^{x_n} \}

    Example usage for :math:`PK\{x: Y = g^x \}`:

    >>> from zksmp.consts import DEFAULT_GROUP
    >>> from zksmp.expr import Secret
    >>> x = Secret(name="x")
    >>> g = DEFAULT_GROUP.generator()
    >>> y = 42 * g
    >>> stmt = DLRep(y, x * g)
    >>> nizk = stmt.prove({x: 42}, instance_id=1)
    >>> stmt.verify(nizk, instance_id=1)
    True
    >>> stmt.verify(nizk, instance_id=2)
    False

    Args:
        lhs: "Left-hand side." Value of :math:`Y`.
        expr (:py:class:`zksmp.expr.Expression`): Proof statement.
            For example: ``Secret("x") * g`` represents :math:`PK\{ x: Y = g^x \}`.
    """

    verifier_cls = Verifier

    def __init__(self, lhs, expr):
        if not isinstance(expr, Expression):
            raise TypeError("Expected an Expression. Got: {}".format(expr))
        self.clauses = [(lhs, expr)]
        self._check_groups()

    def __and__(self, other):
        """
        Make a conjunction of two statements. The result is flat: one challenge covers all the
        clauses.
        """
        stmt = DLRep.__new__(DLRep)
        stmt.clauses = self.clauses + other.clauses
        stmt._check_groups()
        return stmt

    def _check_groups(self):
        test_group = self.clauses[0][0].group
        for lhs, expr in self.clauses:
            for g in (lhs,) + expr.bases:
                if g.group != test_group:
                    raise InvalidExpression(
                        "All bases should come from the same group", g.group
                    )

    @property
    def group(self):
        return self.clauses[0][0].group

    @property
    def secret_vars(self):
        """Distinct secrets, in order of first appearance."""
        seen = []
        for _, expr in self.clauses:
            for sec in expr.secrets:
                if sec.name not in [s.name for s in seen]:
                    seen.append(sec)
        return seen

    def get_prover(self, secrets_dict=None):
        """
        Get a prover for the current proof statement.

        Args:
            secrets_dict: Optional mapping from secrets or secret names to their values. Secrets
                missing from it must carry a value.

        Raises:
            IncompleteValuesError: If the value of a secret is unknown.
        """
        by_name = {}
        for key, value in (secrets_dict or {}).items():
            by_name[getattr(key, "name", key)] = value

        secret_values = {}
        for sec in self.secret_vars:
            value = by_name.get(sec.name, sec.value)
            if value is None:
                raise IncompleteValuesError(
                    "Secret {0} does not have a value".format(sec.name)
                )
            secret_values[sec.name] = ensure_bn(value)

        return DLRepProver(self, secret_values)

    def get_verifier(self):
        return self.verifier_cls(self)

    def get_randomizers(self):
        """
        Draw one fresh randomizer per distinct secret.

        A secret that appears in several clauses gets the same randomizer everywhere, which is
        what makes its responses identical.

        Returns:
            dict: Mapping from secret names to random exponents.
        """
        return {sec.name: self.group.random_exponent() for sec in self.secret_vars}

    def recompute_commitment(self, challenge, responses):
        r"""
        Compute the pseudo-commitments :math:`\prod_j G_j^{d_j} \cdot Y^c`, one per clause.
        """
        responses_dict = {
            sec.name: resp for sec, resp in zip(self.secret_vars, responses)
        }
        commitment = []
        for lhs, expr in self.clauses:
            weights = [responses_dict[sec.name] for sec in expr.secrets]
            commitment.append(self.group.wsum(weights, expr.bases) + challenge * lhs)
        return commitment

    def prove(self, secrets_dict=None, instance_id=0):
        """
        Generate the transcript of a non-interactive proof.
        """
        return self.get_prover(secrets_dict).get_nizk_proof(instance_id)

    def verify(self, nizk, instance_id=0):
        """
        Verify a non-interactive proof.
        """
        return self.get_verifier().verify_nizk(nizk, instance_id)

    def __repr__(self):
        return " & ".join(
            "DLRep({}, {})".format(lhs, expr) for lhs, expr in self.clauses
        )


class DLRepProver(Prover):
    """The prover in a discrete logarithm representation proof."""

    def internal_commit(self, randomizers_dict=None):
        """
        Compute the commitment using the randomizers.

        Args:
            randomizers_dict: Optional mapping from secret names to random values. Every
                random value not given here will be generated at random.

        Returns:
            list: One commitment per clause, the bases raised to the corresponding randomizers.
        """
        randomizers = self.stmt.get_randomizers()
        if randomizers_dict is not None:
            randomizers.update(randomizers_dict)
        self.ks = randomizers

        group = self.stmt.group
        return [
            group.wsum([self.ks[sec.name] for sec in expr.secrets], expr.bases)
            for _, expr in self.stmt.clauses
        ]

    def compute_response(self, challenge):
        r"""
        Constructs an (ordered) list of response for each secret.

        For each secret :math:`x` and its randomizer :math:`k`, the response is
        :math:`k - c x \bmod q`, where :math:`c` is the challenge value.
        """
        order = self.stmt.group.order()
        resps = []
        for sec in self.stmt.secret_vars:
            blinded = challenge.mod_mul(self.secret_values[sec.name], order)
            resps.append(self.ks[sec.name].mod_sub(blinded, order))
        # Randomizers are single-use.
        del self.ks
        return resps
