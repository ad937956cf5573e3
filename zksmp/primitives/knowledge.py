r"""
The three proofs exchanged by the Socialist Millionaires Protocol.

Each is a fixed-shape :py:class:`zksmp.primitives.dlrep.DLRep` statement with a ``generate``
method taking the secret exponents in statement order:

.. math::
    PK\{ (x): y = g^x \}

.. math::
    PK\{ (r, y): P = g_3^r \land Q = g_1^r g_2^y \}

.. math::
    PK\{ (x): y_1 = g_1^x \land y_2 = g_2^x \}

"""

from zksmp.expr import Secret
from zksmp.primitives.dlrep import DLRep


class DLKnowledge(DLRep):
    r"""
    Proof of knowledge of one discrete logarithm, :math:`PK\{ (x): y = g^x \}`.

    >>> from zksmp.consts import DEFAULT_GROUP
    >>> g = DEFAULT_GROUP.generator()
    >>> stmt = DLKnowledge(5 * g)
    >>> stmt.verify(stmt.generate(1, 5), 1)
    True

    Args:
        lhs: Public value :math:`y`.
        base: Base :math:`g`, the group generator by default.
    """

    def __init__(self, lhs, base=None):
        if base is None:
            base = lhs.group.generator()
        self.x = Secret(name="x")
        super().__init__(lhs, self.x * base)

    def generate(self, instance_id, x):
        return self.prove({self.x: x}, instance_id)


class JointKnowledge(DLRep):
    r"""
    Proof of knowledge of two discrete logarithms jointly.

    Proves that a pair of position commitments :math:`P = g_3^r` and :math:`Q = g_1^r g_2^y` was
    built from one blinding exponent :math:`r` and some exponent :math:`y`, without revealing
    either. One challenge covers both commitments and there is one response per exponent.

    Args:
        p: Commitment :math:`P`.
        q: Commitment :math:`Q`.
        g3: Base of :math:`P`.
        g1: Base carrying the blinding exponent in :math:`Q`.
        g2: Base carrying :math:`y` in :math:`Q`.
    """

    def __init__(self, p, q, g3, g1, g2):
        self.r = Secret(name="r")
        self.y = Secret(name="y")
        super().__init__(p, self.r * g3)
        self.clauses.append((q, self.r * g1 + self.y * g2))
        self._check_groups()

    def generate(self, instance_id, r, y):
        return self.prove({self.r: r, self.y: y}, instance_id)


class DLEquality(DLRep):
    r"""
    Proof of equality of discrete logarithms across two bases,
    :math:`PK\{ (x): y_1 = g_1^x \land y_2 = g_2^x \}`.

    >>> from zksmp.consts import DEFAULT_GROUP
    >>> g = DEFAULT_GROUP.generator()
    >>> h = 11 * g
    >>> stmt = DLEquality(3 * g, g, 3 * h, h)
    >>> stmt.verify(stmt.generate(7, 3), 7)
    True
    >>> DLEquality(3 * g, g, 4 * h, h).verify(stmt.generate(7, 3), 7)
    False

    Args:
        y1: Public value over the first base.
        g1: First base.
        y2: Public value over the second base.
        g2: Second base.
    """

    def __init__(self, y1, g1, y2, g2):
        self.x = Secret(name="x")
        super().__init__(y1, self.x * g1)
        self.clauses.append((y2, self.x * g2))
        self._check_groups()

    def generate(self, instance_id, x):
        return self.prove({self.x: x}, instance_id)
