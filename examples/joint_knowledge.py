"""
Proof of knowledge of two discrete logarithms jointly:
PK{ (r, y): P = r * g3 & Q = r * g1 + y * g2 }

This is how each party shows its position commitments are well formed.
"""

from zksmp.consts import DEFAULT_GROUP
from zksmp.primitives import JointKnowledge
from zksmp.utils.debug import SigmaProtocol

group = DEFAULT_GROUP

g1 = group.generator()
g2 = group.random_exponent() * g1
g3 = group.random_exponent() * g1

r = group.random_exponent()
y = group.random_exponent()
p = r * g3
q = r * g1 + y * g2

stmt = JointKnowledge(p, q, g3, g1, g2)
nizk = stmt.generate(5, r, y)
assert stmt.verify(nizk, 5)

# Interactive variant.
prover = stmt.get_prover({stmt.r: r, stmt.y: y})
verifier = stmt.get_verifier()
assert SigmaProtocol(verifier, prover).verify()
