"""
Proof of equality of discrete logarithms:
PK{ (x): y1 = x * g1 & y2 = x * g2 }

The same statement written by hand with DLRep, and with the ready-made primitive.
"""

from zksmp import Secret, DLRep
from zksmp.consts import DEFAULT_GROUP
from zksmp.primitives import DLEquality

group = DEFAULT_GROUP

g1 = group.generator()
g2 = group.random_exponent() * g1

# In practice, the secret is a big random exponent.
x = Secret(name="x", value=group.random_exponent())
y1 = x.value * g1
y2 = x.value * g2

# A conjunction sharing one secret gets one response.
stmt = DLRep(y1, x * g1) & DLRep(y2, x * g2)
nizk = stmt.prove(instance_id=7)
assert len(nizk.responses) == 1
assert stmt.verify(nizk, instance_id=7)

# The proof is bound to its instance id.
assert not stmt.verify(nizk, instance_id=8)

# The primitive builds the very same statement.
primitive = DLEquality(y1, g1, y2, g2)
assert primitive.verify(nizk, 7)
assert primitive.verify(primitive.generate(7, x.value), 7)
