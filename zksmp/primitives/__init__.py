from zksmp.primitives.dlrep import DLRep
from zksmp.primitives.knowledge import DLKnowledge, JointKnowledge, DLEquality
