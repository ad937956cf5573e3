__version__ = "0.1.0"
__title__ = "zksmp"
__author__ = "The zksmp developers"
__email__ = ""
__url__ = ""
__license__ = "MIT"
__description__ = "Socialist Millionaires secret comparison from zero-knowledge proofs."
__copyright__ = "2026, The zksmp developers"


from zksmp.expr import Secret
from zksmp.primitives.dlrep import DLRep
from zksmp.smp import SMPStateMachine, SMPHost, Outcome, Progress
from zksmp.state import Phase
from zksmp.codec import Record, RecordType
