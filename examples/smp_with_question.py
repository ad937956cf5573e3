"""
Alice asks a question that Bob sees before typing the answer. Bob misremembers,
so the comparison completes with a negative verdict on both sides.
"""

from zksmp import SMPStateMachine
from zksmp.utils.debug import SMPExchange, StaticHost

alice_fp = bytes.fromhex("a1" * 20)
bob_fp = bytes.fromhex("b0" * 20)
ssid = bytes.fromhex("0011223344556677")

alice_host = StaticHost(alice_fp, bob_fp, ssid)
bob_host = StaticHost(bob_fp, alice_fp, ssid)

exchange = SMPExchange(SMPStateMachine(alice_host), SMPStateMachine(bob_host))
transcript = exchange.run(
    "the bakery", "the library", question="Where did we first meet?", verbose=True
)

assert bob_host.question == "Where did we first meet?"
assert len(transcript.records) == 4

# A mismatch is a verdict, not an error.
assert transcript.initiator_outcome.error is None
assert transcript.initiator_outcome.verified is False
assert transcript.responder_outcome.verified is False
