"""
Two parties compare a shared secret over an in-memory channel:
Alice and Bob learn whether they typed the same secret, and nothing else.
"""

from zksmp import SMPStateMachine
from zksmp.utils.debug import StaticHost

# Fingerprints of the long-term keys and identifier of the encrypted session.
# A real messaging client takes these from its key exchange.
alice_fp = bytes.fromhex("a1" * 20)
bob_fp = bytes.fromhex("b0" * 20)
ssid = bytes.fromhex("0011223344556677")

alice_host = StaticHost(alice_fp, bob_fp, ssid)
bob_host = StaticHost(bob_fp, alice_fp, ssid)

alice = SMPStateMachine(alice_host)
bob = SMPStateMachine(bob_host)

# Alice starts. Records go over the wire as TLVs.
wire = alice.initiate(None, "correct horse").record.to_bytes()

# Bob is asked for a secret when the first message arrives, and answers.
bob.process_incoming(wire)
assert bob_host.asked
wire = bob.initiate(None, "correct horse", is_initiator=False).record.to_bytes()

wire = alice.process_incoming(wire).record.to_bytes()

# Bob learns the verdict first, and sends the last message.
outcome = bob.process_incoming(wire)
assert outcome.verified

outcome = alice.process_incoming(outcome.record.to_bytes())
assert outcome.verified
assert alice_host.verified and bob_host.verified
