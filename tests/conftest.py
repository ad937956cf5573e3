import pytest

from petlib.bn import Bn

from zksmp.consts import DEFAULT_GROUP
from zksmp.group import ModPGroup
from zksmp.smp import SMPStateMachine
from zksmp.utils.debug import StaticHost

ALICE_FINGERPRINT = bytes.fromhex("a1" * 20)
BOB_FINGERPRINT = bytes.fromhex("b0" * 20)
SESSION_ID = bytes.fromhex("0123456789abcdef")


@pytest.fixture
def group():
    return DEFAULT_GROUP


@pytest.fixture
def small_group():
    # p = 23 = 2 * 11 + 1, and 4 generates the subgroup of order 11.
    return ModPGroup(Bn(23), Bn(11), Bn(4))


@pytest.fixture
def alice_host():
    return StaticHost(ALICE_FINGERPRINT, BOB_FINGERPRINT, SESSION_ID)


@pytest.fixture
def bob_host():
    return StaticHost(BOB_FINGERPRINT, ALICE_FINGERPRINT, SESSION_ID)


@pytest.fixture
def alice(alice_host):
    return SMPStateMachine(alice_host)


@pytest.fixture
def bob(bob_host):
    return SMPStateMachine(bob_host)
