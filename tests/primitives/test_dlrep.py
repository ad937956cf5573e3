import pytest

from petlib.bn import Bn

from zksmp import Secret
from zksmp.base import NIZK
from zksmp.consts import CHALLENGE_LENGTH
from zksmp.exceptions import IncompleteValuesError, InvalidExpression
from zksmp.primitives.dlrep import DLRep, DLRepProver
from zksmp.utils.debug import SigmaProtocol


def test_dlrep_interactive_1(group):
    sk, g = group.random_exponent(), group.generator()
    pk = sk * g

    x = Secret()
    p = DLRep(pk, x * g)
    prover = p.get_prover({x: sk})
    verifier = p.get_verifier()
    protocol = SigmaProtocol(verifier, prover)
    assert protocol.verify()


def test_dlrep_interactive_independent_statements(group):
    """Emulate actual workflow with independent provers and verifiers."""
    sk, g = group.random_exponent(), group.generator()
    pk = sk * g

    x = Secret(name="x")
    prover = DLRep(pk, x * g).get_prover({x: sk})

    x = Secret(name="x")
    verifier = DLRep(pk, x * g).get_verifier()

    protocol = SigmaProtocol(verifier, prover)
    assert protocol.verify()


def test_dlrep_non_interactive_1(group):
    g = group.generator()
    h = 7 * g
    expr = Secret(value=3) * g + Secret(value=4) * h
    p = DLRep(expr.eval(), expr)
    tr = p.prove()
    assert p.verify(tr)
    assert len(tr.responses) == 2


def test_dlrep_non_interactive_by_name(group):
    g = group.generator()
    x = Secret(name="x")
    p = DLRep(4 * g, x * g)
    assert p.verify(p.prove({"x": 4}))


def test_dlrep_instance_id_is_bound(group):
    g = group.generator()
    x = Secret()
    p = DLRep(4 * g, x * g)
    tr = p.prove({x: 4}, instance_id=3)
    assert p.verify(tr, instance_id=3)
    assert not p.verify(tr, instance_id=4)


def test_dlrep_wrong_secrets(group):
    g = group.generator()
    x1, x2 = Secret(), Secret()
    p = DLRep(g, x1 * (2 * g) + x2 * (5 * g))
    protocol = SigmaProtocol(p.get_verifier(), p.get_prover({x1: 10, x2: 15}))
    assert not protocol.verify()


def test_dlrep_wrong_public_element(group):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(4 * g, x * g)
    assert not p.verify(p.prove())


def test_dlrep_wrong_response(group):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(3 * g, x * g)
    tr = p.prove()
    forged = NIZK(challenge=tr.challenge, responses=[tr.responses[0] + 1])
    assert not p.verify(forged)


def test_dlrep_wrong_challenge(group):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(3 * g, x * g)
    tr = p.prove()
    forged = NIZK(challenge=tr.challenge + 1, responses=tr.responses)
    assert not p.verify(forged)


@pytest.mark.parametrize("responses", [[], [Bn(1), Bn(1)], [Bn(0)]])
def test_dlrep_rejects_malformed_responses(group, responses):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(3 * g, x * g)
    tr = p.prove()
    assert not p.verify(NIZK(challenge=tr.challenge, responses=responses))


def test_dlrep_rejects_response_out_of_range(group):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(3 * g, x * g)
    tr = p.prove()
    shifted = NIZK(
        challenge=tr.challenge, responses=[tr.responses[0] + group.order()]
    )
    assert not p.verify(shifted)


def test_dlrep_missing_secret_value(group):
    g = group.generator()
    x = Secret()
    p = DLRep(3 * g, x * g)
    with pytest.raises(IncompleteValuesError):
        p.get_prover()


def test_dlrep_requires_expression(group):
    g = group.generator()
    with pytest.raises(TypeError):
        DLRep(g, g)


def test_dlrep_mixed_groups(group, small_group):
    x = Secret()
    with pytest.raises(InvalidExpression):
        DLRep(group.generator(), x * small_group.generator())


def test_and_shares_responses(group):
    g = group.generator()
    h = 9 * g
    x = Secret(name="x")
    stmt = DLRep(5 * g, x * g) & DLRep(5 * h, x * h)
    assert len(stmt.clauses) == 2
    assert stmt.secret_vars == [x]

    tr = stmt.prove({x: 5}, instance_id=7)
    assert len(tr.responses) == 1
    assert stmt.verify(tr, instance_id=7)


def test_and_fails_with_unequal_logs(group):
    g = group.generator()
    h = 9 * g
    x = Secret(name="x")
    stmt = DLRep(5 * g, x * g) & DLRep(6 * h, x * h)
    assert not stmt.verify(stmt.prove({x: 5}))


def test_recomputed_commitment_matches(group):
    g = group.generator()
    h = 11 * g
    x, y = Secret(name="x"), Secret(name="y")
    stmt = DLRep(2 * g + 3 * h, x * g + y * h)
    prover = stmt.get_prover({x: 2, y: 3})

    commitment = prover.internal_commit()
    challenge = group.random_exponent()
    responses = prover.compute_response(challenge)
    assert stmt.recompute_commitment(challenge, responses) == commitment


def test_fixed_randomizers_give_fixed_proof(group):
    g = group.generator()
    x = Secret(name="x")
    stmt = DLRep(2 * g, x * g)

    first = stmt.get_prover({x: 2})
    second = stmt.get_prover({x: 2})
    assert first.internal_commit({"x": 10}) == second.internal_commit({"x": 10})
    assert first.internal_commit({"x": 10})[0] == 10 * g


def test_randomizers_are_single_use(group):
    g = group.generator()
    x = Secret(name="x")
    prover = DLRep(2 * g, x * g).get_prover({x: 2})
    assert isinstance(prover, DLRepProver)

    prover.internal_commit()
    prover.compute_response(Bn(5))
    assert not hasattr(prover, "ks")


def test_proofs_are_randomized(group):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(3 * g, x * g)
    assert p.prove() != p.prove()


def test_dlrep_rejects_oversized_challenge(group, monkeypatch):
    g = group.generator()
    x = Secret(value=3)
    p = DLRep(3 * g, x * g)
    tr = p.prove()

    def fail(self, challenge, responses):
        raise AssertionError("Commitment recomputed for an oversized challenge")

    monkeypatch.setattr(DLRep, "recompute_commitment", fail)
    huge = NIZK(challenge=Bn(2).pow(8 * 16384) + tr.challenge, responses=tr.responses)
    assert not p.verify(huge)
    just_over = NIZK(challenge=Bn(2).pow(CHALLENGE_LENGTH), responses=tr.responses)
    assert not p.verify(just_over)
