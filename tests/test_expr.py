import re
import pytest

from zksmp.expr import Secret, Expression, wsum_secrets
from zksmp.exceptions import IncompleteValuesError, InvalidExpression


def test_secret_named():
    x = Secret(name="x")
    assert x.name == "x"


def test_secret_same_names():
    x, y = Secret(name="same"), Secret(name="same")
    assert hash(x) == hash(y)
    assert x == y


def test_secret_same_names_different_values():
    x, y = Secret(name="same"), Secret(name="same", value=100)
    assert hash(x) == hash(y)
    assert x != y


def test_secret_different_anonymous_secrets():
    x, y = Secret(), Secret()
    assert x.name != y.name
    assert x != y


@pytest.mark.parametrize(
    "x,pattern",
    [
        (Secret(), r"Secret\(name='.+'\)"),
        (Secret(name="x"), r"Secret\(name='x'\)"),
        (Secret(value=42), r"Secret\(42, '.+'\)"),
        (Secret(value=42, name="x"), r"Secret\(42, 'x'\)"),
    ],
)
def test_secret_repr(x, pattern):
    assert re.match(pattern, repr(x)) is not None


def test_expr_from_constructor(group):
    g = group.generator()
    x = Secret()
    expr = Expression(x, g)
    assert expr.bases == (g,)
    assert expr.secrets == (x,)


def test_expr_from_product(group):
    g = group.generator()
    x = Secret()
    assert (x * g).secrets == (x,)
    assert (g * x).bases == (g,)


def test_expr_sum_keeps_order(group):
    g = group.generator()
    h = 3 * g
    x, y = Secret(), Secret()
    expr = x * g + y * h
    assert expr.secrets == (x, y)
    assert expr.bases == (g, h)


def test_expr_sum_leaves_operands_alone(group):
    g = group.generator()
    left = Secret() * g
    left + Secret() * g
    assert len(left.secrets) == 1


def test_expr_eval(group):
    g = group.generator()
    h = 5 * g
    expr = Secret(value=3) * g + Secret(value=4) * h
    assert expr.eval() == 23 * g


def test_expr_eval_no_values_specified(group):
    g = group.generator()
    rhs = Secret(name="x1") * (2 * g) + Secret(name="x2") * (5 * g)
    with pytest.raises(IncompleteValuesError):
        rhs.eval()


def test_expr_requires_secret(group):
    with pytest.raises(InvalidExpression):
        Expression(2, group.generator())


@pytest.mark.parametrize("other", [Secret(), 2, "gibberish"])
def test_expr_invalid_expression(group, other):
    expr = Secret() * group.generator()
    with pytest.raises(InvalidExpression):
        expr + other


@pytest.mark.parametrize("num", [2, 10])
def test_expr_repr(group, num):
    g = group.generator()
    secrets = [Secret() for _ in range(num)]
    bases = [(i + 2) * g for i in range(num)]
    expr = wsum_secrets(secrets, bases)

    expected_repr = " + ".join(
        "Expression({}, {})".format(x, base) for x, base in zip(secrets, bases)
    )
    assert expected_repr == repr(expr)


def test_wsum_secrets_length_mismatch(group):
    with pytest.raises(ValueError):
        wsum_secrets([Secret()], [])
