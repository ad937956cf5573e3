"""
Tiny expression language for statements on discrete-logarithm representations.

>>> from zksmp.consts import DEFAULT_GROUP
>>> g = DEFAULT_GROUP.generator()
>>> h = 7 * g
>>> a = Secret(name="a")
>>> b = Secret(name="b")
>>> expr = a * g + b * h
>>> expr.secrets == (a, b)
True

"""

import struct
import hashlib

from zksmp.exceptions import InvalidExpression, IncompleteValuesError


class Expression:
    """
    Product of powers of group elements, written additively: :math:`x_0 g_0 + ... + x_n g_n`.

    Keeps an ordered list of secrets and an ordered list of bases.

    Args:
        secret (Secret): Secret object.
        base: Group element.
    """

    def __init__(self, secret, base):
        if not isinstance(secret, Secret):
            raise InvalidExpression(
                "In {0} * {1}, the first parameter should be a Secret".format(
                    secret, base
                )
            )
        self._secrets = [secret]
        self._bases = [base]

    def __add__(self, other):
        if not isinstance(other, Expression):
            raise InvalidExpression(
                "Only linear combinations of group elements are supported."
            )
        merged = Expression(self._secrets[0], self._bases[0])
        merged._secrets = self._secrets + other._secrets
        merged._bases = self._bases + other._bases
        return merged

    @property
    def secrets(self):
        return tuple(self._secrets)

    @property
    def bases(self):
        return tuple(self._bases)

    def eval(self):
        """Evaluate the expression, if all secret values are available."""
        for secret in self._secrets:
            if secret.value is None:
                raise IncompleteValuesError(
                    "Secret {0} does not have a value".format(secret.name)
                )
        group = self._bases[0].group
        return group.wsum([s.value for s in self._secrets], self._bases)

    def __repr__(self):
        return " + ".join(
            "Expression({}, {})".format(secret, base)
            for secret, base in zip(self._secrets, self._bases)
        )


class Secret:
    """
    A secret exponent in a zero-knowledge proof.

    Args:
        value: Optional secret value.
        name: String to enforce as name of the Secret. Secrets with the same name are the same
            unknown in a statement.
    """

    # Number of bytes in a randomly-generated name of a secret.
    NUM_NAME_BYTES = 8

    def __init__(self, value=None, name=None):
        if name is None:
            name = self._generate_unique_name()
        self.name = name
        self.value = value

    def _generate_unique_name(self):
        h = struct.pack(">q", super().__hash__())
        return hashlib.sha256(h).hexdigest()[: self.NUM_NAME_BYTES * 4]

    def __mul__(self, base):
        return Expression(self, base)

    __rmul__ = __mul__

    def __repr__(self):
        if self.value is None:
            return "Secret(name={})".format(repr(self.name))
        return "Secret({}, {})".format(self.value, repr(self.name))

    def __hash__(self):
        return hash(("Secret", self.name))

    def __eq__(self, other):
        return (
            isinstance(other, Secret)
            and self.name == other.name
            and self.value == other.value
        )


def wsum_secrets(secrets, bases):
    """
    Build the expression :math:`x_0 G_0 + x_1 G_1 + ... + x_n G_n`.

    >>> from zksmp.consts import DEFAULT_GROUP
    >>> g = DEFAULT_GROUP.generator()
    >>> x, y = Secret(), Secret()
    >>> expr = wsum_secrets([x, y], [g, 3 * g])
    >>> expr.secrets == (x, y)
    True
    """
    if len(secrets) != len(bases):
        raise ValueError("Should have as many secrets as bases.")

    result = secrets[0] * bases[0]
    for secret, base in zip(secrets[1:], bases[1:]):
        result = result + secret * base
    return result
