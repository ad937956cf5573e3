"""
Prime-order subgroup of the integers modulo a safe prime.

Group elements are written additively so that they can be used like :py:class:`petlib.ec.EcPt`
in :py:mod:`zksmp.expr` statements: ``a + b`` is the modular product, ``k * a`` raises ``a`` to
the power ``k``, and ``-a`` is the modular inverse.

Example:
    PK{(x): y = x * g}
    where y and g are elements of the subgroup of order q of the integers modulo p = 2q + 1.

Exponentiation is delegated to OpenSSL through :py:meth:`petlib.bn.Bn.mod_pow`. Its running
time is as independent of the exponent as OpenSSL's ``BN_mod_exp`` makes it; no stronger
guarantee is available from Python.
"""

from petlib.bn import Bn

from zksmp.exceptions import InvalidGroupElement
from zksmp.utils import ensure_bn


# This class mimics petlib.ec.EcGroup, but for the quadratic residues modulo a safe prime.
class ModPGroup:
    """
    Cyclic group of prime order ``order`` generated by ``generator`` modulo ``modulus``.

    Args:
        modulus (Bn): Safe prime :math:`p`.
        order (Bn): Subgroup order :math:`q = (p - 1) / 2`.
        generator (Bn): Generator :math:`g` of the subgroup.
    """

    def __init__(self, modulus, order, generator):
        self.modulus = modulus
        self._order = order
        self._generator = generator

    def order(self):
        return self._order

    def generator(self):
        return GroupElement(self._generator, self)

    def infinite(self):
        """Neutral element, named after its elliptic-curve counterpart."""
        return GroupElement(Bn(1), self)

    def element(self, value):
        """
        Wrap a value received from the peer as a group element.

        Raises:
            InvalidGroupElement: If the value is outside of :math:`[2, p-2]`.
        """
        value = ensure_bn(value)
        self.validate_element(value)
        return GroupElement(value, self)

    def check_element(self, value):
        return 2 <= value <= self.modulus - 2

    def validate_element(self, value):
        """
        Reject the identity, :math:`p - 1` and anything outside of the group.

        Guards against small-subgroup confinement of our secret exponents.
        """
        if not self.check_element(value):
            raise InvalidGroupElement("Group element outside of [2, p-2]")

    def check_exponent(self, value):
        return 1 <= value < self._order

    def random_exponent(self):
        """Draw a fresh exponent uniformly from :math:`[1, q-1]`."""
        return (self._order - 1).random() + 1

    def power(self, base, exponent):
        return base.mod_pow(ensure_bn(exponent), self.modulus)

    def inverse(self, value):
        return value.mod_inverse(self.modulus)

    def wsum(self, weights, elems):
        """Compute :math:`\\prod_i elems_i^{weights_i}`."""
        res = self.infinite()
        for weight, elem in zip(weights, elems):
            res = res + weight * elem
        return res

    def __eq__(self, other):
        return (
            isinstance(other, ModPGroup)
            and self.modulus == other.modulus
            and self._generator == other._generator
        )

    def __repr__(self):
        return "ModPGroup({} bits)".format(self.modulus.num_bits())


# This class mimics petlib.ec.EcPt, but for integers modulo a prime.
class GroupElement:
    def __init__(self, value, group):
        self.value = value
        self.group = group

    def __add__(self, other):
        return GroupElement(
            self.value.mod_mul(other.value, self.group.modulus), self.group
        )

    def __neg__(self):
        return GroupElement(self.group.inverse(self.value), self.group)

    def __sub__(self, other):
        return self + (-other)

    def __rmul__(self, exponent):
        exponent = ensure_bn(exponent)
        if exponent < 0:
            inverse = self.group.inverse(self.value)
            return GroupElement(self.group.power(inverse, -exponent), self.group)
        return GroupElement(self.group.power(self.value, exponent), self.group)

    def __eq__(self, other):
        if not isinstance(other, GroupElement):
            return NotImplemented
        return self.value == other.value and self.group == other.group

    def __hash__(self):
        return hash(("GroupElement", self.value.binary()))

    def __repr__(self):
        return "GroupElement({})".format(self.value.hex())
