"""
Fixed parameters shared by every comparison.
"""

from petlib.bn import Bn

from zksmp.group import ModPGroup

# 1536-bit MODP prime of RFC 3526 (group 5), the group used by OTR version 3.
_MODULUS = 2410312426921032588552076022197566074856950548502459942654116941958108831682612228890093858261341614673227141477904012196503648957050582631942730706805009223062734745341073406696246014589361659774041027169249453200378729434170325843778659198143763193776859869524088940195577346119843545301547043747207749969763750084308926339295559968882457872412993810129130294592999947926365264059284647209730384947211681434464714438488520940127459844288859336526896320919633919

DH_MODULUS = Bn.from_decimal(str(_MODULUS))
DH_GENERATOR = Bn(2)
SM_ORDER = Bn.from_decimal(str((_MODULUS - 1) // 2))

DEFAULT_GROUP = ModPGroup(DH_MODULUS, SM_ORDER, DH_GENERATOR)

# Fiat-Shamir challenges are SHA-256 digests.
CHALLENGE_LENGTH = 256

# Leading byte of the secret commitment hash input.
SECRET_VERSION = b"\x01"
