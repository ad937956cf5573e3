"""
Integer helpers shared by the proofs and the codec.
"""

import struct

from petlib.bn import Bn

MPI_HEADER = struct.Struct("!I")


def ensure_bn(x):
    """
    Ensure that value is big number.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    """
    if isinstance(x, Bn):
        return x
    if x < 0:
        return -Bn.from_decimal(str(-x))
    return Bn.from_decimal(str(x))


def pack_mpi(value):
    """
    Encode a non-negative integer as a 4-byte big-endian length followed by its magnitude.

    >>> pack_mpi(258)
    b'\\x00\\x00\\x00\\x02\\x01\\x02'
    """
    value = ensure_bn(value)
    if value < 0:
        raise ValueError("Cannot encode a negative integer")
    magnitude = value.binary()
    return MPI_HEADER.pack(len(magnitude)) + magnitude


def read_mpi(data, offset=0):
    """
    Decode one integer written by :py:func:`pack_mpi`.

    Returns:
        tuple: The integer and the offset of the first byte after it.

    Raises:
        ValueError: If the buffer is truncated.

    >>> value, offset = read_mpi(b'\\x00\\x00\\x00\\x02\\x01\\x02')
    >>> value == 258, offset
    (True, 6)
    """
    end = offset + MPI_HEADER.size
    if end > len(data):
        raise ValueError("Truncated integer length")
    (length,) = MPI_HEADER.unpack_from(data, offset)
    if end + length > len(data):
        raise ValueError("Truncated integer")
    return Bn.from_binary(data[end : end + length]), end + length


def get_random_num(bits):
    """
    Draw a random number of given bitlength. Used for interactive challenges when
    debugging.

    >>> x = get_random_num(6)
    >>> x < 2**6
    True
    """
    order = Bn(2).pow(bits)
    return order.random()
