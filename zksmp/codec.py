"""
Wire format of the protocol records.

A record is a type and an opaque body, carried by the outer messaging layer (as a TLV in OTR).
The body of every protocol message is a 4-byte big-endian count followed by that many integers,
each written as a 4-byte big-endian length and its big-endian magnitude. A first message with a
question prefixes the body with a 4-byte length and the UTF-8 question.

Integers appear in the order of the message class layout, a proof being written as its challenge
followed by its responses.
"""

import enum
import struct

import attr

from zksmp.base import NIZK
from zksmp.exceptions import MalformedRecord
from zksmp.utils import pack_mpi, read_mpi

TLV_HEADER = struct.Struct("!HH")
COUNT = struct.Struct("!I")


class RecordType(enum.IntEnum):
    MESSAGE_1 = 2
    MESSAGE_2 = 3
    MESSAGE_3 = 4
    MESSAGE_4 = 5
    ABORT = 6
    MESSAGE_1_WITH_QUESTION = 7


@attr.s(frozen=True)
class Record:
    """Typed opaque payload exchanged with the peer."""

    type = attr.ib(converter=RecordType)
    body = attr.ib(default=b"", converter=bytes)

    def to_bytes(self):
        """Frame the record as a TLV: 2-byte type, 2-byte length, body."""
        if len(self.body) > 0xFFFF:
            raise ValueError("Record body too long for a TLV")
        return TLV_HEADER.pack(self.type, len(self.body)) + self.body

    @classmethod
    def from_bytes(cls, data):
        """
        Parse a TLV produced by :py:meth:`to_bytes`.

        Raises:
            MalformedRecord: Truncated data, trailing bytes or unknown type.
        """
        if len(data) < TLV_HEADER.size:
            raise MalformedRecord("Truncated record header")
        tlv_type, length = TLV_HEADER.unpack_from(data)
        body = data[TLV_HEADER.size :]
        if len(body) != length:
            raise MalformedRecord("Record length does not match its body")
        try:
            return cls(type=tlv_type, body=body)
        except ValueError as exc:
            raise MalformedRecord("Unknown record type {}".format(tlv_type)) from exc


def encode_integers(values):
    return COUNT.pack(len(values)) + b"".join(pack_mpi(v) for v in values)


def decode_integers(data, expected, offset=0):
    """
    Read exactly ``expected`` integers and nothing else.

    Raises:
        MalformedRecord: Wrong count, truncated integer or trailing bytes.
    """
    if offset + COUNT.size > len(data):
        raise MalformedRecord("Truncated integer count")
    (count,) = COUNT.unpack_from(data, offset)
    if count != expected:
        raise MalformedRecord(
            "Expected {} integers, got {}".format(expected, count)
        )
    offset += COUNT.size

    values = []
    for _ in range(count):
        try:
            value, offset = read_mpi(data, offset)
        except ValueError as exc:
            raise MalformedRecord(str(exc)) from exc
        values.append(value)

    if offset != len(data):
        raise MalformedRecord("Trailing bytes after the last integer")
    return values


class SMPMessage:
    """
    Base of the protocol messages.

    ``layout`` lists the fields in wire order: ``None`` marks a group element, an integer the
    number of responses of a proof.
    """

    record_type = None
    layout = ()

    @classmethod
    def width(cls):
        return sum(1 if arity is None else 1 + arity for _, arity in cls.layout)

    def integers(self):
        values = []
        for name, arity in self.layout:
            field = getattr(self, name)
            if arity is None:
                values.append(field)
            else:
                values.append(field.challenge)
                values.extend(field.responses)
        return values

    def to_record(self):
        return Record(type=self.record_type, body=encode_integers(self.integers()))

    @classmethod
    def from_integers(cls, values, **extra):
        fields = dict(extra)
        pos = 0
        for name, arity in cls.layout:
            if arity is None:
                fields[name] = values[pos]
                pos += 1
            else:
                fields[name] = NIZK(
                    challenge=values[pos], responses=values[pos + 1 : pos + 1 + arity]
                )
                pos += 1 + arity
        return cls(**fields)

    @classmethod
    def decode(cls, record):
        return cls.from_integers(decode_integers(record.body, cls.width()))


@attr.s
class Message1(SMPMessage):
    """Initiator's two public values and their proofs, with an optional question."""

    record_type = RecordType.MESSAGE_1
    layout = (("g2", None), ("g2_proof", 1), ("g3", None), ("g3_proof", 1))

    g2 = attr.ib()
    g2_proof = attr.ib()
    g3 = attr.ib()
    g3_proof = attr.ib()
    question = attr.ib(default=None)

    def to_record(self):
        if self.question is None:
            return super().to_record()
        question = self.question.encode("utf-8")
        body = COUNT.pack(len(question)) + question + encode_integers(self.integers())
        return Record(type=RecordType.MESSAGE_1_WITH_QUESTION, body=body)

    @classmethod
    def decode(cls, record):
        if record.type != RecordType.MESSAGE_1_WITH_QUESTION:
            return super().decode(record)

        data = record.body
        if len(data) < COUNT.size:
            raise MalformedRecord("Truncated question length")
        (length,) = COUNT.unpack_from(data)
        end = COUNT.size + length
        if end > len(data):
            raise MalformedRecord("Truncated question")
        try:
            question = data[COUNT.size : end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRecord("Question is not valid UTF-8") from exc
        values = decode_integers(data, cls.width(), offset=end)
        return cls.from_integers(values, question=question)


@attr.s
class Message2(SMPMessage):
    """Responder's public values, its position commitments and their proofs."""

    record_type = RecordType.MESSAGE_2
    layout = (
        ("g2", None),
        ("g2_proof", 1),
        ("g3", None),
        ("g3_proof", 1),
        ("p", None),
        ("q", None),
        ("pq_proof", 2),
    )

    g2 = attr.ib()
    g2_proof = attr.ib()
    g3 = attr.ib()
    g3_proof = attr.ib()
    p = attr.ib()
    q = attr.ib()
    pq_proof = attr.ib()


@attr.s
class Message3(SMPMessage):
    """Initiator's position commitments and comparison value, with proofs."""

    record_type = RecordType.MESSAGE_3
    layout = (
        ("p", None),
        ("q", None),
        ("pq_proof", 2),
        ("r", None),
        ("r_proof", 1),
    )

    p = attr.ib()
    q = attr.ib()
    pq_proof = attr.ib()
    r = attr.ib()
    r_proof = attr.ib()


@attr.s
class Message4(SMPMessage):
    """Responder's comparison value and its proof."""

    record_type = RecordType.MESSAGE_4
    layout = (("r", None), ("r_proof", 1))

    r = attr.ib()
    r_proof = attr.ib()


@attr.s
class Abort(SMPMessage):
    """Tells the peer to drop its attempt. Carries no integers."""

    record_type = RecordType.ABORT

    def to_record(self):
        return Record(type=self.record_type)

    @classmethod
    def decode(cls, record):
        if record.body:
            raise MalformedRecord("Abort record carries a body")
        return cls()


MESSAGE_CLASSES = {
    RecordType.MESSAGE_1: Message1,
    RecordType.MESSAGE_1_WITH_QUESTION: Message1,
    RecordType.MESSAGE_2: Message2,
    RecordType.MESSAGE_3: Message3,
    RecordType.MESSAGE_4: Message4,
    RecordType.ABORT: Abort,
}


def decode_message(record):
    """
    Decode a record into its message class.

    Raises:
        MalformedRecord: If the body does not match the layout of the record type.
    """
    return MESSAGE_CLASSES[record.type].decode(record)
