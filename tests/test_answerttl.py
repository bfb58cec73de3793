import struct

import pytest

from resolvkit.answerttl import answer_ttl, negative_ttl, skip_name

NAME = b"\x03www\x07example\x03com\x00"
QUESTION = NAME + b"\x00\x01\x00\x01"
TO_QNAME = b"\xc0\x0c"


def header(qd=1, an=0, ns=0, ar=0):
    return struct.pack(">HHHHHH", 0x1234, 0x8180, qd, an, ns, ar)


def rr(name, rtype, ttl, rdata):
    return name + struct.pack(">HHIH", rtype, 1, ttl, len(rdata)) + rdata


def a_record(ttl, name=TO_QNAME):
    return rr(name, 1, ttl, b"\x0a\x00\x00\x01")


def soa_rdata(minimum, mname=b"\x02ns\xc0\x0c", rname=b"\x04host\xc0\x0c"):
    return mname + rname + struct.pack(">IIIII", 1, 7200, 3600, 86400, minimum)


def message(answers=(), authority=()):
    return (
        header(an=len(answers), ns=len(authority))
        + QUESTION
        + b"".join(answers)
        + b"".join(authority)
    )


def test_skip_plain_name():
    assert skip_name(NAME) == len(NAME)


def test_skip_name_with_trailing_data():
    assert skip_name(NAME + b"\x00\x01\x00\x01") == len(NAME)


def test_skip_compressed_name():
    name = b"\x03www\xc0\x0c"
    assert skip_name(name + b"extra") == len(name)


def test_skip_name_at_offset():
    data = b"\xaa\xbb" + NAME
    assert skip_name(data, 2) == len(NAME)


def test_skip_name_overrun_raises():
    with pytest.raises(ValueError):
        skip_name(b"\x05ab")


def test_skip_name_reserved_label_raises():
    with pytest.raises(ValueError):
        skip_name(b"\x80abc\x00")


def test_answer_ttl_is_smallest_answer_ttl():
    msg = message(answers=[a_record(300), a_record(60), a_record(120)])
    assert answer_ttl(msg) == 60


def test_answer_ttl_single_record():
    assert answer_ttl(message(answers=[a_record(3600)])) == 3600


def test_negative_answer_uses_soa_minimum():
    msg = message(authority=[rr(TO_QNAME, 6, 900, soa_rdata(300))])
    assert answer_ttl(msg) == 300
    assert negative_ttl(msg) == 300


def test_negative_answer_uses_soa_ttl_when_smaller():
    msg = message(authority=[rr(TO_QNAME, 6, 900, soa_rdata(3600))])
    assert answer_ttl(msg) == 900


def test_soa_with_wrong_rdata_length_is_ignored():
    bad = soa_rdata(300) + b"\x00"
    msg = message(authority=[rr(TO_QNAME, 6, 900, bad)])
    assert negative_ttl(msg) == 0


def test_non_soa_authority_is_ignored():
    msg = message(authority=[rr(TO_QNAME, 2, 900, b"\x02ns\xc0\x0c")])
    assert negative_ttl(msg) == 0


def test_negative_ttl_without_authority_is_zero():
    assert negative_ttl(message()) == 0
    assert answer_ttl(message()) == 0


def test_trailing_garbage_is_not_cached():
    msg = message(answers=[a_record(300)]) + b"\x00"
    assert answer_ttl(msg) == 0


def test_truncated_message_is_not_cached():
    msg = message(answers=[a_record(300)])
    assert answer_ttl(msg[:-1]) == 0
    assert answer_ttl(b"") == 0
    assert answer_ttl(msg[:5]) == 0


def test_compression_loop_record_is_skipped():
    own_offset = len(header()) + len(QUESTION)
    looping = bytes([0xC0, own_offset])
    msg = message(answers=[a_record(300, name=looping)])
    assert answer_ttl(msg) == 0


def test_pointer_outside_message_is_skipped():
    msg = message(answers=[a_record(300, name=b"\xc0\xff")])
    assert answer_ttl(msg) == 0


def test_first_record_unparsable_keeps_zero():
    own_offset = len(header()) + len(QUESTION)
    looping = bytes([0xC0, own_offset])
    msg = message(answers=[a_record(300, name=looping), a_record(120)])
    assert answer_ttl(msg) == 0


def test_later_bad_record_does_not_affect_minimum():
    msg = message(answers=[a_record(200), a_record(50, name=b"\xc0\xff")])
    assert answer_ttl(msg) == 200


def test_answer_ttl_accepts_bytearray():
    msg = bytearray(message(answers=[a_record(45)]))
    assert answer_ttl(msg) == 45