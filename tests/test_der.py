#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `bitauth.der` module."

import pytest

from bitauth.curve import secp256k1
from bitauth.der import Sig
from bitauth.exceptions import FormatError, OutOfRangeError

ec = secp256k1


def test_der_size() -> None:

    sig8 = 1, 1
    sig72 = ec.n - 2, ec.n - 1
    sig71 = 2**255 - 4, ec.n - 1
    sig70 = 2**255 - 4, 2**255 - 1
    sig70b = 2**255 - 4, 2**248 - 1
    sig69 = 2**255 - 4, 2**247 - 1
    sig68 = 2**247 - 1, 2**247 - 1
    sigs = [sig8, sig72, sig71, sig70, sig70b, sig69, sig68]
    lengths = [8, 72, 71, 70, 70, 69, 68]

    for length, (r, s) in zip(lengths, sigs):
        sig = Sig(r, s)
        assert r == sig.r
        assert s == sig.s
        assert ec == sig.ec
        sig_bin = sig.serialize()
        assert len(sig_bin) == length
        assert sig_bin[1] == length - 2
        assert sig == Sig.parse(sig_bin)
        assert sig == Sig.parse(sig.hex())


def test_der_vectors() -> None:

    assert Sig(1, 1).hex() == "3006020101020101"
    # 'highest bit set' padding
    assert Sig(0x80, 1).hex() == "300702020080020101"
    assert Sig(1, 0x80).hex() == "300702010102020080"
    assert Sig(0x7F, 0xFF).hex() == "300702017f020200ff"

    sig = Sig.parse("300702020080020101")
    assert sig.r == 0x80
    assert sig.s == 1

    # case-insensitive hex-string, bytes, and bytearray
    assert Sig.parse("3006020101020101".upper()) == Sig(1, 1)
    assert Sig.parse(bytes.fromhex("3006020101020101")) == Sig(1, 1)
    assert Sig.parse(bytearray.fromhex("3006020101020101")) == Sig(1, 1)


def test_der_deserialize() -> None:

    with pytest.raises(FormatError, match="invalid hex-string: "):
        Sig.parse("not a sig")

    with pytest.raises(FormatError, match="invalid compound header: "):
        Sig.parse(b"")

    with pytest.raises(FormatError, match="missing size descriptor"):
        Sig.parse(b"\x30")

    sig = Sig(2**255 - 4, 2**247 - 1)
    sig_bin = sig.serialize()
    r_size = sig_bin[3]

    bad_sig_bin = b"\x31" + sig_bin[1:]
    err_msg = "invalid compound header: "
    with pytest.raises(FormatError, match=err_msg):
        Sig.parse(bad_sig_bin)

    bad_sig_bin = sig_bin[:1] + b"\x45" + sig_bin[2:]
    err_msg = "not enough binary data"
    with pytest.raises(FormatError, match=err_msg):
        Sig.parse(bad_sig_bin)

    bad_sig_bin = sig_bin[:1] + b"\x81" + sig_bin[2:]
    err_msg = "invalid DER long form size: "
    with pytest.raises(FormatError, match=err_msg):
        Sig.parse(bad_sig_bin)

    bad_sig_bin = sig_bin + b"\x00"
    err_msg = "trailing data after DER sequence"
    with pytest.raises(FormatError, match=err_msg):
        Sig.parse(bad_sig_bin)

    # r and s scalars
    for offset in (4, 6 + r_size):
        bad_sig_bin = sig_bin[: offset - 2] + b"\x00" + sig_bin[offset - 1 :]
        err_msg = "invalid value header: "
        with pytest.raises(FormatError, match=err_msg):
            Sig.parse(bad_sig_bin)

        bad_sig_bin = sig_bin[: offset - 1] + b"\x00" + sig_bin[offset:]
        err_msg = "zero size"
        with pytest.raises(FormatError, match=err_msg):
            Sig.parse(bad_sig_bin)

        bad_sig_bin = sig_bin[: offset - 1] + b"\x80" + sig_bin[offset:]
        err_msg = "invalid DER long form size: "
        with pytest.raises(FormatError, match=err_msg):
            Sig.parse(bad_sig_bin)

        bad_sig_bin = sig_bin[:offset] + b"\x80" + sig_bin[offset + 1 :]
        err_msg = "invalid negative scalar"
        with pytest.raises(FormatError, match=err_msg):
            Sig.parse(bad_sig_bin)

        bad_sig_bin = sig_bin[:offset] + b"\x00\x7f" + sig_bin[offset + 2 :]
        err_msg = "invalid 'highest bit set' padding"
        with pytest.raises(FormatError, match=err_msg):
            Sig.parse(bad_sig_bin)

    data_size = sig_bin[1]
    malleated_size = (data_size + 1).to_bytes(1, byteorder="big", signed=False)
    bad_sig_bin = sig_bin[:1] + malleated_size + sig_bin[2:] + b"\x01"
    err_msg = "invalid DER sequence length"
    with pytest.raises(FormatError, match=err_msg):
        Sig.parse(bad_sig_bin)

    # missing s scalar
    r_only = sig_bin[2 : 4 + r_size]
    bad_sig_bin = b"\x30" + len(r_only).to_bytes(1, "big") + r_only
    err_msg = "invalid value header: "
    with pytest.raises(FormatError, match=err_msg):
        Sig.parse(bad_sig_bin)


def test_der_serialize() -> None:

    r = 2**247 - 1
    s = 2**247 - 1
    Sig(r, s)

    err_msg = "scalar r not in 1..n-1: "
    for bad_r in (0, ec.n):
        _ = Sig(bad_r, s, check_validity=False)
        with pytest.raises(OutOfRangeError, match=err_msg):
            Sig(bad_r, s)

    err_msg = "scalar s not in 1..n-1: "
    for bad_s in (0, ec.n):
        sig = Sig(r, bad_s, check_validity=False)
        with pytest.raises(OutOfRangeError, match=err_msg):
            Sig(r, bad_s)
        with pytest.raises(OutOfRangeError, match=err_msg):
            sig.serialize()


def test_der_parse_out_of_range() -> None:

    # well-formed DER, but r = 0
    der_zero_r = "3006020100020101"
    with pytest.raises(OutOfRangeError, match="scalar r not in 1..n-1: "):
        Sig.parse(der_zero_r)
    sig = Sig.parse(der_zero_r, check_validity=False)
    assert sig.r == 0
    assert sig.s == 1

    # well-formed DER, but s = n
    sig_bin = Sig(1, ec.n - 1).serialize()
    n_bytes = b"\x02\x21\x00" + ec.n.to_bytes(32, "big")
    bad_sig_bin = b"\x30" + (3 + len(n_bytes)).to_bytes(1, "big")
    bad_sig_bin += sig_bin[2:5] + n_bytes
    with pytest.raises(OutOfRangeError, match="scalar s not in 1..n-1: "):
        Sig.parse(bad_sig_bin)


def test_frozen_dataclass() -> None:

    sig = Sig(1, 1)
    with pytest.raises(AttributeError):
        sig.r = 2  # type: ignore
    assert hash(sig) == hash(Sig(1, 1))
