#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `bitauth.hashes` module."

from hashlib import sha256 as hf

from bitauth.hashes import hash160, hash256, reduce_to_hlen, ripemd160, sha256


def test_empty_input() -> None:
    assert sha256(b"").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )
    assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"
    assert hash256(b"") == sha256(sha256(b""))
    assert hash160(b"") == ripemd160(sha256(b""))


def test_hash160() -> None:
    # compressed public key of the private key 1, i.e. the generator G
    pub_key = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    assert hash160(pub_key).hex() == "751e76e8199196d454941c45d1b3a323f1433bd6"
    assert hash160(pub_key) == hash160(bytes.fromhex(pub_key))


def test_reduce_to_hlen() -> None:
    # text is UTF-8 encoded, not interpreted as hex-string
    msg = "abcd"
    assert reduce_to_hlen(msg) == hf(b"abcd").digest()
    assert reduce_to_hlen(msg.encode()) == hf(b"abcd").digest()
    assert reduce_to_hlen("€") == hf("€".encode("utf-8")).digest()
