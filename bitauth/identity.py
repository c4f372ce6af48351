#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BitAuth identities, and hex-string in / hex-string out protocol functions.

An Identity bundles a private key, its compressed public key, its SIN,
and its creation time (milliseconds since the Unix epoch).
The private key is the only secret: it is up to the caller
to protect it, as bitauth has no persistence layer.

Signing and verification work on text (UTF-8) or bytes messages,
with DER signatures as hex-strings.
Verification, like SIN validation, never raises:
any malformed input just makes it return False.
"""

import secrets
import time
from dataclasses import InitVar, dataclass
from typing import Optional

from dataclasses_json import DataClassJsonMixin

from bitauth import dsa
from bitauth.alias import Octets, String
from bitauth.curve import mult, secp256k1
from bitauth.exceptions import BitAuthValueError, FormatError
from bitauth.sec_point import hex_from_point
from bitauth.sin import sin_from_pub_key, validate_sin
from bitauth.to_prv_key import PrvKey, hex_from_prv_key, int_from_prv_key

__all__ = [
    "Identity",
    "generate_identity",
    "identity_from_prv_key",
    "pub_key_from_prv_key",
    "sin_from_pub_key",
    "sign",
    "validate_sin",
    "verify_signature",
]


def pub_key_from_prv_key(prv_key: PrvKey, compressed: bool = True) -> str:
    "Return the SEC encoded hex-string public key of a private key."

    q = int_from_prv_key(prv_key)
    return hex_from_point(mult(q), compressed=compressed)


@dataclass(frozen=True)
class Identity(DataClassJsonMixin):
    # milliseconds since the Unix epoch
    created: int
    # 32 bytes hex-string private key
    priv: str
    # 33 bytes hex-string compressed public key
    pub: str
    # base58 encoded SIN
    sin: str
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        if self.created < 0:
            raise BitAuthValueError(f"negative creation time: {self.created}")

        # 64 lower-case hex-digits, zero-padded
        priv = hex_from_prv_key(self.priv)
        if self.priv != priv:
            raise FormatError(f"non-normalized private key: {self.priv!r}")

        pub = pub_key_from_prv_key(priv)
        if self.pub != pub:
            raise BitAuthValueError(f"public key mismatch: {self.pub} instead of {pub}")

        sin = sin_from_pub_key(pub)
        if self.sin != sin:
            raise BitAuthValueError(f"SIN mismatch: {self.sin} instead of {sin}")

    def sign(self, msg: String) -> str:
        "Return the hex-string DER signature of the message."
        return sign(msg, self.priv)

    def verify(self, msg: String, sig: Octets) -> bool:
        "Return True if sig is a valid signature of msg for this identity."
        return verify_signature(msg, self.pub, sig)


def identity_from_prv_key(prv_key: PrvKey, created: Optional[int] = None) -> Identity:
    "Return the Identity of an existing private key."

    if created is None:
        created = int(time.time() * 1000)
    priv = hex_from_prv_key(prv_key)
    pub = pub_key_from_prv_key(priv)
    return Identity(created, priv, pub, sin_from_pub_key(pub))


def generate_identity() -> Identity:
    "Return a new Identity, based on a fresh random private key."

    # q in the range [1, ec.n-1]
    q = 1 + secrets.randbelow(secp256k1.n - 1)
    return identity_from_prv_key(q)


def sign(msg: String, prv_key: PrvKey) -> str:
    "Return the hex-string DER signature of the message."
    return dsa.sign(msg, prv_key).hex()


def verify_signature(msg: String, pub_key: Octets, sig: Octets) -> bool:
    "Return True if sig is a valid signature of msg for the public key."
    return dsa.verify(msg, pub_key, sig)
