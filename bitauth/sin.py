#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""System Identification Number (SIN).

A SIN is the public identity token derived from a public key:

    payload = 0x0f02 || hash160(pub_key)
    SIN = base58(payload || hash256(payload)[:4])

where hash160 is RIPEMD160(SHA256(*)), hash256 is SHA256(SHA256(*)),
0x0f is the SIN version and 0x02 the SIN type
(ephemeral, i.e. self-generated, identity).

The SEC encoded public key bytes are hashed as they are:
the same point has different SINs in compressed and uncompressed form.
"""

from typing import Union

from bitauth.alias import Octets, Point, String
from bitauth.base58 import CHECKSUM_SIZE, b58decode_check, b58encode_check
from bitauth.exceptions import FormatError
from bitauth.hashes import hash160
from bitauth.sec_point import bytes_from_point, point_from_octets
from bitauth.utils import bytes_from_octets

SIN_PREFIX = b"\x0f\x02"
# version/type prefix, hash160, checksum
SIN_SIZE = len(SIN_PREFIX) + 20 + CHECKSUM_SIZE


def sin_from_pub_key(pub_key: Union[Point, Octets]) -> str:
    "Return the SIN of a SEC encoded public key (or of a compressed Point)."

    if isinstance(pub_key, tuple):
        pub_key_bytes = bytes_from_point(pub_key)
    else:
        pub_key_bytes = bytes_from_octets(pub_key)
        # fail if not a valid public key
        point_from_octets(pub_key_bytes)

    payload = SIN_PREFIX + hash160(pub_key_bytes)
    return b58encode_check(payload).decode("ascii")


def payload_from_sin(sin: String) -> bytes:
    """Return the hash160 payload of a SIN.

    Errors are raised for invalid characters, wrong size,
    wrong checksum, and wrong version/type prefix.
    """

    payload = b58decode_check(sin, SIN_SIZE - CHECKSUM_SIZE)

    prefix = payload[: len(SIN_PREFIX)]
    if prefix != SIN_PREFIX:
        err_msg = f"invalid SIN prefix: 0x{prefix.hex()}"
        err_msg += f" instead of 0x{SIN_PREFIX.hex()}"
        raise FormatError(err_msg)

    return payload[len(SIN_PREFIX) :]


def validate_sin(sin: String) -> bool:
    "Return True if the SIN has valid size, checksum, and prefix."

    # all kind of Exceptions are catched because
    # validate_sin must always return a bool
    try:
        payload_from_sin(sin)
    except Exception:  # pylint: disable=broad-except
        return False

    return True
