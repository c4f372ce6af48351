#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Functions for conversions between different private key formats."

from typing import Union

from bitauth.curve import Curve, secp256k1
from bitauth.exceptions import FormatError, OutOfRangeError
from bitauth.utils import bytes_from_octets, hex_string

# private key inputs:
# integer as Union[int, Octets]
# i.e. native int, 32 bytes, or hex-string
PrvKey = Union[int, bytes, str]


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - integer (native int)
    - bytes (ec.n_size bytes, big-endian)
    - hex-string (case-insensitive, optionally '0x' prefixed);
      short hex-strings are allowed as they are not zero-padded
      by many tools
    """

    if isinstance(prv_key, int):
        q = prv_key
    elif isinstance(prv_key, str):
        prv_key_bytes = bytes_from_octets(prv_key)
        if len(prv_key_bytes) > ec.n_size:
            raise FormatError(f"not a private key: {prv_key!r}")
        q = int.from_bytes(prv_key_bytes, byteorder="big", signed=False)
    else:
        try:
            prv_key = bytes_from_octets(prv_key, ec.n_size)
        except (FormatError, TypeError) as e:
            raise FormatError(f"not a private key: {prv_key!r}") from e
        q = int.from_bytes(prv_key, byteorder="big", signed=False)

    if not 0 < q < ec.n:
        err_msg = "private key not in 1..n-1: "
        err_msg += f"'{hex_string(q)}'" if 0xFFFFFFFF < q else f"{q}"
        raise OutOfRangeError(err_msg)

    return q


def hex_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> str:
    "Return the zero-padded hex-string of a verified-as-valid private key."

    q = int_from_prv_key(prv_key, ec)
    return q.to_bytes(ec.n_size, byteorder="big", signed=False).hex()
