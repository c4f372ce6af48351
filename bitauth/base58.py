#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Base58 and Base58Check encoding and decoding functions.

Base58 omits the similar-looking letters
0 (zero), O (capital o), I (capital i), and l (lower case L)
to avoid ambiguity when printed; moreover, it has no punctuation
so that a double-click does select the whole string.

Every leading zero byte is encoded as a leading '1' (the first
character of the alphabet), and vice versa, so that encoding is
lossless for any byte string.

Base58Check is the checksummed version of Base58, using
hash256(v)[:4] as checksum suffix before encoding;
at the decoding stage the checksum validity ensure data integrity.

The interface mimics the native python3 base64 interface, i.e.
it supports encoding bytes-like objects to ASCII bytes,
and decoding ASCII bytes-like objects or ASCII strings to bytes.
"""

from typing import Optional

from bitauth.alias import Octets, String
from bitauth.exceptions import FormatError
from bitauth.hashes import hash256
from bitauth.utils import bytes_from_octets

_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE = len(_ALPHABET)
_INDEX = {char: i for i, char in enumerate(_ALPHABET)}

CHECKSUM_SIZE = 4


def b58encode(v: Octets) -> bytes:
    """Encode a bytes-like object using Base58."""

    v = bytes_from_octets(v)

    # leading-0s become base58 leading-1s
    stripped = v.lstrip(b"\0")
    result = _ALPHABET[:1] * (len(v) - len(stripped))

    i = int.from_bytes(stripped, byteorder="big", signed=False)
    digits = []
    while i:
        i, idx = divmod(i, _BASE)
        digits.append(_ALPHABET[idx])
    return result + bytes(reversed(digits))


def b58decode(v: String) -> bytes:
    """Decode a Base58 encoded bytes-like object or ASCII string."""

    if isinstance(v, str):
        # do not trim spaces
        try:
            v = v.encode("ascii")
        except UnicodeEncodeError as e:
            raise FormatError("Base58 string contains invalid characters") from e

    i = 0
    for char in v:
        if char not in _INDEX:
            msg = f"Base58 string contains invalid character: {chr(char)!r}"
            raise FormatError(msg)
        i = i * _BASE + _INDEX[char]

    # base58 leading-1s become leading-0s
    n_pad = len(v) - len(v.lstrip(_ALPHABET[:1]))
    nbytes = (i.bit_length() + 7) // 8
    return b"\0" * n_pad + i.to_bytes(nbytes, byteorder="big", signed=False)


def b58encode_check(v: Octets, in_size: Optional[int] = None) -> bytes:
    """Encode a bytes-like object using Base58Check."""

    v = bytes_from_octets(v, in_size)
    h256 = hash256(v)
    return b58encode(v + h256[:CHECKSUM_SIZE])


def b58decode_check(v: String, out_size: Optional[int] = None) -> bytes:
    """Decode a Base58Check encoded bytes-like object or ASCII string.

    Optionally, it also ensures required output size.
    """

    result = b58decode(v)
    if len(result) < CHECKSUM_SIZE:
        err_msg = "not enough bytes for checksum, "
        err_msg += f"invalid base58 decoded size: {len(result)}"
        raise FormatError(err_msg)

    result, checksum = result[:-CHECKSUM_SIZE], result[-CHECKSUM_SIZE:]
    h256 = hash256(result)
    if checksum != h256[:CHECKSUM_SIZE]:
        err_msg = f"invalid checksum: 0x{checksum.hex()} "
        err_msg += f"instead of 0x{h256[:CHECKSUM_SIZE].hex()}"
        raise FormatError(err_msg)

    if out_size is None or len(result) == out_size:
        return result

    err_msg = "valid checksum, invalid decoded size: "
    err_msg += f"{len(result)} bytes instead of {out_size}"
    raise FormatError(err_msg)
