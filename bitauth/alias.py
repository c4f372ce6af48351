#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from io import BytesIO
from typing import Any, Callable, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# optionally with a leading '0x', e.g.:
# "deadbeef"
# "DEADBEEF"
# "0xdeadbeef"
# "02 326209e52f6f17e987ec27c56a1321acf3d68088b8fb634f232f12ccbc9a4575"
# "02326209e52f6f17e987ec27c56a1321acf3d68088b8fb634f232f12ccbc9a4575"
#
# use bitauth.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for SEC encoded public keys (33 or 65 bytes),
# private keys (32 bytes), der.Sig (DER serialization of ECDSA signature),
# hash digests, SIN payloads, etc.
Octets = Union[bytes, str]

# bytes or text string (not hex-string)
#
# this is for string that can be
# converted to bytes using encode()
# e.g. a message to be signed
#    if isinstance(msg, str):
#        msg = msg.encode()
#
# or 'ascii' strings like base58 encoded SINs:
# "Tf3yr5tYvccKNVrE26BrPs6LWZRh8woHwjR"
String = Union[bytes, str]

# binary data, usually to be cosumed as byte stream,
# but possibily provided as Octets too
BinaryData = Union[BytesIO, Octets]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor, e.g. hashlib.sha256
HashF = Callable[[], Any]

# Elliptic curve point in affine coordinates.
# Warning: to make Point a NamedTuple would slow down the code
Point = Tuple[int, int]

# Note that the infinity point in affine coordinates is INF = (int, 0)
# (no affine point has y=0 coordinate in a group of prime order).
# It can be checked with 'INF[1] == 0'
# The x-coordinate is arbitrary: 5 is preferred
# because it is not a valid x-coordinate in secp256k1
INF = 5, 0

# Elliptic curve point in Jacobian coordinates.
JacPoint = Tuple[int, int, int]

# Infinity point in Jacobian coordinates is INF = (int, int, 0).
# It can be checked with 'INF[2] == 0'
INFJ = 7, 0, 0
