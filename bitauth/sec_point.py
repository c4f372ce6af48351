#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed/uncompressed point representation.

X9.62 point encoding, according to SEC 1 v.2, sections 2.3.3 and 2.3.4:

* compressed: 0x02 (even y) or 0x03 (odd y) prefix, then x
* uncompressed: 0x04 prefix, then x and y

each coordinate being a big-endian field element of ec.p_size bytes.
"""

from bitauth.alias import Octets, Point
from bitauth.curve import Curve, secp256k1
from bitauth.exceptions import FormatError, InvalidPointError
from bitauth.utils import bytes_from_octets, hex_string


def bytes_from_point(Q: Point, ec: Curve = secp256k1, compressed: bool = True) -> bytes:
    """Return a point as compressed/uncompressed octet sequence."""

    # check that Q is a point and that is on curve
    ec.require_on_curve(Q)

    if Q[1] == 0:  # infinity point in affine coordinates
        raise InvalidPointError("no bytes representation for infinity point")

    bytes_ = Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
    if compressed:
        return (b"\x03" if (Q[1] & 1) else b"\x02") + bytes_

    return b"\x04" + bytes_ + Q[1].to_bytes(ec.p_size, byteorder="big", signed=False)


def hex_from_point(Q: Point, ec: Curve = secp256k1, compressed: bool = True) -> str:
    """Return a point as compressed/uncompressed hex-string."""
    return bytes_from_point(Q, ec, compressed).hex()


def point_from_octets(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    """Return a tuple (x_Q, y_Q) that belongs to the curve.

    Both bytes and hex-strings are accepted.
    A malformed encoding raises FormatError,
    coordinates not on the curve raise InvalidPointError.
    """

    compressed_size = ec.p_size + 1
    uncompressed_size = 2 * ec.p_size + 1
    pub_key = bytes_from_octets(pub_key, (compressed_size, uncompressed_size))

    bsize = len(pub_key)
    if pub_key[0] in (0x02, 0x03):
        if bsize != compressed_size:
            err_msg = "invalid size for compressed point: "
            err_msg += f"{bsize} instead of {compressed_size}"
            raise FormatError(err_msg)
        x_Q = int.from_bytes(pub_key[1:], byteorder="big", signed=False)
        try:
            y_Q = ec.y_even(x_Q)
        except InvalidPointError as e:
            msg = f"invalid x-coordinate: '{hex_string(x_Q)}'"
            raise InvalidPointError(msg) from e
        return x_Q, y_Q if pub_key[0] == 0x02 else ec.p - y_Q

    if pub_key[0] == 0x04:
        if bsize != uncompressed_size:
            err_msg = "invalid size for uncompressed point: "
            err_msg += f"{bsize} instead of {uncompressed_size}"
            raise FormatError(err_msg)
        x_Q = int.from_bytes(pub_key[1:compressed_size], byteorder="big", signed=False)
        y_Q = int.from_bytes(pub_key[compressed_size:], byteorder="big", signed=False)
        if y_Q == 0:
            raise InvalidPointError("no bytes representation for infinity point")
        if not ec.is_on_curve((x_Q, y_Q)):
            raise InvalidPointError(f"point not on curve: {pub_key.hex()}")
        return x_Q, y_Q

    raise FormatError(f"not a point: {pub_key.hex()}")
