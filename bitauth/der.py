#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Strict ASN.1 DER format for ECDSA signature representation.

Format:
[0x30] [data-size][0x02][r-size][r][0x02][s-size][s]

* 0x30: header byte to indicate compound structure (SEQUENCE)
* data-size: 1-byte size descriptor of the following data
* 0x02: header byte indicating an INTEGER
* r-size: 1-byte size descriptor of the r value that follows
* r: arbitrary-size big-endian r value.
    It must use the shortest possible encoding for
    a positive integers: no null bytes at the start,
    except a single one when the next byte has its highest bit set
    (to avoid being interpreted as a negative number)
* 0x02: header byte indicating an INTEGER
* s-size: 1-byte size descriptor of the s value that follows
* s: arbitrary-size big-endian s value. Same rules as for r apply

Being r and s smaller than the 256-bit curve order,
the signature is at most 72 bytes long:
all size descriptors use the DER short form (a single byte below 0x80).

Any deviation from the above (e.g. extra padding, trailing data,
long form sizes) is rejected, so that a given (r, s) pair
has one and only one valid serialization.
"""

from dataclasses import InitVar, dataclass
from io import BytesIO
from typing import Type, TypeVar

from bitauth.alias import BinaryData
from bitauth.curve import Curve, secp256k1
from bitauth.exceptions import FormatError, OutOfRangeError
from bitauth.utils import bytesio_from_binarydata, hex_string

_DER_SCALAR_MARKER = b"\x02"
_DER_SIG_MARKER = b"\x30"

_Sig = TypeVar("_Sig", bound="Sig")


def _serialize_size(size: int) -> bytes:
    if size >= 0x80:
        raise FormatError(f"DER long form size not supported: {size}")
    return size.to_bytes(1, byteorder="big", signed=False)


def _parse_sized_bytes(stream: BytesIO) -> bytes:
    size_bytes = stream.read(1)
    if not size_bytes:
        raise FormatError("missing size descriptor")
    size = size_bytes[0]
    if size == 0:
        raise FormatError("zero size")
    if size >= 0x80:
        raise FormatError(f"invalid DER long form size: {size_bytes.hex()}")

    data = stream.read(size)
    if len(data) != size:
        raise FormatError("not enough binary data")
    return data


def _serialize_scalar(scalar: int) -> bytes:
    # 'highest bit set' padding included here
    scalar_size = scalar.bit_length() // 8 + 1
    scalar_bytes = scalar.to_bytes(scalar_size, byteorder="big", signed=False)
    return _DER_SCALAR_MARKER + _serialize_size(scalar_size) + scalar_bytes


def _deserialize_scalar(sig_data_stream: BytesIO) -> int:

    marker = sig_data_stream.read(1)
    if marker != _DER_SCALAR_MARKER:
        err_msg = f"invalid value header: {marker.hex()}"
        err_msg += f", instead of integer element {_DER_SCALAR_MARKER.hex()}"
        raise FormatError(err_msg)

    scalar_bytes = _parse_sized_bytes(sig_data_stream)
    if scalar_bytes[0] >= 0x80:
        raise FormatError("invalid negative scalar")
    if len(scalar_bytes) > 1 and scalar_bytes[0] == 0 and scalar_bytes[1] < 0x80:
        raise FormatError("invalid 'highest bit set' padding")

    return int.from_bytes(scalar_bytes, byteorder="big", signed=False)


@dataclass(frozen=True)
class Sig:
    """ECDSA signature with DER serialization.

    - r is a scalar, 0 < r < ec.n
    - s is a scalar, 0 < s < ec.n

    (ec.n is the curve order)
    """

    # 32 bytes scalar
    r: int
    # 32 bytes scalar
    s: int
    ec: Curve = secp256k1
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        for name, scalar in (("r", self.r), ("s", self.s)):
            if not 0 < scalar < self.ec.n:
                err_msg = f"scalar {name} not in 1..n-1: "
                err_msg += (
                    f"'{hex_string(scalar)}'" if scalar > 0xFFFFFFFF else f"{scalar}"
                )
                raise OutOfRangeError(err_msg)

    def serialize(self, check_validity: bool = True) -> bytes:
        "Serialize an ECDSA signature to strict ASN.1 DER representation"

        if check_validity:
            self.assert_valid()

        out = _serialize_scalar(self.r)
        out += _serialize_scalar(self.s)
        return _DER_SIG_MARKER + _serialize_size(len(out)) + out

    def hex(self) -> str:
        "Return the DER serialization as hex-string."
        return self.serialize().hex()

    @classmethod
    def parse(
        cls: Type[_Sig], data: BinaryData, check_validity: bool = True
    ) -> _Sig:
        """Return a Sig by parsing binary data.

        Deserialize a strict ASN.1 DER representation of an ECDSA signature.
        """

        stream = bytesio_from_binarydata(data)

        # [0x30] [data-size][0x02][r-size][r][0x02][s-size][s]
        marker = stream.read(1)
        if marker != _DER_SIG_MARKER:
            err_msg = f"invalid compound header: {marker.hex()}"
            err_msg += f", instead of DER sequence tag {_DER_SIG_MARKER.hex()}"
            raise FormatError(err_msg)

        # [data-size][0x02][r-size][r][0x02][s-size][s]
        sig_data = _parse_sized_bytes(stream)
        if stream.read(1) != b"":
            raise FormatError("trailing data after DER sequence")

        # [0x02][r-size][r][0x02][s-size][s]
        sig_data_substream = BytesIO(sig_data)
        r = _deserialize_scalar(sig_data_substream)
        s = _deserialize_scalar(sig_data_substream)

        # to prevent malleability
        # the sig_data_substream must have been consumed entirely
        if sig_data_substream.read(1) != b"":
            raise FormatError("invalid DER sequence length")

        return cls(r, s, secp256k1, check_validity)
