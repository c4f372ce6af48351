#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Optional libsecp256k1 acceleration of the generator multiplication.

Public key derivation is delegated to libsecp256k1 when the
btclib_libsecp256k1 python bindings are installed
(pip install bitauth[secp256k1]);
otherwise the pure python implementation in bitauth.curve is used.
"""

import contextlib

from bitauth.alias import Point
from bitauth.exceptions import BitAuthRuntimeError

LIBSECP256K1_AVAILABLE = False
with contextlib.suppress(ImportError):
    from btclib_libsecp256k1 import ffi, lib

    LIBSECP256K1_AVAILABLE = True
    # Keeping a single one of these is most efficient.
    # SECP256K1_CONTEXT_SIGN | SECP256K1_CONTEXT_VERIFY
    ctx = lib.secp256k1_context_create(769)
    EC_UNCOMPRESSED = 2  # lib.SECP256K1_EC_UNCOMPRESSED


def is_available() -> bool:
    return LIBSECP256K1_AVAILABLE


def mult_generator(q: int) -> Point:
    """Return q*G, with q already reduced to [1, n-1]."""

    pubkey_ptr = ffi.new("secp256k1_pubkey *")
    if not lib.secp256k1_ec_pubkey_create(ctx, pubkey_ptr, q.to_bytes(32, "big")):
        raise BitAuthRuntimeError("secp256k1_ec_pubkey_create failure")

    serialized_ptr = ffi.new("char[65]")
    length = ffi.new("size_t *", 65)
    # according to documentation, it always returns 1
    lib.secp256k1_ec_pubkey_serialize(
        ctx, serialized_ptr, length, pubkey_ptr, EC_UNCOMPRESSED
    )
    pub_key = ffi.unpack(serialized_ptr, 65)
    return int.from_bytes(pub_key[1:33], "big"), int.from_bytes(pub_key[33:], "big")
