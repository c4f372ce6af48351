#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Implementation according to SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

The ephemeral key (nonce) is drawn from a cryptographically secure
random source; reusing the same nonce for a different message
signed with the same private key reveals the private key!
"""

import secrets
from hashlib import sha256
from typing import Optional, Tuple, Union

from bitauth.alias import HashF, JacPoint, Octets, Point, String
from bitauth.curve import Curve, _double_mult, _mult_jac, mult, secp256k1
from bitauth.der import Sig
from bitauth.exceptions import BitAuthRuntimeError, InvalidPointError
from bitauth.hashes import reduce_to_hlen
from bitauth.number_theory import mod_inv
from bitauth.sec_point import point_from_octets
from bitauth.to_prv_key import PrvKey, int_from_prv_key
from bitauth.utils import bytes_from_octets, int_from_bits

# public key inputs: curve point or SEC encoded octets
Key = Union[Point, Octets]

# with a proper random source r == 0 or s == 0 never happens:
# exceeding this bound means the random source is broken
MAX_NONCE_ATTEMPTS = 1000


def point_from_key(key: Key, ec: Curve = secp256k1) -> Point:
    "Return a verified-as-valid public key Point."

    if isinstance(key, tuple):
        ec.require_on_curve(key)
        if key[1] == 0:
            raise InvalidPointError("INF is not a valid public key")
        return key
    return point_from_octets(key, ec)


def challenge_(msg_hash: Octets, ec: Curve = secp256k1, hf: HashF = sha256) -> int:
    "Return the message hash as scalar: its leftmost ec.nlen bits mod n."

    hf_len = hf().digest_size
    msg_hash = bytes_from_octets(msg_hash, hf_len)
    return int_from_bits(msg_hash, ec.nlen) % ec.n


def gen_keys(
    prv_key: Optional[PrvKey] = None, ec: Curve = secp256k1
) -> Tuple[int, Point]:
    """Return a private/public (int, Point) key-pair."""

    if prv_key is None:
        # q in the range [1, ec.n-1]
        q = 1 + secrets.randbelow(ec.n - 1)
    else:
        q = int_from_prv_key(prv_key, ec)

    return q, mult(q, ec.G, ec)


def _sign_(c: int, q: int, nonce: int, lower_s: bool, ec: Curve) -> Sig:
    # Private function for testing purposes: it allows to explore all
    # possible value of the challenge c.
    # It assumes that c is in [0, n-1], while q and nonce are in [1, n-1]
    # Steps numbering follows SEC 1 v.2 section 4.1.3
    KJ = _mult_jac(nonce, ec.GJ, ec)  # 1

    # affine x_K-coordinate of K (field element), mod n makes it a scalar
    r = ec.x_aff_from_jac(KJ) % ec.n  # 2, 3
    if r == 0:  # r≠0 required as it multiplies the public key
        raise BitAuthRuntimeError("failed to sign: r = 0")

    s = mod_inv(nonce, ec.n) * (c + r * q) % ec.n  # 6
    if s == 0:  # s≠0 required as verify will need the inverse of s
        raise BitAuthRuntimeError("failed to sign: s = 0")

    # optional canonical 'low-s' encoding, removing signature malleability
    if lower_s and s > ec.n // 2:
        s = ec.n - s

    return Sig(r, s, ec)


def sign_(
    msg_hash: Octets,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    lower_s: bool = False,
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> Sig:
    """Sign a hf_len bytes message hash according to ECDSA.

    If the nonce is not provided, a fresh random one is drawn
    for each attempt; the degenerate r = 0 or s = 0 cases are retried
    up to MAX_NONCE_ATTEMPTS times.
    """

    c = challenge_(msg_hash, ec, hf)  # 4, 5

    # the secret key q: an integer in the range 1..n-1.
    q = int_from_prv_key(prv_key, ec)

    if nonce is not None:
        return _sign_(c, q, int_from_prv_key(nonce, ec), lower_s, ec)

    for _ in range(MAX_NONCE_ATTEMPTS):
        k = 1 + secrets.randbelow(ec.n - 1)
        try:
            return _sign_(c, q, k, lower_s, ec)
        except BitAuthRuntimeError:
            continue

    err_msg = f"failed to sign: no valid nonce in {MAX_NONCE_ATTEMPTS} attempts"
    raise BitAuthRuntimeError(err_msg)


def sign(
    msg: String,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    lower_s: bool = False,
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> Sig:
    """ECDSA signature of a message.

    The message msg (text messages are UTF-8 encoded)
    is first processed by hf, yielding the value

        msg_hash = hf(msg),

    whose leftmost ec.nlen bits, reduced mod n, are then signed.
    """
    msg_hash = reduce_to_hlen(msg, hf)
    return sign_(msg_hash, prv_key, nonce, lower_s, ec, hf)


def _assert_as_valid_(c: int, QJ: JacPoint, r: int, s: int, ec: Curve) -> None:
    # Private function for test/dev purposes
    # Steps numbering follows SEC 1 v.2 section 4.1.4

    w = mod_inv(s, ec.n)
    u = c * w % ec.n
    v = r * w % ec.n  # 4
    # Let K = u*G + v*Q.
    KJ = _double_mult(u, ec.GJ, v, QJ, ec)  # 5

    # Fail if infinite(K).
    if KJ[2] == 0:  # 5
        raise BitAuthRuntimeError("invalid (INF) key")

    # Fail if r ≠ x_K % n.
    if r != ec.x_aff_from_jac(KJ) % ec.n:  # 6, 7, 8
        raise BitAuthRuntimeError("signature verification failed")


def assert_as_valid_(
    msg_hash: Octets, key: Key, sig: Union[Sig, Octets], hf: HashF = sha256
) -> None:
    # It raises Errors, while verify should always return True or False
    if isinstance(sig, Sig):
        sig.assert_valid()
    else:
        sig = Sig.parse(sig)

    c = challenge_(msg_hash, sig.ec, hf)  # 2, 3
    Q = point_from_key(key, sig.ec)
    QJ = Q[0], Q[1], 1
    # second part delegated to helper function
    _assert_as_valid_(c, QJ, sig.r, sig.s, sig.ec)


def assert_as_valid(
    msg: String, key: Key, sig: Union[Sig, Octets], hf: HashF = sha256
) -> None:
    # It raises Errors, while verify should always return True or False
    msg_hash = reduce_to_hlen(msg, hf)
    assert_as_valid_(msg_hash, key, sig, hf)


def verify_(
    msg_hash: Octets, key: Key, sig: Union[Sig, Octets], hf: HashF = sha256
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4)."""

    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid_(msg_hash, key, sig, hf)
    except Exception:  # pylint: disable=broad-except
        return False

    return True


def verify(
    msg: String, key: Key, sig: Union[Sig, Octets], hf: HashF = sha256
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4)."""

    try:
        msg_hash = reduce_to_hlen(msg, hf)
    except Exception:  # pylint: disable=broad-except
        return False

    return verify_(msg_hash, key, sig, hf)
