#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic over prime fields.

Only what is needed by the secp256k1 point codec and by ECDSA:
modular inverse (extended Euclidean algorithm) and
modular square root (closed forms for p = 3 mod 4 and p = 5 mod 8,
Tonelli-Shanks otherwise).
"""

from typing import Tuple

from bitauth.exceptions import BitAuthValueError
from bitauth.utils import hex_string


def _fmt(i: int) -> str:
    return f"'{hex_string(i)}'" if i > 0xFFFFFFFF else f"{i}"


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b)."""

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a (mod m). m does not have to be a prime."""

    a %= m
    g, x, _ = xgcd(a, m)
    if g != 1:
        raise BitAuthValueError(f"no inverse for {_fmt(a)} mod {_fmt(m)}")
    return x % m


def legendre_symbol(a: int, p: int) -> int:
    """Compute the Legendre symbol a|p using Euler's criterion.

    p is an odd prime: it returns 1 if a is a non-zero quadratic residue,
    -1 if a has no square root modulo p, and 0 if p divides a.
    """

    ls = pow(a, p >> 1, p)
    return -1 if ls == p - 1 else ls


def mod_sqrt(a: int, p: int) -> int:
    """Return a square root (mod p) of a; p must be a prime.

    Solve the equation x^2 = a mod p and return x.
    Note that p - x is also a root.

    The candidate root is always verified: if a is not a quadratic
    residue an error is raised.
    """

    a %= p

    if p % 4 == 3:  # secp256k1 case
        # closed form: a^((p + 1) / 4)
        r = pow(a, (p + 1) >> 2, p)
    elif p % 8 == 5:
        r = pow(a, (p + 3) >> 3, p)
        if r * r % p != a:
            r = r * pow(2, p >> 2, p) % p
    else:
        r = tonelli(a, p)

    if r * r % p != a:
        raise BitAuthValueError(f"no root for {_fmt(a)} mod {_fmt(p)}")
    return r


def tonelli(a: int, p: int) -> int:
    """Return a square root (mod p) of a using Tonelli-Shanks."""

    a %= p
    if a == 0 or p == 2:
        return a

    if legendre_symbol(a, p) != 1:
        raise BitAuthValueError(f"no root for {_fmt(a)} mod {_fmt(p)}")

    # p - 1 = q * 2^s, with q odd
    q, s = p - 1, 0
    while q & 1 == 0:
        s += 1
        q >>= 1

    # z is a quadratic non-residue
    z = 2
    while legendre_symbol(z, p) != -1:
        z += 1

    c = pow(z, q, p)
    r = pow(a, (q + 1) >> 1, p)
    t = pow(a, q, p)
    while t != 1:
        # lowest i such that t^(2^i) = 1
        i, t2i = 1, t * t % p
        while t2i != 1:
            i += 1
            t2i = t2i * t2i % p
        b = pow(c, 1 << (s - i - 1), p)
        r = r * b % p
        c = b * b % p
        t = t * c % p
        s = i
    return r
