#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `bitauth.number_theory` module."

import secrets

import pytest

from bitauth.curve import secp256k1
from bitauth.exceptions import BitAuthValueError
from bitauth.number_theory import legendre_symbol, mod_inv, mod_sqrt, tonelli, xgcd

p = secp256k1.p
n = secp256k1.n

# field sizes of the test curves, one for each mod_sqrt branch
P_3_MOD_4 = (3, 7, 11, 19, 23, 31, 43)
P_5_MOD_8 = (5, 13, 29, 37, 53)
P_1_MOD_8 = (17, 41, 73, 97, 113)


def test_xgcd() -> None:
    for a, b in ((240, 46), (46, 240), (17, 5), (p, 12345), (n, p)):
        g, x, y = xgcd(a, b)
        assert a * x + b * y == g


def test_mod_inv() -> None:
    for m in (p, n):
        for a in (1, 2, m - 1, 1 + secrets.randbelow(m - 1)):
            assert a * mod_inv(a, m) % m == 1
            assert mod_inv(a + m, m) == mod_inv(a, m)
        with pytest.raises(BitAuthValueError, match="no inverse for 0 mod "):
            mod_inv(0, m)
        with pytest.raises(BitAuthValueError, match="no inverse for 0 mod "):
            mod_inv(m, m)

    # non-prime modulus
    assert mod_inv(3, 10) == 7
    with pytest.raises(BitAuthValueError, match="no inverse for 4 mod 10"):
        mod_inv(4, 10)


def test_legendre_symbol() -> None:
    for q in P_3_MOD_4 + P_5_MOD_8 + P_1_MOD_8:
        squares = {i * i % q for i in range(1, q)}
        assert legendre_symbol(0, q) == 0
        for a in range(1, q):
            assert legendre_symbol(a, q) == (1 if a in squares else -1)


def test_mod_sqrt_small_primes() -> None:
    for q in P_3_MOD_4 + P_5_MOD_8 + P_1_MOD_8:
        squares = {i * i % q for i in range(q)}
        for a in range(q):
            if a in squares:
                root = mod_sqrt(a, q)
                assert root * root % q == a
                assert mod_sqrt(a + q, q) in (root, (q - root) % q)
                assert tonelli(a, q) in (root, (q - root) % q)
            else:
                with pytest.raises(BitAuthValueError, match="no root for "):
                    mod_sqrt(a, q)
                with pytest.raises(BitAuthValueError, match="no root for "):
                    tonelli(a, q)


def test_mod_sqrt_secp256k1() -> None:
    # closed form: p = 3 mod 4
    assert p % 4 == 3

    x_G, y_G = secp256k1.G
    y2 = (x_G * x_G * x_G + 7) % p
    assert mod_sqrt(y2, p) in (y_G, p - y_G)

    for _ in range(8):
        a = secrets.randbelow(p)
        root = mod_sqrt(a * a, p)
        assert root in (a, p - a)

    # the closed form candidate is verified: -1 is not a square
    with pytest.raises(BitAuthValueError, match="no root for "):
        mod_sqrt(p - 1, p)
    a = 1 + secrets.randbelow(p - 1)
    with pytest.raises(BitAuthValueError, match="no root for "):
        mod_sqrt(-(a * a), p)


def test_tonelli() -> None:
    # https://rosettacode.org/wiki/Tonelli-Shanks_algorithm#Python
    ttest = [
        (10, 13),
        (56, 101),
        (1030, 10009),
        (44402, 100049),
        (665820697, 1000000009),
        (881398088036, 1000000000039),
        (41660815127637347468140745042827704103445750172002, 10**50 + 577),
    ]
    for a, q in ttest:
        root = tonelli(a, q)
        assert a == root * root % q
        root = mod_sqrt(a, q)
        assert a == root * root % q

    assert tonelli(0, 17) == 0
