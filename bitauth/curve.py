#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve of prime order over Fp, and the secp256k1 constant.

The elliptic curve is the set of points (x, y)
that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
with x, y, a, and b in Fp (p being a prime),
together with a point at infinity INF.

Curve parameters are validated once, at construction time,
according to SEC 1 v.2 3.1.1.2.1; a Curve is never mutated afterwards:
the module level secp256k1 instance is shared by every function.

Scalar multiplication uses Jacobian coordinates to avoid
a modular inversion at each addition; it is not constant-time.
"""

from math import ceil, sqrt
from typing import Optional

from bitauth import libsecp256k1
from bitauth.alias import INF, INFJ, Integer, JacPoint, Point
from bitauth.exceptions import BitAuthValueError, InvalidPointError
from bitauth.number_theory import mod_inv, mod_sqrt
from bitauth.utils import hex_string, int_from_integer

HEX_THRESHOLD = 0xFFFFFFFF


def _fmt(i: int) -> str:
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def jac_from_aff(Q: Point) -> JacPoint:
    """Return the Jacobian representation of the affine point.

    The input point is assumed to be on curve.
    """
    return Q[0], Q[1], 1 if Q[1] else 0


class Curve:
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self, p: Integer, a: Integer, b: Integer, G: Point, n: Integer, h: int
    ) -> None:

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)
        n = int_from_integer(n)

        # 1. p is a prime (Fermat test as probabilistic primality test)
        if p < 3 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise BitAuthValueError(f"p is not prime: {_fmt(p)}")
        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        # 2. a and b are in [0, p-1]
        if not 0 <= a < p:
            raise BitAuthValueError(f"a not in 0..p-1: {_fmt(a)}")
        if not 0 <= b < p:
            raise BitAuthValueError(f"b not in 0..p-1: {_fmt(b)}")
        # 3. 4*a^3 + 27*b^2 ≠ 0 (mod p)
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise BitAuthValueError("zero discriminant")
        self._a = a
        self._b = b

        # 4. G is on curve and is not INF
        if len(G) != 2:
            raise BitAuthValueError("generator must a be a sequence[int, int]")
        self.G = int_from_integer(G[0]), int_from_integer(G[1])
        if self.G[1] == 0:
            raise BitAuthValueError("INF point cannot be a generator")
        if not self.is_on_curve(self.G):
            raise BitAuthValueError("generator is not on the curve")
        self.GJ = self.G[0], self.G[1], 1

        # 5. n is prime, within Hasse bounds, and n*G = INF
        if n < 2 or n % 2 == 0 or pow(2, n - 1, n) != 1:
            raise BitAuthValueError(f"n is not prime: {_fmt(n)}")
        delta = int(2 * sqrt(p))
        if h < 2 and not p + 1 - delta <= n <= p + 1 + delta:
            raise BitAuthValueError(f"n not in p+1-delta..p+1+delta: {_fmt(n)}")
        if _mult_jac(n, self.GJ, self)[2] != 0:
            raise BitAuthValueError(f"n is not the group order: {_fmt(n)}")
        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8
        self.h = h

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return (self.p, self._a, self._b, self.G, self.n, self.h) == (
            other.p,
            other._a,
            other._b,
            other.G,
            other.n,
            other.h,
        )

    def __hash__(self) -> int:
        return hash((self.p, self._a, self._b, self.G, self.n, self.h))

    # Jacobian group law, points are assumed to be on curve

    def add_jac(self, Q: JacPoint, R: JacPoint) -> JacPoint:
        if Q[2] == 0:
            return R
        if R[2] == 0:
            return Q

        RZ2 = R[2] * R[2]
        QZ2 = Q[2] * Q[2]
        M = Q[0] * RZ2 % self.p
        N = R[0] * QZ2 % self.p
        T = Q[1] * RZ2 * R[2] % self.p
        U = R[1] * QZ2 * Q[2] % self.p

        if M == N:  # same affine x
            return self.double_jac(Q) if T == U else INFJ

        W = U - T
        V = N - M
        V2 = V * V
        V3 = V2 * V
        MV2 = M * V2
        X = (W * W - V3 - 2 * MV2) % self.p
        Y = (W * (MV2 - X) - T * V3) % self.p
        Z = (V * Q[2] * R[2]) % self.p
        return X, Y, Z

    def double_jac(self, Q: JacPoint) -> JacPoint:
        if Q[2] == 0 or Q[1] == 0:
            return INFJ

        QZ2 = Q[2] * Q[2]
        QY2 = Q[1] * Q[1]
        W = 3 * Q[0] * Q[0] + self._a * QZ2 * QZ2
        V = 4 * Q[0] * QY2
        X = W * W - 2 * V
        Y = W * (V - X) - 8 * QY2 * QY2
        Z = 2 * Q[1] * Q[2]
        return X % self.p, Y % self.p, Z % self.p

    def aff_from_jac(self, Q: JacPoint) -> Point:
        if Q[2] == 0:  # Infinity point in Jacobian coordinates
            return INF

        Z2 = Q[2] * Q[2]
        x = Q[0] * mod_inv(Z2, self.p)
        y = Q[1] * mod_inv(Z2 * Q[2], self.p)
        return x % self.p, y % self.p

    def x_aff_from_jac(self, Q: JacPoint) -> int:
        if Q[2] == 0:  # Infinity point in Jacobian coordinates
            raise InvalidPointError("INF has no x-coordinate")

        return Q[0] * mod_inv(Q[2] * Q[2], self.p) % self.p

    # curve equation

    def _y2(self, x: int) -> int:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        """Return the y coordinate from x, as in (x, y)."""
        if not 0 <= x < self.p:
            raise InvalidPointError(f"x-coordinate not in 0..p-1: {_fmt(x)}")
        try:
            return mod_sqrt(self._y2(x), self.p)
        except BitAuthValueError as e:
            raise InvalidPointError(f"invalid x-coordinate: {_fmt(x)}") from e

    def y_even(self, x: int) -> int:
        """Return the even affine y-coordinate associated to x."""
        root = self.y(x)
        return self.p - root if root % 2 else root

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve.

        INF is considered on curve; coordinates must be in [0, p-1].
        """
        if len(Q) != 2:
            raise InvalidPointError("point must be a tuple[int, int]")
        if Q[1] == 0:  # Infinity point in affine coordinates
            return True
        if not 0 <= Q[0] < self.p or not 0 < Q[1] < self.p:
            return False
        return self._y2(Q[0]) == Q[1] * Q[1] % self.p

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise InvalidPointError("point not on curve")


def _mult_jac(m: int, Q: JacPoint, ec: Curve) -> JacPoint:
    """Scalar multiplication of a curve point in Jacobian coordinates.

    'double & add' algorithm, 'right-to-left' binary decomposition of m.
    The input point is assumed to be on curve.
    """

    if m < 0:
        raise BitAuthValueError(f"negative m: {hex(m)}")

    R = INFJ
    while m > 0:
        if m & 1:
            R = ec.add_jac(R, Q)
        m >>= 1
        Q = ec.double_jac(Q)
    return R


def _double_mult(u: int, HJ: JacPoint, v: int, QJ: JacPoint, ec: Curve) -> JacPoint:
    """Double scalar multiplication (u*H + v*Q).

    Shamir-Strauss algorithm: a single 'double & add' loop
    over the 'left-to-right' binary decomposition of both coefficients,
    with H+Q precomputed for when both binary digits are 1.
    """

    if u < 0:
        raise BitAuthValueError(f"negative first coefficient: {hex(u)}")
    if v < 0:
        raise BitAuthValueError(f"negative second coefficient: {hex(v)}")

    T = [INFJ, HJ, QJ, ec.add_jac(HJ, QJ)]
    nbits = max(u.bit_length(), v.bit_length())
    R = INFJ
    for i in reversed(range(nbits)):
        R = ec.double_jac(R)
        R = ec.add_jac(R, T[(u >> i & 1) + 2 * (v >> i & 1)])
    return R


def mult(
    m: Integer, Q: Optional[Point] = None, ec: Optional[Curve] = None
) -> Point:
    """Point multiplication, implemented using 'double and add'.

    Computations use Jacobian coordinates and binary decomposition of m;
    m is reduced mod n. Q defaults to the generator G.
    """
    ec = secp256k1 if ec is None else ec
    Q = ec.G if Q is None else Q
    ec.require_on_curve(Q)
    m = int_from_integer(m) % ec.n
    if m == 0:
        return INF

    if Q == ec.G and ec == secp256k1 and libsecp256k1.is_available():
        return libsecp256k1.mult_generator(m)

    return ec.aff_from_jac(_mult_jac(m, jac_from_aff(Q), ec))


# SEC 2 v.2 section 2.4.1
secp256k1 = Curve(
    "FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFE FFFFFC2F",
    0,
    7,
    (
        "79BE667E F9DCBBAC 55A06295 CE870B07 029BFCDB 2DCE28D9 59F2815B 16F81798",
        "483ADA77 26A3C465 5DA4FBFC 0E1108A8 FD17B448 A6855419 9C47D08F FB10D4B8",
    ),
    "FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFE BAAEDCE6 AF48A03B BFD25E8C D0364141",
    1,
)
