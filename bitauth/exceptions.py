#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are only meant to discriminate between Exceptions being raised
by bitauth from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the bitauth versions are derived.

The three ValueError refinements map the failure kinds of the protocol:

* FormatError: malformed hex, Base58, or DER syntax (or size)
* InvalidPointError: coordinates not satisfying the curve equation
* OutOfRangeError: scalar not in [1, n-1]
"""


class BitAuthValueError(ValueError):
    pass


class BitAuthTypeError(TypeError):
    pass


class BitAuthRuntimeError(RuntimeError):
    pass


class FormatError(BitAuthValueError):
    pass


class InvalidPointError(BitAuthValueError):
    pass


class OutOfRangeError(BitAuthValueError):
    pass
