#!/usr/bin/env python3

# Copyright (C) The bitauth developers
#
# This file is part of bitauth. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of bitauth including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the bitauth package."

name = "bitauth"
__version__ = "2024.3.1"
__author__ = "The bitauth developers"
__author_email__ = "devs@bitauth.org"
__copyright__ = "Copyright (C) 2014-2024 The bitauth developers"
__license__ = "MIT License"
