"""Native functions.

Host-implemented functions registered in the global environment when an
interpreter is created.


File: natives.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import time

from loxlang.callables import NativeFunction


def clock() -> float:
    """Seconds since the epoch, as a Lox number."""
    return time.time()


NATIVES = (
    NativeFunction("clock", 0, clock),
)
