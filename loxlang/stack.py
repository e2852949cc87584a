"""Host stack limits.

Both the parser and the interpreter recurse once or more per level of
source nesting and per Lox call. Python's default recursion limit of 1000
frames only allows about a hundred nested Lox calls, so parsing and
execution run under a raised limit. The previous limit is restored
afterwards.


File: stack.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys
from contextlib import contextmanager

RECURSION_LIMIT = 10_000


@contextmanager
def deep_recursion(limit: int = RECURSION_LIMIT):
    """
    Raise the interpreter's recursion limit to at least ``limit`` for the
    duration of the ``with`` block.
    """
    previous = sys.getrecursionlimit()
    if previous < limit:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
