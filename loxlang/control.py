"""Control outcomes.

Statement execution returns ``None`` when it completes normally, or one of
the outcomes below when control must leave early. Each outcome is consumed
by exactly one boundary: :class:`ReturnControlFlow` by the function call
that is running, :class:`BreakLoop` by the innermost loop. Blocks and
branches only pass them up.


File: control.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReturnControlFlow:
    """
    Control flow handling for return statements.
    """
    value: object = None


class BreakLoop:
    """
    Control flow handling for break statements.
    """

    def __repr__(self) -> str:
        return "BreakLoop()"


BREAK = BreakLoop()
