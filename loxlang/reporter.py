"""Diagnostics sink for Lox.

The :class:`ErrorReporter` formats scan, parse and runtime errors, writes
them to standard error and remembers whether any occurred. The flags gate
execution (nothing runs after a static error) and drive the exit code of the
command-line interface.


File: reporter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class ReportedError:
    """A single diagnostic recorded by the reporter."""

    line: int
    where: str
    message: str
    runtime: bool = False

    def __str__(self) -> str:
        if self.runtime:
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ErrorReporter:
    """
    Collects and prints diagnostics.
    """
    def __init__(self, stream=None, echo: bool = True):
        """
        Initialize the reporter.

        Parameters:
            stream: File-like object to write to. Defaults to ``sys.stderr``
                at the time of writing.
            echo (bool): When False, diagnostics are only recorded.
        """
        self.stream = stream
        self.echo = echo
        self.errors: list[ReportedError] = []
        self.had_error = False
        self.had_runtime_error = False

    def report(self, line: int, where: str, message: str) -> None:
        """
        Record a static (scan or parse) error.
        """
        self._emit(ReportedError(line, where, message))
        self.had_error = True

    def static_error(self, error) -> None:
        """
        Record a :class:`ScanException` or :class:`ParseException`.
        """
        self.report(error.line, error.where, error.message)

    def runtime_error(self, error) -> None:
        """
        Record a :class:`LoxRuntimeException`.
        """
        self._emit(ReportedError(error.line, "", error.message, runtime=True))
        self.had_runtime_error = True

    def reset(self) -> None:
        """
        Clear the error flags, e.g. between interactive inputs.
        """
        self.had_error = False
        self.had_runtime_error = False

    def _emit(self, entry: ReportedError) -> None:
        self.errors.append(entry)
        if self.echo:
            print(entry, file=self.stream or sys.stderr)
