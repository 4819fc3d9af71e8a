"""
errors.py — failure taxonomy for the tone pipeline.

Every class carries the process exit status it maps to, so the process
boundary (pipeline_runner.run / the CLI) can translate an exception into a
status without a lookup table:

    1  header cannot be parsed
    2  header parses but the format tag is not P6
    3  missing / invalid mode parameter
    4  fewer pixel bytes than the header promises
"""

from __future__ import annotations


class ToneError(Exception):
    """Base class; `exit_status` is the process status for this failure."""
    exit_status: int = 1


class HeaderError(ToneError):
    exit_status = 1


class VersionError(ToneError):
    exit_status = 2


class ParamError(ToneError):
    exit_status = 3


class CorruptError(ToneError):
    exit_status = 4
