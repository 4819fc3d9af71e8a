"""
cli.py — command-line entry point: stdin (P6) → stdout (P5 greyscale | P6 sepia)

WHAT THIS FILE DOES
-------------------
1) Parses the single mode parameter (1 = greyscale, 2 = sepia)
2) Configures logging on stderr (stdout carries image bytes only)
3) Runs the pipeline on the binary stdin/stdout streams
4) Exits with the pipeline's status:
     0 ok | 1 header error | 2 not P6 | 3 bad parameter | 4 truncated input

USAGE
-----
  ppm-tone 1 < photo.ppm > photo_grey.pgm
  ppm-tone 2 < photo.ppm > photo_sepia.ppm
  python -m ppm_tone 2 --verbose --preview outputs/preview.png < photo.ppm > out.ppm

NOTES
-----
• argparse normally exits with status 2 on a usage error, which would collide
  with the "not P6" status; usage errors are therefore raised as ParamError.
• The detailed math lives in the stage modules; keep this file light.

© 2025 Ali Pouya — PPM Tone Classic
"""

from __future__ import annotations
import argparse
import logging
import sys

from ppm_tone.errors import ParamError
from ppm_tone.pipeline.pipeline_runner import USAGE, ExitStatus, run

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


class _ToneArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage problems (including -h) as ParamError."""

    def error(self, message):
        raise ParamError(f"{message}\n{USAGE}")


def parse_args(argv=None) -> argparse.Namespace:
    """Small CLI: one positional mode plus diagnostics switches."""
    # no -h/--help: stdout carries image bytes and every other arity is a usage error
    p = _ToneArgumentParser(
        prog="ppm-tone",
        description="Convert a binary PPM (P6) on stdin to greyscale or sepia on stdout",
        add_help=False,
    )
    p.add_argument("mode", help="1 = greyscale (P5 output) | 2 = sepia (P6 output)")
    p.add_argument("--verbose", action="store_true", help="log progress to stderr")
    p.add_argument("--preview", default=None,
                   help="save an input/output comparison figure (PNG) to this path")
    return p.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    """
    Attach one stderr handler to the package logger.

    Re-running replaces the previous handler, so repeated calls (tests, embedding)
    neither duplicate output nor keep a stale stderr.
    """
    pkg = logging.getLogger("ppm_tone")
    for h in list(pkg.handlers):
        if getattr(h, "_ppm_tone_cli", False):
            pkg.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ppm_tone_cli = True
    pkg.addHandler(handler)
    pkg.setLevel(logging.INFO if verbose else logging.WARNING)


def main(argv=None, stdin=None, stdout=None) -> int:
    """
    Run the converter and return the exit status.

    stdin / stdout default to the process's binary streams; tests pass BytesIO.
    """
    try:
        args = parse_args(argv)
    except ParamError as exc:
        configure_logging(False)
        logger.error("%s", exc)
        return int(ExitStatus.PARAM_ERROR)

    configure_logging(args.verbose)
    status = run(
        stdin if stdin is not None else sys.stdin.buffer,
        stdout if stdout is not None else sys.stdout.buffer,
        args.mode,
        preview=args.preview,
    )
    return int(status)


if __name__ == "__main__":
    sys.exit(main())
