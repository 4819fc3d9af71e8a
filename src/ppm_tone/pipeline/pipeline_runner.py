"""
pipeline_runner.py — decode → transform → encode, once per run.

WHAT THIS MODULE DOES
---------------------
Wires the stages together and owns both pixel buffers:
  1) Validate the mode parameter (before any stream is touched)
  2) Parse the header; only P6 (binary RGB, 8-bit) is accepted
  3) Read exactly width*height*3 payload bytes; fewer is a corrupt input
  4) Apply the greyscale or sepia transform
  5) Emit P5 (greyscale) or P6 (sepia) header with the same size/max value,
     followed by the converted payload

Every failure is immediately fatal: there are no retries and no partial
output. All checks complete before the first output byte is written.

`convert` raises the typed errors from ppm_tone.errors; `run` is the process
boundary that logs them and maps each one to an ExitStatus.

© 2025 Ali Pouya — PPM Tone (classic edition)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
import logging
from pathlib import Path
from typing import BinaryIO

from ppm_tone.errors import CorruptError, HeaderError, ParamError, ToneError, VersionError
from ppm_tone.header.header_parser import HeaderRecord, format_header, parse_header
from ppm_tone.transforms.tone_model import (
    ToneParams,
    TransformMode,
    apply_transform,
    output_channels,
    output_magic,
)

logger = logging.getLogger(__name__)

PPM_COLOR_VERSION = 6

USAGE = (
    "Usage: ppm-tone <1|2>\n"
    "    1 - convert to greyscale\n"
    "    2 - convert to sepia\n"
)


class ExitStatus(IntEnum):
    SUCCESS = 0
    HEADER_ERROR = HeaderError.exit_status
    VERSION_ERROR = VersionError.exit_status
    PARAM_ERROR = ParamError.exit_status
    CORRUPT_ERROR = CorruptError.exit_status


# -----------------------------------------------------------------------------
# Steps
# -----------------------------------------------------------------------------
def parse_mode(value) -> TransformMode:
    """
    Turn the external mode parameter into a TransformMode.

    Accepts a TransformMode, an int, or a string holding a decimal integer.
    Anything else, or a value outside {1, 2}, raises ParamError.
    """
    if isinstance(value, bool):
        raise ParamError(f"Invalid mode {value!r}\n{USAGE}")
    if isinstance(value, str):
        # plain ASCII digits only: no sign, padding or unicode numerals
        if not (value.isascii() and value.isdigit()):
            raise ParamError(f"Invalid mode {value!r}\n{USAGE}")
        value = int(value)
    if not isinstance(value, int):
        raise ParamError(f"Invalid mode {value!r}\n{USAGE}")
    try:
        return TransformMode(value)
    except ValueError:
        raise ParamError(f"Unsupported mode {value}\n{USAGE}") from None


def read_header(stream: BinaryIO) -> HeaderRecord:
    """Parse the header and insist on the binary RGB (P6) variant."""
    header = parse_header(stream)
    if header.format_version != PPM_COLOR_VERSION:
        raise VersionError(f"Header version must be P6, got {header.magic}")
    return header


def read_pixels(stream: BinaryIO, header: HeaderRecord) -> bytes:
    """
    Read exactly header.payload_size bytes.

    Short reads are retried until EOF, so pipes and unbuffered streams behave
    like regular files. Fewer bytes than promised raises CorruptError.
    """
    size = header.payload_size
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    if remaining > 0:
        raise CorruptError(
            f"Corrupt input file: expected {size} pixel bytes, got {size - remaining}"
        )
    return b"".join(chunks)


# -----------------------------------------------------------------------------
# Full pipeline
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Conversion:
    """What one run produced: input header, mode, input and output payloads."""
    header: HeaderRecord
    mode: TransformMode
    rgb: bytes
    pixels: bytes


def convert(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    mode,
    params: ToneParams | None = None,
) -> Conversion:
    """
    Run one conversion.

    Parameters
    ----------
    input_stream : binary stream positioned at the start of a P6 image
    output_stream : binary stream receiving the converted image
    mode : TransformMode | int | str (1 = greyscale, 2 = sepia)
    params : optional ToneParams override

    Returns
    -------
    Conversion

    Raises
    ------
    ParamError, HeaderError, VersionError, CorruptError
    """
    transform = parse_mode(mode)
    header = read_header(input_stream)
    rgb = read_pixels(input_stream, header)

    out = apply_transform(rgb, header.pixel_count, transform, params)

    output_stream.write(
        format_header(output_magic(transform), header.width, header.height, header.max_value)
    )
    output_stream.write(out)
    output_stream.flush()

    logger.info(
        "[OK] %s %dx%d -> %s, %d payload bytes written",
        transform.name.lower(), header.width, header.height,
        output_magic(transform), len(out),
    )
    return Conversion(header=header, mode=transform, rgb=rgb, pixels=out)


def run(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    mode,
    preview: str | Path | None = None,
) -> ExitStatus:
    """
    Process-boundary wrapper around `convert`.

    Returns ExitStatus.SUCCESS or the status of the first error raised; the
    error message goes to the log (stderr in the CLI), never to output_stream.
    With `preview`, a before/after figure is saved there after a successful
    conversion.
    """
    try:
        result = convert(input_stream, output_stream, mode)
    except ToneError as exc:
        logger.error("%s", exc)
        return ExitStatus(exc.exit_status)

    if preview is not None:
        # matplotlib is only pulled in when a preview is requested
        from ppm_tone.utils.metrics_module import plot_before_after, tone_summary

        # the image is already written: a failed preview must not change the status
        try:
            path = plot_before_after(result.rgb, result.pixels, result.header, result.mode, preview)
        except (OSError, ValueError) as exc:
            logger.warning("preview not saved to %s: %s", preview, exc)
        else:
            logger.info("[OK] preview saved to %s", path)
        logger.info("output channels: %s", tone_summary(result.pixels, output_channels(result.mode)))
    return ExitStatus.SUCCESS
