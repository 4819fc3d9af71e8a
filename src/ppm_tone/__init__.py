"""
ppm_tone — classic edition
================================================
Small, end-to-end PPM tone pipeline organized as:
    header → transforms → pipeline → utils (metrics)
A binary colour PPM (P6) is read from a stream and re-emitted either as a
greyscale PGM (P5) or as a sepia-toned PPM (P6).

© 2025 Ali Pouya — PPM Tone Classic
"""

from ppm_tone.errors import CorruptError, HeaderError, ParamError, ToneError, VersionError
from ppm_tone.header.header_parser import HeaderRecord, format_header, parse_header
from ppm_tone.pipeline.pipeline_runner import ExitStatus, convert, parse_mode, run
from ppm_tone.transforms.tone_model import (
    ToneParams,
    TransformMode,
    apply_transform,
    to_greyscale,
    to_sepia,
)

__version__ = "1.0.0"

__all__ = [
    "CorruptError",
    "ExitStatus",
    "HeaderError",
    "HeaderRecord",
    "ParamError",
    "ToneError",
    "ToneParams",
    "TransformMode",
    "VersionError",
    "apply_transform",
    "convert",
    "format_header",
    "parse_header",
    "parse_mode",
    "run",
    "to_greyscale",
    "to_sepia",
]
