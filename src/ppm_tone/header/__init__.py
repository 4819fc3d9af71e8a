"""
ppm_tone.header
---------------
Minimal PPM/PGM header handling:
    stream → "P<version> <width> <height> <max>" → HeaderRecord,
and the inverse rendering used when re-emitting the converted image.
"""
