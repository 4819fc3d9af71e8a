"""
ppm_tone.transforms
-------------------
Per-pixel colour transforms on interleaved 8-bit RGB buffers:
    RGB → luma (greyscale, 1 byte/pixel)
    RGB → sepia (3 bytes/pixel, clamped at 255).
Pure numpy; no I/O.
"""
