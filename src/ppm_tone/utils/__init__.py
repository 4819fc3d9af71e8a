"""
ppm_tone.utils
--------------
Diagnostics for converted images: channel statistics and matplotlib plots.
"""
