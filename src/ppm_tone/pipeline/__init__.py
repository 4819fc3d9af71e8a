"""
ppm_tone.pipeline
-----------------
Orchestration of one conversion:
    mode check → header → exact payload read → transform → header + payload out,
with a typed error per failure and an exit status per error.
"""
