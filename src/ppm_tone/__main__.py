import sys

from ppm_tone.cli import main

sys.exit(main())
