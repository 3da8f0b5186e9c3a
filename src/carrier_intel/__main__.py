"""Run the self-test battery: ``python -m carrier_intel``."""

import sys

from .selftest import main

sys.exit(main())
