"""Allow ``python -m valuetree`` to run the demonstration."""

import sys

from .demo import main

sys.exit(main())
