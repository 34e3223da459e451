"""Allow running pkglicense with ``python -m pkglicense``."""

import sys

from pkglicense.main import main

sys.exit(main())
