"""Allow ``python -m ipcamsd``."""

import sys

from ipcamsd.core import main

sys.exit(main())
