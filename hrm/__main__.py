"""``python -m hrm`` entry point."""

import sys

from hrm.cli import main

sys.exit(main())
