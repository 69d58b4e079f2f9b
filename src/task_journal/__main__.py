"""Allow running the journal with ``python -m task_journal``."""

import sys

from task_journal.cli import main

sys.exit(main())
