import sys

from asciimoon.cli import main

sys.exit(main())
