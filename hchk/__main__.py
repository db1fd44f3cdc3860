import sys

from hchk.cli import main

sys.exit(main())
