import sys

from flexid.cli import main

sys.exit(main())
