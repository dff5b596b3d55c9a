import sys

from schedcopy.cli import main

sys.exit(main())
