import sys

from yapoly.cli import main

sys.exit(main())
