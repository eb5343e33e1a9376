import sys

from sipdocs.cli import main

sys.exit(main())
