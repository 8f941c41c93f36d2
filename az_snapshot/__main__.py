import sys

from az_snapshot.cli import main

sys.exit(main())
