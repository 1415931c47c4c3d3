import sys

from gy.cli.main import main

sys.exit(main())
