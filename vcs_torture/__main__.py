import sys

from vcs_torture.cli.main import main

sys.exit(main())
