import sys

from ghq_palette.cli.main import main

sys.exit(main())
