import sys

from claims_timeline.cli.main import main

sys.exit(main())
