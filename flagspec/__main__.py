import sys

from flagspec.cli import main

sys.exit(main())
