import sys

from rotate_towards.cli import main

sys.exit(main())
