import sys

from wordsmith.cli import main

sys.exit(main())
