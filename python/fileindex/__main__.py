import sys

from .indexer import main

sys.exit(main())
