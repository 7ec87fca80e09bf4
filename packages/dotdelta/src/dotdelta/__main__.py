import sys

from dotdelta.cli import main

sys.exit(main())
