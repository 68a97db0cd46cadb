import sys

from textfst.cli import main


sys.exit(main())
