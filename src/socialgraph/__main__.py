import sys

from socialgraph.console import main

sys.exit(main())
