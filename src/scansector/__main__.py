import sys

from scansector.main import main

sys.exit(main())
