import sys

from stkeys.main import main

sys.exit(main())
