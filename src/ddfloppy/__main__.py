import sys

from ddfloppy.main import main

sys.exit(main())
