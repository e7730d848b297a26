import sys

from starbattle.main import main

sys.exit(main())
