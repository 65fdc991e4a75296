import sys

from leaderboard.server import main

sys.exit(main())
