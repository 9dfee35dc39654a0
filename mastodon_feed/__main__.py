"""Allow running the server with ``python -m mastodon_feed``."""

import sys

from mastodon_feed.server import main

if __name__ == "__main__":
    sys.exit(main())
