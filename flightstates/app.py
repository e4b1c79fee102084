"""
Console entry point.

Fetches world-wide state vectors, waits out the rate limit, then fetches
the states above Switzerland and prints both counts.

Usage:
    python -m flightstates.app
"""

import logging
import sys
import time

from flightstates.client import OpenSkyClient
from flightstates.config import load_config
from flightstates.exceptions import OpenSkyError
from flightstates.models import BoundingBox

SWITZERLAND = BoundingBox(45.8389, 47.8229, 5.9962, 10.5226)

logger = logging.getLogger(__name__)


def main() -> int:
    config = load_config()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    with OpenSkyClient.from_config(config.opensky) as client:
        try:
            world_wide = client.get_states()
            time.sleep(config.opensky.rate_limit_seconds)
            switzerland = client.get_states(bbox=SWITZERLAND)
        except OpenSkyError as e:
            logger.error(f'Could not fetch state vectors: {e}')
            return 1

    if world_wide is None or switzerland is None:
        logger.warning('Rate limited, no new data')
        return 1

    print(f'{len(switzerland)} states in Switzerland area, and '
          f'{len(world_wide)} states world-wide')
    return 0


if __name__ == '__main__':
    sys.exit(main())
