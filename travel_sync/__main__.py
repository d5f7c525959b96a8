# travel_sync/__main__.py

import logging

import uvicorn

from travel_sync.config import HOST, LOG_LEVEL, PORT
from travel_sync.main import app

logger = logging.getLogger("travel_sync")


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logger.info("Europe Travel Map is running on port %s", PORT)
    # uvicorn turns SIGINT/SIGTERM into a lifespan shutdown, which closes the store
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
