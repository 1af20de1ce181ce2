import logging

from bloglist.utils import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging():
    """Configure the root logger once; request lines are INFO so tests stay quiet."""
    level = logging.WARNING if config.ENVIRONMENT == "test" else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
