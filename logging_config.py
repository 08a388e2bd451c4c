# logging_config.py
import logging

from config import LOG_LEVEL

def setup_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )
