"""
Logging setup shared by the command line tools.
"""

import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level=logging.INFO):
    """Configure root logging once for a command line entry point"""
    logging.basicConfig(level=level, format=LOG_FORMAT)
