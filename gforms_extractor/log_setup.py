"""
Logging setup shared by the command line and MCP entry points.
"""

import logging
import tempfile
from pathlib import Path

LOG_DIR_NAME = '.gforms-extractor'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
NOISY_LOGGERS = ['playwright._impl', 'asyncio', 'urllib3']


def get_log_file(name: str) -> Path:
    """Log file path under the user's home, or the temp dir when that isn't writable."""
    try:
        log_dir = Path.home() / LOG_DIR_NAME
        log_dir.mkdir(exist_ok=True)
        return log_dir / f'{name}.log'
    except (PermissionError, OSError):
        return Path(tempfile.gettempdir()) / f'gforms_extractor_{name}.log'


def configure_logging(name: str, level: int = logging.INFO) -> Path:
    log_file = get_log_file(name)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    # Keep our own logs verbose without the library chatter
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return log_file
