import logging
import os
import sys
from datetime import datetime
from typing import Optional

from hanzi_backend.config import get_logging_config

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: Optional[str] = None, level: Optional[str] = None, console: bool = True) -> logging.Logger:
    """Configure the root logger with a timestamped UTF-8 log file and a console handler."""
    config = get_logging_config()
    log_dir = log_dir or config['log_dir']
    level_name = (level or config['level']).upper()

    _logger = logging.getLogger()
    _logger.setLevel(getattr(logging, level_name, logging.INFO))
    _logger.handlers.clear()

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    file_handler = logging.FileHandler(
        os.path.join(log_dir, f"hanzi_manager_{timestamp}.log"), encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _logger.addHandler(file_handler)

    if console:
        # stderr keeps stdout free for --format json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler.setLevel(logging.WARNING)
        _logger.addHandler(console_handler)

    return _logger
