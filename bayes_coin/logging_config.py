import logging
import logging.handlers
import os

# Constants
MAX_LOG_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MB
MAX_LOG_BACKUP_COUNT: int = 9  # 10 files total

_installed_handlers = []


def setup_logging(level: str = "INFO", log_file: str = None) -> None:
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Drop handlers from an earlier call so messages are not duplicated
    while _installed_handlers:
        handler = _installed_handlers.pop()
        logger.removeHandler(handler)
        handler.close()

    # Console Handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level.upper())
    console_formatter = logging.Formatter("%(asctime)s - %(message)s")
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    # File Handler
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_FILE_SIZE, backupCount=MAX_LOG_BACKUP_COUNT
        )
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    # Third-party libraries are chatty at DEBUG
    for name in ("jax", "matplotlib", "PIL"):
        logging.getLogger(name).setLevel(logging.WARNING)
