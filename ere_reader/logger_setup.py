import logging
import os

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

CONSOLE_FORMAT = '%(filename)s - line %(lineno)d - %(levelname)s - %(message)s'
LOGFILE_FORMAT = '%(asctime)s - %(name)s - %(filename)s - line %(lineno)d - %(levelname)s - %(message)s'


def resolve_level(level):
    """
    Turn a level name ('info', 'DEBUG') or number into a logging level number.
    Unknown names raise ValueError.
    """
    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r}. Expected one of {', '.join(LOG_LEVELS)}")
    return getattr(logging, name)


def _file_handler(log_file, level, clear_previous_logs):
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w' if clear_previous_logs else 'a', encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
    return handler


def setup_logging(logger_name, log_file=None, level=logging.INFO, clear_previous_logs=False):
    """
    Configure the named logger for the ERE reader and return it.

    Child loggers (``ere_reader.text_cleaner``, ``ere_reader.file_pairer``...) propagate to
    it, so configuring ``ere_reader`` once covers the whole package. Without ``log_file``
    only the console handler is attached. Under pytest everything below CRITICAL is dropped.
    """
    level = resolve_level(level)
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.propagate = False

    if os.getenv('PYTEST_CURRENT_TEST'):
        logger.setLevel(logging.CRITICAL)
        return logger

    logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        logger.addHandler(_file_handler(log_file, level, clear_previous_logs))

    return logger
