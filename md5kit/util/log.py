import logging
import sys

from md5kit.util.config import get_config

GR = '\033[32m'     # green
BU = '\033[34m'     # blue
RD = '\033[31m'     # red
CY = '\033[36m'     # cyan
YW = '\033[33m'     # yellow
X  = '\033[0m'      # reset

LEVEL_COLORS = {
    logging.DEBUG: CY,
    logging.INFO: GR,
    logging.WARNING: YW,
    logging.ERROR: RD,
    logging.CRITICAL: RD,
}

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATEFMT = '%Y-%m-%d %H:%M:%S'


class ColorFormatter(logging.Formatter):
    '''Wraps the level name in the ANSI colour for its level.'''

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, BU)
        original = record.levelname
        record.levelname = f'{color}{original}{X}'
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(level: str | int | None = None, color: bool | None = None, stream = None) -> logging.Logger:
    '''
    Attach a stream handler to the `md5kit` logger.

    Parameters:
    -----------
    level : str | int | None
        Logging level; defaults to the configured `log_level`.

    color : bool | None
        Colour level names; defaults to the configured `log_color`.

    stream : file-like | None
        Destination, stderr by default.

    Returns:
    --------
    logging.Logger
        The configured package logger.
    '''
    config = get_config()
    level = config['log_level'] if level is None else level
    color = config['log_color'] if color is None else color

    handler = logging.StreamHandler(stream or sys.stderr)
    formatter_cls = ColorFormatter if color else logging.Formatter
    handler.setFormatter(formatter_cls(FORMAT, datefmt = DATEFMT))

    logger = logging.getLogger('md5kit')
    # replace any handler from an earlier call
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
