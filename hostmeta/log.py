"""Root logging setup for the hostmeta command"""

import logging

FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def configure_logging(level='INFO', stream=None):
    """Send every log record at ``level`` or above to ``stream``

    Any handlers already on the root logger are replaced, so calling this twice leaves a single handler.

    Args:
        level (str): One of LEVELS, case insensitive
        stream (file, optional): Where records are written, defaults to stderr

    Returns:
        logging.Handler: The handler that was installed

    Raises:
        ValueError: ``level`` is not a known level name

    """
    if level.upper() not in LEVELS:
        raise ValueError('unknown log level {0!r}'.format(level))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))

    return handler
