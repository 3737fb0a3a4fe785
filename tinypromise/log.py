# -*- coding: utf-8 -*-

"""Configuration module of the logs.

The tinypromise modules only create loggers (``logging.getLogger(__name__)``)
and never configure them. This module configures the python ``logging``
module for applications and tests wanting to see what the promises and the
scheduler do.

On console output, if the system supports it, logs entries will be colorized.
"""

import logging
import sys

from . import config


def _support_color_output(stream):
    """Try to guess if the stream supports color term code.

    Returns:
        boolean: True if we are sure the output supports color; False otherwise
    """
    if hasattr(stream, 'isatty') and stream.isatty():
        if not sys.platform.startswith('win'):
            return True
    return False


class ColoredFormatter(logging.Formatter):
    """Formatter who display colored messages using ANSI escape codes."""

    _colors = {
        'RESET': '\033[0m',
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m',
        'NAME': '\033[36m',
        'DATE': '\033[30;1m',
        'EXCEPTION_NAME': '\033[31;1m',
        'EXCEPTION_STR': '\033[37;1m'
    }

    def _colorize(self, msg, color):
        return self._colors.get(color, '') + msg + self._colors.get('RESET')

    def formatTime(self, record, datefmt=None):
        result = logging.Formatter.formatTime(self, record, datefmt)
        return self._colorize(result, 'DATE')

    def formatException(self, ei):
        msg = logging.Formatter.formatException(self, ei)
        msg_lines = msg.split('\n')
        last_line = msg_lines[-1]
        result = '\n'.join(msg_lines[:-1]) + '\n'
        result += self._colorize(last_line.split(':')[0], 'EXCEPTION_NAME')
        result += ':' + self._colorize(':'.join(last_line.split(':')[1:]),
                                       'EXCEPTION_STR')
        return result

    def format(self, record):
        # The record is shared between handlers: it must not be modified.
        record = logging.makeLogRecord(record.__dict__)
        record.name = self._colorize(record.name, 'NAME')
        record.levelname = self._colorize(record.levelname, record.levelname)
        return logging.Formatter.format(self, record)


class Context(object):
    """Context class used to install and remove the log handler."""

    date_format = '%Y-%m-%d %H:%M:%S'
    string_format = '%(asctime)s %(levelname)-7s %(name)s - %(message)s'

    def __init__(self, stream=None):
        """Prepare a new log context.

        Args:
            stream (file, optional): output of the logs. default to
                sys.stderr.
        """
        self._stream = stream
        self._handler = None

    def __enter__(self):
        """Install the handler and apply the levels set in the config."""
        stream = self._stream or sys.stderr
        self._handler = logging.StreamHandler(stream)

        if _support_color_output(stream):
            formatter = ColoredFormatter(fmt=self.string_format,
                                         datefmt=self.date_format)
        else:
            formatter = logging.Formatter(fmt=self.string_format,
                                          datefmt=self.date_format)
        self._handler.setFormatter(formatter)
        logging.getLogger().addHandler(self._handler)

        set_debug_mode(config.get('debug_mode'))
        set_logs_level(config.get('log_levels'))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Remove the handler installed by ``__enter__()``."""
        logging.getLogger(__name__).debug('Stop logger ...')
        logging.getLogger().removeHandler(self._handler)
        self._handler.close()
        self._handler = None


def set_logs_level(levels):
    """Configure a fine-grained log levels for the different modules.

    Args:
        levels (dict): A dict associating a module name and a log
            level. A log level can be a number or a str representing one of the
            logging levels (DEBUG, WARNING, ...). The level name will be
            converted to uppercase.
            Invalids values will be ignored.

    Example:

        >>> # Log every flush, but only the errors of the promises.
        >>> set_logs_level({'tinypromise.scheduler': 'debug',
        ...                 'tinypromise.promise': 'error'})
    """
    for (module, level) in levels.items():
        try:
            if isinstance(level, str):
                level = int(level) if level.isdigit() else level.upper()
            logging.getLogger(module).setLevel(level)
        except (TypeError, ValueError):
            logger = logging.getLogger(__name__)
            logger.warning('Invalid log level "%s" for logger "%s". '
                           'Will be ignored.',
                           level, module)


def set_debug_mode(debug):
    """Set, or unset the debug log level.

    Args:
        debug (boolean): if True, the tinypromise log level will be set to
            DEBUG. If False, it will be set to INFO.
    """
    if debug:
        logging.getLogger('tinypromise').setLevel(logging.DEBUG)
    else:
        logging.getLogger('tinypromise').setLevel(logging.INFO)


def reset():
    """Reset the root logger (remove handlers and filters)."""
    logger = logging.getLogger()

    for h in logger.handlers[:]:
        logger.removeHandler(h)
    for f in logger.filters[:]:
        logger.removeFilter(f)
