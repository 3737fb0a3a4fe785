# -*- coding: utf-8 -*-

import io
import logging
import sys

from tinypromise import config
from tinypromise.log import (ColoredFormatter, Context, set_debug_mode,
                             set_logs_level)

"""### TEST CASES ###
    ColoredFormatter._colorize
    ColoredFormatter.formatException
    ColoredFormatter.format

    Context installs and removes its handler
    Context applies the config

    set_debug_mode true
    set_debug_mode false

    set_logs_level with valid and invalid levels
"""

colorFormater = ColoredFormatter()


class TestLogFormating(object):

    def test_colorize_DEBUG(self):
        assert colorFormater._colorize("plop", "DEBUG") == \
            ColoredFormatter._colors['DEBUG'] + "plop" + \
            ColoredFormatter._colors['RESET']

    def test_colorize_unknown_color(self):
        assert colorFormater._colorize("plop", "PLOP") == \
            "plop" + ColoredFormatter._colors['RESET']

    def test_format_exception(self):
        try:
            raise ValueError('invalid value')
        except ValueError:
            result = colorFormater.formatException(sys.exc_info())

        assert ColoredFormatter._colors['EXCEPTION_NAME'] + 'ValueError' in \
            result
        assert 'invalid value' in result

    def test_format_does_not_alter_record(self):
        record = logging.makeLogRecord({'name': 'tinypromise',
                                        'levelname': 'INFO',
                                        'msg': 'message'})
        formatter = ColoredFormatter(fmt='%(name)s %(message)s')
        result = formatter.format(record)

        assert ColoredFormatter._colors['NAME'] + 'tinypromise' in result
        assert record.name == 'tinypromise'
        assert record.levelname == 'INFO'


class TestContext(object):

    def teardown_method(self, method):
        config.reset()
        logging.getLogger('tinypromise').setLevel(logging.NOTSET)
        logging.getLogger('tinypromise.scheduler').setLevel(logging.NOTSET)

    def test_context_handler(self):
        stream = io.StringIO()
        root_logger = logging.getLogger()
        nb_handlers = len(root_logger.handlers)

        with Context(stream):
            assert len(root_logger.handlers) == nb_handlers + 1
            logging.getLogger('tinypromise.test').warning('Hello')

        assert len(root_logger.handlers) == nb_handlers
        assert 'WARNING tinypromise.test - Hello' in stream.getvalue()
        # StringIO is not a tty: no color.
        assert '\033[' not in stream.getvalue()

    def test_context_applies_config(self):
        config.set('debug_mode', True)
        config.set('log_levels', {'tinypromise.scheduler': 'error'})

        with Context(io.StringIO()):
            assert logging.getLogger('tinypromise').level == logging.DEBUG
            assert logging.getLogger('tinypromise.scheduler').level == \
                logging.ERROR


class TestLogLevels(object):

    def teardown_method(self, method):
        for name in ('tinypromise', 'tinypromise.promise', 'plop'):
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_set_debug_mode_true(self):
        set_debug_mode(True)
        assert logging.getLogger('tinypromise').level == logging.DEBUG

    def test_set_debug_mode_false(self):
        set_debug_mode(False)
        assert logging.getLogger('tinypromise').level == logging.INFO

    def test_set_logs_level(self, caplog):
        with caplog.at_level(logging.WARNING, logger='tinypromise.log'):
            set_logs_level({'tinypromise.promise': 'error',
                            'tinypromise': '10',
                            'plop': 'not a level'})

        assert logging.getLogger('tinypromise.promise').level == \
            logging.ERROR
        assert logging.getLogger('tinypromise').level == logging.DEBUG
        assert logging.getLogger('plop').level == logging.NOTSET
        assert 'Invalid log level "NOT A LEVEL"' in caplog.text
