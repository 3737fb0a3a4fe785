# -*- coding: utf-8 -*-

"""Manages the settings of tinypromise.

Settings are loaded from an ini configuration file. If they don't exist,
default values are provided.
When an option is set and a config file has been loaded, the file is updated.

The module is usable without calling ``load()``: every entry then has its
default value.
"""

import configparser
import errno
import logging
import os
import os.path

import appdirs

_logger = logging.getLogger(__name__)

_appdirs = appdirs.AppDirs(appname='tinypromise', appauthor=False)

# Environment variables overriding the config file, by config key. Only
# str entries can be overridden.
_env_overrides = {
    'scheduler_backend': 'TINYPROMISE_SCHEDULER_BACKEND'
}

# Default config dict. Values not present in this dict are not valid.
# Each entry contains the type expected, and the default value.
_default_config = {
    'scheduler_backend': {'type': str, 'default': 'auto'},
    'debug_mode': {'type': bool, 'default': False},
    'log_levels': {'type': dict, 'default': {}}
}

# Actual config parser
_config_parser = configparser.ConfigParser()
_config_parser.add_section('config')

# Path of the loaded file, if any.
_config_file_path = None


def get_config_dir():
    """Returns the directory path containing the config file."""
    config_dir = _appdirs.user_config_dir
    try:
        os.makedirs(config_dir)
        _logger.debug('Created missing folder "%s"' % config_dir)
    except OSError as e:
        if e.errno != errno.EEXIST or not os.path.isdir(config_dir):
            _logger.warning('Unable to create the missing folder "%s"'
                            % config_dir, exc_info=True)
    return config_dir


def _get_default_config_file_path():
    return os.path.join(get_config_dir(), 'tinypromise.ini')


def load(path=None):
    """Find and load the config file.

    Args:
        path (str, optional): path of the ini file. By default, the file
            'tinypromise.ini' in the user config directory is used.
    """
    global _config_file_path

    if path is None:
        path = _get_default_config_file_path()
    _config_file_path = path

    if not _config_parser.read(path):
        _logger.warning('Unable to load config file: %s' % path)


def reset():
    """Forget all loaded values. Every entry gets back its default value."""
    global _config_file_path

    _config_parser.remove_section('config')
    _config_parser.add_section('config')
    _config_file_path = None


def get(key):
    """Find and return a configuration entry

    If the entry is not specified in the config file, a default value is
    returned. An environment variable listed in `_env_overrides` has
    priority over the config file, whether it has been loaded or not.

    Args:
        key (string): the entry key.
    Returns:
        The corresponding value found.
    Raises:
        KeyError: if the config entry doesn't exists.
    """
    if key not in _default_config:
        raise KeyError(key)

    env_name = _env_overrides.get(key)
    if env_name and os.environ.get(env_name):
        return os.environ[env_name]

    try:
        if _default_config[key]['type'] is bool:
            return _config_parser.getboolean('config', key)
        elif _default_config[key]['type'] is int:
            return _config_parser.getint('config', key)
        elif _default_config[key]['type'] is dict:
            # Dict entries are in the form 'key=value;key2=value2'
            dict_str = _config_parser.get('config', key)
            result = {}
            for pair in filter(None, dict_str.split(';')):
                try:
                    (k, v) = pair.split('=')
                    result[k.strip()] = v.strip()
                except ValueError:
                    _logger.warning('Unable to parse pair key=value: "%s"'
                                    % pair)
            return result
        else:
            return _config_parser.get('config', key)
    except configparser.NoOptionError:
        return _default_config[key]['default']


def set(key, value):
    """Set a configuration entry.

    Args:
        key (string): the entry key.
        value: the new value to set. It will be converted to string. Dict
            values are serialized in the form 'key=value;key2=value2'.
    Raises:
        KeyError: if the config entry is not valid.
    """
    if key not in _default_config:
        raise KeyError(key)
    if isinstance(value, dict):
        value = ';'.join('%s=%s' % item for item in value.items())
    _config_parser.set('config', key, str(value))

    if _config_file_path is None:
        return
    try:
        with open(_config_file_path, 'w') as config_file:
            _config_parser.write(config_file)
        _logger.debug('Config file modified.')
    except IOError:
        _logger.warning('Unable to write in the config file', exc_info=True)
