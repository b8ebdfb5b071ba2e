# Copyright (c) 2011-2015 Rackspace US, Inc.
# All Rights Reserved.
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.
#
"""Logging setup for sites using confkit.

Named `log` so as not to conflict with stdlib logging.

    conf = config.Config(prog='site', options=log.OPTIONS + web.OPTIONS)
    conf.parse()
    log.configure(conf)

confkit modules attach the values behind a decision as `extra={'data': ...}`.
With --debug they are appended to the message, so a language fallback reads:

    confkit/web.py:97: DEBUG    Falling back to the default language.
        data={'default': 'en', 'tag': 'de-DE'}
"""
import logging
import logging.config
import os
import sys

from confkit import config

LOG = logging.getLogger(__name__)

OPTIONS = [
    config.Option("--logconfig",
                  help="logging configuration file (fileConfig format); "
                  "console logging is used when it is not set"),
    config.Option("-d", "--debug",
                  default=False,
                  action="store_true",
                  help="log at DEBUG with source lines and the data behind "
                  "language and locale decisions"),
    config.Option("-v", "--verbose",
                  default=False,
                  action="store_true",
                  help="log at DEBUG (default is INFO)"),
    config.Option("-q", "--quiet",
                  default=False,
                  action="store_true",
                  help="log at WARNING (default is INFO)"),
]

# First flag that is set wins: (flag, level, console format)
VERBOSITY = (
    ('debug', logging.DEBUG,
     '%(pathname)s:%(lineno)d: %(levelname)-8s %(message)s'),
    ('verbose', logging.DEBUG, '%(name)-30s: %(levelname)-8s %(message)s'),
    ('quiet', logging.WARNING, '%(message)s'),
)


def _verbosity(conf):
    """Return the (flag, level, format) row selected by conf."""
    for row in VERBOSITY:
        if getattr(conf, row[0], False) is True:
            return row
    return None, logging.INFO, logging.BASIC_FORMAT


def log_level(conf):
    """Return the logging level for --debug, --verbose or --quiet."""
    return _verbosity(conf)[1]


def get_formatter(conf):
    """Return the console formatter; --debug also prints extra data."""
    flag, _, fmt = _verbosity(conf)
    if flag == 'debug':
        return DebugFormatter(fmt)
    return logging.Formatter(fmt)


def configure(conf, default_config=None):
    """Configure logging from --logconfig, default_config or the console.

    :param conf: object with configuration namespace (ex. config.Config)
    :keyword default_config: logging config file used if --logconfig is not
        set or does not exist.
    """
    for path in (getattr(conf, 'logconfig', None), default_config):
        if path and os.path.isfile(path):
            logging.config.fileConfig(path, disable_existing_loggers=False)
            LOG.debug("Logging configured from %s", path)
            return
    init_console_logging(conf)


def init_console_logging(conf):
    """Log to stderr, reusing the root logger's console handler if any."""
    root = logging.getLogger()
    console = find_console_handler(root)
    if console is None:
        console = logging.StreamHandler()
        root.addHandler(console)
    level = log_level(conf)
    console.setLevel(level)
    console.setFormatter(get_formatter(conf))
    root.setLevel(level)


class DebugFormatter(logging.Formatter):

    """Appends the `data` passed in a log call's `extra` to the message."""

    def format(self, record):
        """Format the record, then add `data=...` if the record has data."""
        message = super(DebugFormatter, self).format(record)
        data = getattr(record, 'data', None)
        if data is None:
            return message
        if isinstance(data, dict):
            data = '{%s}' % ', '.join(
                '%r: %r' % (key, data[key]) for key in sorted(data))
        return '%s data=%s' % (message, data)


def find_console_handler(logger):
    """Return the logger's stderr stream handler, or None."""
    return next((handler for handler in logger.handlers
                 if isinstance(handler, logging.StreamHandler) and
                 handler.stream is sys.stderr), None)
