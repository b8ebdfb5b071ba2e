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
# pylint: disable=W0212

r"""Configuration Parser.

Configurable parser that will parse config files, environment variables and
command-line arguments. Later sources win:

    defaults < ini file < environment < command line

Example site.ini file:

    [i18n]
    default_language = fr

    [site]
    verbose = true

Example usage:

    from confkit import config
    from confkit import log
    from confkit import web

    conf = config.Config(prog='site', options=log.OPTIONS + web.OPTIONS,
                         ini_paths=['/etc/site/site.ini'])
    conf.parse()
    log.configure(conf)
    web.configure(conf)

Example results:

    $ CONFKIT_DEFAULT_LANGUAGE=fr python site.py --verbose
    <Config default_language=fr, verbose=True, ...>

Each option is also looked up from `<PROG>_<NAME>` in the environment (ex.
SITE_VERBOSE) and from the `[<prog>]` section of ini files.
"""

import argparse
import collections.abc
import configparser
import copy
import logging
import os
import sys

LOG = logging.getLogger(__name__)


class Option(object):

    """Holds a configuration option and the names and locations for it.

    Instantiate options using the same arguments as you would for an
    add_arguments call in argparse. However, you have additional kwargs
    available:

        env:          the name of the environment variable to use for this
                      option
        ini_section:  the ini file section to look this value up from
    """

    def __init__(self, *args, **kwargs):
        """Initialize options."""
        self.args = args or []
        self.kwargs = kwargs or {}

    def __copy__(self):
        """Implement copy."""
        return type(self)(*copy.copy(self.args), **copy.copy(self.kwargs))

    def __repr__(self):
        """Customize repr to show option args and kwargs."""
        args = ', '.join(self.args)
        kwrgs = ', '.join(['%s=%s' % (k, v) for k, v in self.kwargs.items()])
        rpr = 'Option(%s' % args
        if kwrgs:
            rpr = '%s, %s' % (rpr, kwrgs)
        return '%s)' % rpr

    def add_argument(self, parser, permissive=False):
        """Add an option to a an argparse parser.

        :keyword permissive: when true, build a parser that does not validate
            required arguments.
        """
        kwargs = copy.copy(self.kwargs)
        if 'env' in kwargs and 'help' in kwargs:
            kwargs['help'] = "%s (or set %s)" % (kwargs['help'], kwargs['env'])
        if permissive:
            kwargs.pop('required', None)
        kwargs.pop('env', None)
        kwargs.pop('ini_section', None)
        parser.add_argument(*self.args, **kwargs)

    @property
    def type(self):
        """The type of the option.

        Should be a callable to parse options.
        """
        return self.kwargs.get("type", str)

    @property
    def name(self):
        """The name of the option as determined from the args."""
        for arg in self.args:
            if arg.startswith("--"):
                return arg[2:].replace("-", "_")
            elif arg.startswith("-"):
                continue
            else:
                return arg.replace("-", "_")

    @property
    def dest(self):
        """The destination name of the option as determined from the args."""
        if 'dest' in self.kwargs:
            return self.kwargs['dest']
        return self.name

    @property
    def default(self):
        """The default for the option."""
        return self.kwargs.get("default")

    def convert(self, value):
        """Convert a raw string from the environment or an ini file."""
        if self.kwargs.get('action') == 'store_true':
            return boolean(value)
        return self.type(value)


class Config(collections.abc.MutableMapping):

    """Parses configuration sources."""

    def __init__(self, options=None, ini_paths=None, argv=None,
                 **parser_kwargs):
        """Initialize with list of options.

        :param ini_paths: optional paths to ini files to look up values from
        :param parser_kwargs: kwargs used to init argparse parsers.
        :param argv: argument strings (defaults to sys.argv)
        """
        self._parser_kwargs = parser_kwargs or {}
        self._ini_paths = list(ini_paths or [])
        self._options = list(options or [])
        self._values = {option.dest: option.default
                        for option in self._options}
        self._argv = argv
        self._prog = parser_kwargs.get('prog')

    @classmethod
    def init(cls, *args, **kwargs):
        """Initialize the config like as you would a regular dict."""
        instance = cls()
        instance._values.update(dict(*args, **kwargs))
        return instance

    @property
    def prog(self):
        """Program name."""
        if not self._prog:
            self._prog = os.path.basename(sys.argv[0])
        return self._prog

    def __getitem__(self, key):
        """Get item from config."""
        return self._values[key]

    def __setitem__(self, key, value):
        """Set item in config."""
        self._values[key] = value

    def __delitem__(self, key):
        """Delete item from config."""
        del self._values[key]

    def __iter__(self):
        """Iterate config."""
        return iter(self._values)

    def __len__(self):
        """Check number of config options."""
        return len(self._values)

    def __getattr__(self, attr):
        """Get attribute."""
        if not attr.startswith('_') and attr in self._values:
            return self._values[attr]
        raise AttributeError("'config' object has no attribute '%s'" % attr)

    def build_parser(self, options, permissive=False, **override_kwargs):
        """Construct an argparser from supplied options.

        :keyword override_kwargs: keyword arguments to override when calling
            parser constructor.
        :keyword permissive: when true, build a parser that does not validate
            required arguments.
        """
        kwargs = copy.copy(self._parser_kwargs)
        kwargs.setdefault('formatter_class',
                          argparse.ArgumentDefaultsHelpFormatter)
        kwargs.update(override_kwargs)
        parser = argparse.ArgumentParser(**kwargs)
        for option in options:
            option.add_argument(parser, permissive=permissive)
        return parser

    def parse_cli(self, argv=None, permissive=False):
        """Parse command-line arguments into values.

        Only arguments that were supplied are returned. Required options are
        validated by parse() since they may come from other sources.

        :keyword permissive: when true, ignore unrecognized arguments.
        """
        if argv is None:
            argv = self._argv if self._argv is not None else sys.argv
        options = []
        for option in self._options:
            kwargs = option.kwargs.copy()
            kwargs['default'] = argparse.SUPPRESS
            options.append(Option(*option.args, **kwargs))
        parser = self.build_parser(options, permissive=True)
        parsed, extras = parser.parse_known_args(argv[1:])
        if extras and not permissive:
            parser.error("unrecognized arguments: %s" % ' '.join(extras))
        return vars(parsed)

    def parse_env(self, env=None, namespace=None):
        """Parse environment variables."""
        env = os.environ if env is None else env
        namespace = (namespace or self.prog).upper()
        results = {}
        for option in self._options:
            env_var = option.kwargs.get('env')
            default_env = "%s_%s" % (namespace, option.name.upper())
            if env_var and env_var in env:
                results[option.dest] = option.convert(env[env_var])
            elif default_env in env:
                results[option.dest] = option.convert(env[default_env])
        return results

    def get_defaults(self):
        """Use argparse to determine and return dict of defaults."""
        parser = self.build_parser(self._options, permissive=True)
        parsed, _ = parser.parse_known_args([])
        return vars(parsed)

    def parse_ini(self, paths=None, namespace=None):
        """Parse config files and return configuration options.

        Expects array of files that are in ini format.
        :param paths: list of paths to files to parse (uses ConfigParser
                      logic). If not supplied, uses the ini_paths value
                      supplied on initialization.
        """
        namespace = namespace or self.prog
        results = {}
        ini_config = configparser.ConfigParser()
        read = ini_config.read(paths or self._ini_paths)
        LOG.debug("Read ini files: %s", read)
        parser_errors = (configparser.NoOptionError,
                         configparser.NoSectionError)
        for option in self._options:
            for section in (option.kwargs.get('ini_section'), namespace):
                if not section:
                    continue
                try:
                    value = ini_config.get(section, option.name)
                except parser_errors as err:
                    LOG.debug('Error parsing ini file: %r -- Continuing.',
                              err)
                    continue
                results[option.dest] = option.convert(value)
                break
        return results

    def load_options(self, argv=None):
        """Find settings from all sources."""
        results = self.get_defaults()
        results.update(self.parse_ini())
        results.update(self.parse_env())
        results.update(self.parse_cli(argv=argv))
        return results

    def parse(self, argv=None):
        """Find settings from all sources and validate required options."""
        results = self.load_options(argv=argv)
        for option in self._options:
            if option.kwargs.get('required') and results.get(
                    option.dest) is None:
                raise SystemExit("'%s' is required. See --help "
                                 "for more info." % option.name)
        self._values = results
        return self

    def __repr__(self):
        """Display configured values when representing instance."""
        return "<Config %s>" % ', '.join([
            '%s=%s' % (k, v) for k, v in sorted(self.items())])


def boolean(value):
    """Handle boolean strings from the environment and ini files."""
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError("'%s' is not a boolean value" % value)
