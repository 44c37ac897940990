# Copyright (c) 2021 Ian C. Good
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
#

"""Reads lookup table configuration files. The format is the one used by the
Postfix ``*_table(5)`` manual pages::

    # The server to connect to.
    host = db.example.com
    port = 27017
    dbname = mail
    collection = users
    key = email
    value = uid

Blank lines and lines starting with ``#`` are ignored. A line that starts with
whitespace continues the value of the previous line.

"""

from mongotable.lookup import ConfigurationError

__all__ = ['TableConfig']

_true_values = frozenset(['1', 'yes', 'true', 'on'])
_false_values = frozenset(['0', 'no', 'false', 'off'])


class TableConfig(object):
    """Typed access to the options of one table configuration.

    :param options: Mapping of option names to their raw string values.
    :type options: dict
    :param name: Where the options came from, used in error messages.

    """

    def __init__(self, options, name='<config>'):
        super(TableConfig, self).__init__()
        self.options = dict(options)
        self.name = name

    @classmethod
    def parse(cls, lines, name='<config>'):
        """Parses configuration lines into a new :class:`TableConfig`.

        :param lines: Iterable of lines, with or without line endings.
        :param name: Where the lines came from, used in error messages.
        :raises: :class:`~mongotable.lookup.ConfigurationError`

        """
        options = {}
        last = None
        for lineno, line in enumerate(lines, 1):
            line = line.rstrip('\r\n')
            stripped = line.strip()
            if not stripped or stripped.startswith('#'):
                continue
            if line[0].isspace():
                if last is None:
                    raise ConfigurationError(
                        '{0}, line {1}: text before first option'.format(
                            name, lineno))
                options[last] = ' '.join((options[last], stripped)).strip()
                continue
            key, sep, value = line.partition('=')
            key = key.strip()
            if not sep or not key:
                raise ConfigurationError(
                    '{0}, line {1}: missing "=" after "{2}"'.format(
                        name, lineno, stripped))
            options[key] = value.strip()
            last = key
        return cls(options, name)

    @classmethod
    def from_file(cls, path):
        """Reads and parses the given configuration file.

        :param path: Path to the configuration file, which must be UTF-8.
        :raises: :class:`~mongotable.lookup.ConfigurationError`,
                 :py:exc:`OSError`

        """
        with open(path, 'r', encoding='utf-8') as cfg_file:
            try:
                return cls.parse(cfg_file, path)
            except UnicodeDecodeError as exc:
                raise ConfigurationError(
                    '{0}: invalid UTF-8: {1}'.format(path, exc.reason))

    def get_str(self, name, default='', min_len=0, max_len=0):
        """Returns the string value of an option.

        :param name: The option name.
        :param default: Returned when the option is not given.
        :param min_len: Minimum length of the value. A required option is
                        given a ``min_len`` of ``1``.
        :param max_len: Maximum length of the value, ``0`` for unlimited.
        :raises: :class:`~mongotable.lookup.ConfigurationError`

        """
        value = self.options.get(name, default)
        if len(value) < min_len:
            raise ConfigurationError(
                '{0}: bad string length {1} < {2}: {3} = {4}'.format(
                    self.name, len(value), min_len, name, value))
        if max_len and len(value) > max_len:
            raise ConfigurationError(
                '{0}: bad string length {1} > {2}: {3} = {4}'.format(
                    self.name, len(value), max_len, name, value))
        return value

    def get_int(self, name, default, min_val=0, max_val=0):
        """Returns the integer value of an option.

        :param name: The option name.
        :param default: Returned when the option is not given or empty.
        :param min_val: Minimum allowed value.
        :param max_val: Maximum allowed value, ``0`` for unlimited.
        :raises: :class:`~mongotable.lookup.ConfigurationError`

        """
        raw = self.options.get(name, '')
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError('{0}: bad numerical configuration: '
                                     '{1} = {2}'.format(self.name, name, raw))
        if value < min_val or (max_val and value > max_val):
            raise ConfigurationError('{0}: value out of range: '
                                     '{1} = {2}'.format(self.name, name, raw))
        return value

    def get_bool(self, name, default):
        """Returns the boolean value of an option, given as ``yes``/``no``,
        ``true``/``false``, ``on``/``off`` or ``1``/``0``.

        :param name: The option name.
        :param default: Returned when the option is not given or empty.
        :raises: :class:`~mongotable.lookup.ConfigurationError`

        """
        raw = self.options.get(name, '').lower()
        if not raw:
            return default
        elif raw in _true_values:
            return True
        elif raw in _false_values:
            return False
        raise ConfigurationError('{0}: bad boolean configuration: '
                                 '{1} = {2}'.format(self.name, name, raw))


# vim:et:fdm=marker:sts=4:sw=4:ts=4
