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

"""Presents lookup drivers through the generic *dictionary* interface that
mail systems use for their lookup tables: a named, read-only store opened once
from its configuration, queried with :meth:`~Dictionary.lookup` any number of
times, and finally closed.

A table is usually opened with :func:`dict_open`, giving the path to its
configuration file (see :mod:`mongotable.config`). The recognized options are:

``uri``
  A ``mongodb://`` connection string. Takes precedence over ``host`` and
  ``port``.

``host``, ``port``
  The server to connect to, ``localhost`` and ``27017`` by default.

``auth``, ``user``, ``password``
  If ``auth`` is ``yes``, the credentials are checked against ``dbname``.

``dbname``, ``collection``
  Required. Where the documents are stored.

``key``
  Required. The document field matched against the lookup key.

``value``
  The document field returned from the matched document. Defaults to ``key``.

``timeout``
  Milliseconds allowed for any one network operation, ``1000`` by default.

A configuration that cannot be loaded does not raise an exception from
:func:`dict_open`. Instead a :class:`SurrogateDictionary` is returned, which
fails every lookup with the reason.

"""

import os
import logging

from mongotable.logging import logline
from mongotable.config import TableConfig
from mongotable.lookup import ConfigurationError, StoreConnectionError
from mongotable.lookup.drivers.mongodb import MongoDBLookup

__all__ = ['Dictionary', 'MongoDBDictionary', 'SurrogateDictionary',
           'dict_open', 'DICT_TYPE_MONGODB', 'DICT_FLAG_FOLD_FIX']

DICT_TYPE_MONGODB = 'mongodb'

#: Lookup keys are folded to lower case before the query.
DICT_FLAG_FOLD_FIX = (1 << 14)

log = logging.getLogger(__name__)


class Dictionary(object):
    """Base class for all dictionaries. Sub-classes override :meth:`.lookup`
    and usually :meth:`.close`.

    :param type: The dictionary type, e.g. ``'mongodb'``.
    :param name: The dictionary name, usually its configuration file.
    :param flags: Bitwise-or of ``DICT_FLAG_*`` values.

    """

    def __init__(self, type, name, flags=0):
        super(Dictionary, self).__init__()
        self.type = type
        self.name = name
        self.flags = flags

    def lookup(self, key):
        """Looks up the value for the given key.

        :param key: The key string.
        :returns: The value string, or ``None`` if the key does not exist.
        :raises: :class:`~mongotable.lookup.TransientLookupError`,
                 :class:`~mongotable.lookup.PermanentLookupError`

        """
        raise NotImplementedError()

    def close(self):
        """Releases all resources held by the dictionary."""
        pass


class SurrogateDictionary(Dictionary):
    """Stands in for a dictionary that could not be opened, so that the
    failure is reported on every lookup rather than when opening.

    :param type: The dictionary type that failed to open.
    :param name: The dictionary name that failed to open.
    :param reason: Why the dictionary could not be opened.
    :param flags: Bitwise-or of ``DICT_FLAG_*`` values.

    """

    def __init__(self, type, name, reason, flags=0):
        super(SurrogateDictionary, self).__init__(type, name, flags)
        self.reason = reason

    def lookup(self, key):
        raise ConfigurationError(self.reason)


def _lookup_kwargs(config):
    auth = config.get_bool('auth', False)
    uri = config.get_str('uri') or None
    kwargs = {'database': config.get_str('dbname', min_len=1),
              'collection': config.get_str('collection', min_len=1),
              'key_field': config.get_str('key', min_len=1),
              'value_field': config.get_str('value') or None,
              'port': config.get_int('port', 27017, 1, 65535),
              'uri': uri,
              'auth': auth,
              'timeout': config.get_int('timeout', 1000, 1) / 1000.0}
    if uri is None:
        kwargs['host'] = config.get_str('host', 'localhost', min_len=1)
    if auth:
        kwargs['username'] = config.get_str('user', min_len=1)
        kwargs['password'] = config.get_str('password')
    return kwargs


class MongoDBDictionary(Dictionary):
    """A dictionary backed by a MongoDB collection through
    :class:`~mongotable.lookup.drivers.mongodb.MongoDBLookup`. A connection is
    attempted immediately. If that fails, the failure is logged and the first
    lookup tries again.

    :param name: The dictionary name, usually its configuration file.
    :param config: The table configuration.
    :type config: :class:`~mongotable.config.TableConfig`
    :param flags: Bitwise-or of ``DICT_FLAG_*`` values.
    :param lookup_class: Called with the keyword arguments produced from
                         ``config`` to create the lookup driver.
    :raises: :class:`~mongotable.lookup.ConfigurationError`

    """

    def __init__(self, name, config, flags=0, lookup_class=MongoDBLookup):
        super(MongoDBDictionary, self).__init__(DICT_TYPE_MONGODB, name,
                                                flags)
        self.config = config
        self.driver = lookup_class(**_lookup_kwargs(config))
        self.closed = False
        try:
            self.driver.connect()
        except StoreConnectionError:
            pass

    def lookup(self, key):
        if self.closed:
            raise ValueError('lookup on closed dictionary: ' + self.name)
        if self.flags & DICT_FLAG_FOLD_FIX:
            key = key.lower()
        return self.driver.lookup(key)

    def close(self):
        if self.closed:
            return
        self.driver.close()
        self.config = None
        self.closed = True


def dict_open(name, open_flags=os.O_RDONLY, dict_flags=0):
    """Opens a MongoDB dictionary from its configuration file.

    :param name: Path to the configuration file.
    :param open_flags: Must be :py:data:`os.O_RDONLY`, the table cannot be
                       written to.
    :param dict_flags: Bitwise-or of ``DICT_FLAG_*`` values.
    :returns: A :class:`MongoDBDictionary`, or a :class:`SurrogateDictionary`
              if the configuration could not be loaded.

    """
    if open_flags != os.O_RDONLY:
        reason = '{0}:{1} map requires O_RDONLY access mode'.format(
            DICT_TYPE_MONGODB, name)
    else:
        try:
            config = TableConfig.from_file(name)
            return MongoDBDictionary(name, config, dict_flags)
        except OSError as exc:
            reason = 'open {0}: {1}'.format(name, exc.strerror or exc)
        except ConfigurationError as exc:
            reason = str(exc)
    logline(log.warning, 'dict', DICT_TYPE_MONGODB, 'surrogate',
            name=name, reason=reason)
    return SurrogateDictionary(DICT_TYPE_MONGODB, name, reason, dict_flags)


# vim:et:fdm=marker:sts=4:sw=4:ts=4
