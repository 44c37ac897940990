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

"""Implements mongotable lookup against a MongoDB_ collection. Each lookup
matches one field of the stored documents against the key and returns one
other field of the first matching document.

For example, given documents like ``{"email": "a@b.com", "uid": "42"}``, a
lookup configured with ``key_field='email'`` and ``value_field='uid'`` will
resolve ``'a@b.com'`` (or ``'a+tag@b.com'``) to ``'42'``.

A lost connection is detected when a query fails with a
:class:`~pymongo.errors.ConnectionFailure`. The driver then reconnects once
and retries the query once. It never loops, so a flapping server costs at most
two round-trips per lookup.

.. _MongoDB: https://www.mongodb.com/

"""

from pymongo.errors import ConnectionFailure, PyMongoError

from mongotable import logging
from mongotable.lookup import StoreConnectionError, TransientQueryError
from mongotable.lookup.address import normalize_plus_address
from mongotable.lookup.connection import MongoConnection
from . import LookupBase

__all__ = ['MongoDBLookup']

log = logging.getStoreLogger(__name__)


class MongoDBLookup(LookupBase):
    """Implements the mongotable lookup interface using a MongoDB collection
    as the backend layer.

    :param database: Name of the database holding the collection.
    :type database: str
    :param collection: Name of the collection to query.
    :type collection: str
    :param key_field: Document field that must equal the lookup key.
    :type key_field: str
    :param value_field: Document field whose contents are returned. Defaults
                        to ``key_field``.
    :type value_field: str
    :param conn: An existing
                 :class:`~mongotable.lookup.connection.MongoConnection` to
                 use. If not given, one is created from ``database``,
                 ``collection`` and ``conn_kwargs``.
    :param conn_kwargs: Passed in to
                        :class:`~mongotable.lookup.connection.MongoConnection`,
                        e.g. ``host``, ``port``, ``uri``, ``auth``,
                        ``username``, ``password`` and ``timeout``.

    """

    def __init__(self, database, collection, key_field, value_field=None,
                 conn=None, **conn_kwargs):
        super(MongoDBLookup, self).__init__()
        self.key_field = key_field
        self.value_field = value_field or key_field
        if conn is None:
            conn = MongoConnection(database, collection, **conn_kwargs)
        self.conn = conn

    def connect(self):
        """Establishes the connection ahead of the first lookup.

        :raises: :class:`~mongotable.lookup.StoreConnectionError`

        """
        self.conn.ensure_connected()

    def _find_one(self, query):
        projection = {self.value_field: True}
        try:
            return self.conn.collection.find_one(query, projection)
        except ConnectionFailure:
            raise
        except PyMongoError as exc:
            log.query_error(self.conn, exc)
            raise TransientQueryError(
                'mongodb query failed: {0!s}'.format(exc))

    def _extract(self, doc):
        if doc is None:
            return None
        value = doc.get(self.value_field)
        if value is None:
            return None
        elif isinstance(value, str):
            return value
        return str(value)

    def _do_lookup(self, key):
        self.conn.ensure_connected()
        query = {self.key_field: normalize_plus_address(key)}
        try:
            doc = self._find_one(query)
        except ConnectionFailure:
            if not self.conn.recover():
                raise StoreConnectionError(
                    'reconnect to mongodb server failed: '
                    '{0}'.format(self.conn.address))
            try:
                doc = self._find_one(query)
            except ConnectionFailure as exc:
                self.conn.invalidate()
                raise TransientQueryError(
                    'mongodb query failed after reconnect: '
                    '{0!s}'.format(exc))
        return self._extract(doc)

    def lookup(self, key):
        ret = self._do_lookup(key)
        self.log(__name__, key, ret)
        return ret

    def close(self):
        self.conn.close()


# vim:et:fdm=marker:sts=4:sw=4:ts=4
