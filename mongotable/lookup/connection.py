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

"""Manages the lifecycle of the single connection a lookup table holds to its
MongoDB server.

A :class:`MongoConnection` starts out ``disconnected``. A successful
:meth:`~MongoConnection.connect` moves it to ``connected``, and any failure to
connect or authenticate moves it to ``failed``. Either of the latter states may
be left again by connecting, any number of times, until the connection is
closed.

"""

import re

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, \
    NotPrimaryError, ServerSelectionTimeoutError, \
    ConfigurationError as ClientConfigurationError

from mongotable import logging
from . import StoreConnectionError, AuthenticationError, ConfigurationError

__all__ = ['MongoConnection', 'DISCONNECTED', 'CONNECTED', 'FAILED']

DISCONNECTED = 'disconnected'
CONNECTED = 'connected'
FAILED = 'failed'

_userinfo_pattern = re.compile(r'//[^/@]*@')

log = logging.getStoreLogger(__name__)


def _failure_reason(exc):
    if isinstance(exc, NotPrimaryError):
        return 'not primary'
    elif isinstance(exc, ServerSelectionTimeoutError):
        return 'no server available'
    return 'connection failed'


class MongoConnection(object):
    """Owns one :class:`~pymongo.mongo_client.MongoClient` and the collection
    handle that lookups are queried against. Not safe for concurrent use, the
    caller must serialize access.

    :param database: Name of the database holding the collection. When
                     ``auth`` is enabled, credentials are also checked against
                     this database.
    :type database: str
    :param collection: Name of the collection to query.
    :type collection: str
    :param host: Hostname of the MongoDB server to connect to.
    :param port: Port to connect to.
    :param uri: A ``mongodb://`` connection string. If given, ``host`` and
                ``port`` are ignored.
    :param auth: If ``True``, ``username`` and ``password`` are sent to the
                 server on connect.
    :param username: User name to authenticate with.
    :param password: Password to authenticate with.
    :param timeout: Timeout, in seconds, applied to connecting, server
                    selection and every socket operation.
    :param client_class: Called with the connection arguments to produce a new
                         client, :class:`~pymongo.mongo_client.MongoClient` by
                         default.

    """

    def __init__(self, database, collection, host='localhost', port=27017,
                 uri=None, auth=False, username=None, password=None,
                 timeout=1.0, client_class=MongoClient):
        super(MongoConnection, self).__init__()
        self.database_name = database
        self.collection_name = collection
        self.host = host
        self.port = port
        self.uri = uri
        self.auth = auth
        self.username = username
        self.password = password
        self.timeout = timeout
        self.client_class = client_class
        self.state = DISCONNECTED
        self.client = None
        self.collection = None

    @property
    def connected(self):
        """``True`` if the last connection attempt succeeded and nothing has
        gone wrong with it since.

        """
        return self.state == CONNECTED

    @property
    def address(self):
        """The server address, suitable for logs. Credentials embedded in a
        connection string are removed.

        """
        if self.uri:
            return _userinfo_pattern.sub('//', self.uri)
        return '{0}:{1}'.format(self.host, self.port)

    def _build_client(self):
        timeout_ms = int(self.timeout * 1000)
        kwargs = {'connect': False,
                  'connectTimeoutMS': timeout_ms,
                  'socketTimeoutMS': timeout_ms,
                  'serverSelectionTimeoutMS': timeout_ms}
        if self.auth:
            kwargs['username'] = self.username
            kwargs['password'] = self.password
            kwargs['authSource'] = self.database_name
        if self.uri:
            return self.client_class(self.uri, **kwargs)
        return self.client_class(self.host, self.port, **kwargs)

    def _release(self):
        client = self.client
        self.client = None
        self.collection = None
        if client is not None:
            client.close()

    def connect(self):
        """Discards any current client, then opens a new one and checks that
        the server answers and accepts the credentials.

        :raises: :class:`~mongotable.lookup.StoreConnectionError`,
                 :class:`~mongotable.lookup.AuthenticationError`,
                 :class:`~mongotable.lookup.ConfigurationError`

        """
        self._release()
        try:
            client = self._build_client()
        except ClientConfigurationError as exc:
            self.state = FAILED
            raise ConfigurationError('invalid mongodb connection settings: '
                                     '{0!s}'.format(exc))
        try:
            client.admin.command('ping')
        except ConnectionFailure as exc:
            client.close()
            self.state = FAILED
            reason = _failure_reason(exc)
            log.connect_error(self, self.address, reason)
            raise StoreConnectionError('connect to mongodb server failed: '
                                       '{0}: {1}'.format(self.address, reason),
                                       reason)
        except OperationFailure as exc:
            client.close()
            self.state = FAILED
            if self.auth:
                log.auth_error(self, self.address, self.username)
                raise AuthenticationError('mongodb authentication failed: '
                                          '{0} at {1}'.format(self.username,
                                                              self.address),
                                          'authentication failed')
            log.connect_error(self, self.address, str(exc))
            raise StoreConnectionError('connect to mongodb server failed: '
                                       '{0}: {1}'.format(self.address, exc),
                                       'operation failed')
        self.client = client
        self.collection = client[self.database_name][self.collection_name]
        self.state = CONNECTED
        log.connect(self, self.address)

    def ensure_connected(self):
        """Connects unless the connection is already established.

        :raises: :class:`~mongotable.lookup.StoreConnectionError`

        """
        if not self.connected:
            self.connect()

    def recover(self):
        """Called after a query failed because the connection was lost. Makes
        exactly one attempt to reconnect, including authentication.

        :returns: ``True`` if the connection is usable again, ``False`` if the
                  attempt failed.

        """
        log.reconnect(self, self.address)
        try:
            self.connect()
        except StoreConnectionError:
            log.reconnect_error(self, self.address)
            return False
        return True

    def invalidate(self):
        """Marks the connection unusable without trying to reconnect, so that
        the next :meth:`.ensure_connected` starts over.

        """
        self._release()
        self.state = FAILED

    def close(self):
        """Releases the client and the collection handle. Calling this more
        than once has no further effect.

        """
        if self.client is not None:
            log.close(self)
        self._release()
        self.state = DISCONNECTED


# vim:et:fdm=marker:sts=4:sw=4:ts=4
