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

"""Utilities to make logging consistent and easy for any interaction with the
document store server.

"""

from functools import partial

__all__ = ['StoreLogger']


class StoreLogger(object):
    """Provides a limited set of log methods that :mod:`mongotable` packages
    may use. This prevents free-form logs from mixing in with standard,
    machine-parseable logs.

    Every method takes the connection object as its first argument, its
    :py:func:`id` is used as the log ID.

    :param log: :py:class:`logging.Logger` object to log through.

    """

    def __init__(self, log):
        from mongotable.logging import logline
        self.log = partial(logline, log.debug, 'mongo')
        self.log_warning = partial(logline, log.warning, 'mongo')
        self.log_error = partial(logline, log.error, 'mongo')
        self.log_critical = partial(logline, log.critical, 'mongo')

    def connect(self, conn, address):
        """Logs a successful connection to the server. Logged at the ``DEBUG``
        level.

        :param conn: The connection object.
        :param address: The server address or URI that was connected to.

        """
        self.log(id(conn), 'connect', address=address)

    def connect_error(self, conn, address, reason):
        """Logs a failed connection attempt. Logged at the ``WARNING`` level.

        :param conn: The connection object.
        :param address: The server address or URI that was tried.
        :param reason: Short diagnostic string, e.g. ``'not primary'``.

        """
        self.log_warning(id(conn), 'connecterror',
                         address=address, reason=reason)

    def auth_error(self, conn, address, user):
        """Logs rejected credentials. Logged at the ``CRITICAL`` level, since
        the table will not work until the configuration is fixed.

        :param conn: The connection object.
        :param address: The server address or URI that was connected to.
        :param user: The user name that was rejected.

        """
        self.log_critical(id(conn), 'autherror', address=address, user=user)

    def reconnect(self, conn, address):
        self.log(id(conn), 'reconnect', address=address)

    def reconnect_error(self, conn, address):
        self.log_warning(id(conn), 'reconnecterror', address=address)

    def query_error(self, conn, exc):
        """Logs a query that failed for a reason other than a lost connection.
        Logged at the ``ERROR`` level and does not include a stack trace.

        :param conn: The connection object.
        :param exc: The exception that was thrown.

        """
        self.log_error(id(conn), 'queryerror',
                       message=str(exc), args=exc.args)

    def close(self, conn):
        self.log(id(conn), 'close')


# vim:et:fdm=marker:sts=4:sw=4:ts=4
