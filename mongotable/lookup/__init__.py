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

"""Root package for looking up keys in a document store. Lookup failures are
split into two families, following the way mail servers treat them: a
:class:`TransientLookupError` means the lookup may succeed if tried again
later, a :class:`PermanentLookupError` means it never will until the table is
reconfigured. A key that simply does not exist is not an error at all.

"""

from mongotable.core import MongoTableError

__all__ = ['TableLookupError', 'PermanentLookupError', 'TransientLookupError',
           'ConfigurationError', 'StoreConnectionError',
           'AuthenticationError', 'TransientQueryError']


class TableLookupError(MongoTableError):
    """Base exception for all lookup errors. The :attr:`status` attribute
    holds the socketmap reply status that best describes the error.

    """

    status = 'TEMP'


class PermanentLookupError(TableLookupError):
    """Base exception for lookup errors that will not go away by trying
    again later.

    """

    status = 'PERM'


class TransientLookupError(TableLookupError):
    """Base exception for lookup errors that may succeed if tried again
    later.

    """

    status = 'TEMP'


class ConfigurationError(PermanentLookupError):
    """Thrown when a required table option is missing or unparsable."""
    pass


class StoreConnectionError(TransientLookupError):
    """Thrown when no usable connection to the document store server could be
    established.

    :param msg: The error message.
    :param reason: Short diagnostic string describing why the connection
                   failed, e.g. ``'not primary'``.

    """

    def __init__(self, msg, reason=None):
        super(StoreConnectionError, self).__init__(msg)
        self.reason = reason


class AuthenticationError(StoreConnectionError):
    """Thrown when the server rejected the configured credentials."""
    pass


class TransientQueryError(TransientLookupError):
    """Thrown when a query failed after the connection was established."""
    pass


# vim:et:fdm=marker:sts=4:sw=4:ts=4
