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

"""This package contains implementations of the mongotable lookup mechanism,
which resolves a single key string to a single value string. Lookup drivers
never modify their backend data source.

"""

import logging

from ...logging import logline

__all__ = ['LookupBase']


class LookupBase(object):
    """Inherit this class to implement a mongotable lookup driver. Only the
    :meth:`.lookup` method must be overridden.

    """

    def lookup(self, key):
        """Resolves the given key to its value in the backend.

        :param key: The key to lookup, e.g. an email address.
        :type key: str
        :returns: The value string if a record was found, ``None`` otherwise.
        :raises: :class:`~mongotable.lookup.TransientLookupError`

        """
        raise NotImplementedError()

    def close(self):
        """Releases any resources held by the driver. The driver must not be
        used afterwards.

        """
        pass

    def log(self, name, key, ret):
        """Implementing drivers should call this method to log the lookup
        transaction.

        :param name: The module name, e.g. ``__name__``.
        :type name: str
        :param key: The key given to :meth:`.lookup`.
        :type key: str
        :param ret: The return value of the lookup, e.g. a string or
                    ``None``.

        """
        logger = logging.getLogger(name)
        operation = 'notfound' if ret is None else 'found'
        logline(logger.debug, 'lookup', id(self), operation, key=key)


# vim:et:fdm=marker:sts=4:sw=4:ts=4
