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

"""Utilities to make logging consistent and easy in :mod:`mongotable`
packages.

"""

import sys
import reprlib
import logging
import traceback

from .socket import SocketLogger
from .store import StoreLogger

__all__ = ['getSocketLogger', 'getStoreLogger', 'log_exception', 'logline']


def getSocketLogger(name):
    """Wraps the result of :py:func:`logging.getLogger()` in a
    :class:`~mongotable.logging.socket.SocketLogger` object to provide limited
    and consistent logging output for socket operations.

    :param name: ``name`` as passed in to :py:func:`logging.getLogger()`.
    :rtype: :class:`~mongotable.logging.socket.SocketLogger`

    """
    logger = logging.getLogger(name)
    return SocketLogger(logger)


def getStoreLogger(name):
    """Wraps the result of :py:func:`logging.getLogger()` in a
    :class:`~mongotable.logging.store.StoreLogger` object to provide limited
    and consistent logging output for document store operations.

    :param name: ``name`` as passed in to :py:func:`logging.getLogger()`.
    :rtype: :class:`~mongotable.logging.store.StoreLogger`

    """
    logger = logging.getLogger(name)
    return StoreLogger(logger)


def log_exception(name, **kwargs):
    """Logs an exception, along with relevant information such as message,
    traceback, and anything provided pertinent to the situation. This function
    does nothing unless called while an exception is being handled.

    :param name: ``name`` as passed in to :py:func:`logging.getLogger()`.
    :param kwargs: Other keywords may be passed in and will be included in the
                   produced log line.

    """
    type, value, tb = sys.exc_info()
    if not value:
        return
    tb_repr = reprlib.Repr()
    tb_repr.maxstring = 10000
    logger = logging.getLogger(name)
    data = kwargs.copy()
    data['message'] = str(value)
    data['args'] = value.args
    tb_str = traceback.format_exception(type, value, tb)
    data_str = ' '.join(['='.join((key, log_repr.repr(val)))
                         for key, val in sorted(data.items())])
    logger.error('exception:{0}:unhandled {1} traceback={2}'.format(
        type.__name__, data_str, tb_repr.repr(tb_str)))


log_repr = reprlib.Repr()
log_repr.maxstring = 100


def logline(log, type, typeid, operation, **data):
    """Produces one machine-parseable log line of the form
    ``type:typeid:operation key=value ...`` through the given log function.

    """
    if not data:
        log('{0}:{1}:{2}'.format(type, typeid, operation))
    else:
        data_str = ' '.join(['='.join((key, log_repr.repr(val)))
                             for key, val in sorted(data.items())])
        log('{0}:{1}:{2} {3}'.format(type, typeid, operation, data_str))


# vim:et:fdm=marker:sts=4:sw=4:ts=4
