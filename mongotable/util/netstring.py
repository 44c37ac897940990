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

"""Encoding and decoding of netstrings_, the framing used by the Postfix
socketmap protocol. A netstring is the decimal length of its data, a colon,
the data, and a comma, e.g. ``b'5:hello,'``.

.. _netstrings: https://cr.yp.to/proto/netstrings.txt

"""

from mongotable.core import MongoTableError

__all__ = ['NetstringError', 'NetstringReader', 'encode', 'MAX_LENGTH']

#: Largest netstring accepted by Postfix socketmap clients.
MAX_LENGTH = 100000


class NetstringError(MongoTableError):
    """Thrown when received data is not a valid netstring."""
    pass


def encode(data):
    """Wraps the given data in a netstring.

    :param data: The data to encode.
    :type data: bytes
    :rtype: bytes

    """
    return str(len(data)).encode('ascii') + b':' + data + b','


class NetstringReader(object):
    """Reads consecutive netstrings from a socket, buffering anything received
    beyond the current one.

    :param socket: The socket to receive from.
    :param max_length: Netstrings announcing more data than this are rejected
                       before the data is received.

    """

    def __init__(self, socket, max_length=MAX_LENGTH):
        super(NetstringReader, self).__init__()
        self.socket = socket
        self.max_length = max_length
        self.recv_buffer = b''
        self._max_digits = len(str(max_length))

    def _parse(self):
        buf = self.recv_buffer
        colon_i = buf.find(b':')
        if colon_i == -1:
            if buf and (not buf.isdigit() or len(buf) > self._max_digits):
                raise NetstringError('invalid netstring length')
            return None
        length_str = buf[:colon_i]
        if not length_str.isdigit():
            raise NetstringError('invalid netstring length')
        length = int(length_str)
        if length > self.max_length:
            raise NetstringError('netstring too long')
        end_i = colon_i + 1 + length
        if len(buf) <= end_i:
            return None
        if buf[end_i:end_i+1] != b',':
            raise NetstringError('netstring missing trailing comma')
        self.recv_buffer = buf[end_i+1:]
        return buf[colon_i+1:end_i]

    def read(self):
        """Receives the next netstring.

        :returns: The decoded data, or ``None`` if the peer closed the
                  connection between netstrings.
        :raises: :class:`NetstringError`

        """
        while True:
            data = self._parse()
            if data is not None:
                return data
            received = self.socket.recv(4096)
            if received == b'':
                if self.recv_buffer:
                    raise NetstringError('connection closed mid-netstring')
                return None
            self.recv_buffer += received


# vim:et:fdm=marker:sts=4:sw=4:ts=4
