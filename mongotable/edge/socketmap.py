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

"""Serves dictionaries over the Postfix socketmap_ protocol, so that Postfix
can use them as ``socketmap:inet:host:port:name`` lookup tables.

Each request is a netstring containing the map name and the key, separated by
one space. Each reply is a netstring containing one of:

``OK <value>``
  The key was found.

``NOTFOUND ``
  The key does not exist.

``TEMP <reason>``
  The lookup failed, but may succeed later. Postfix defers the mail.

``PERM <reason>``
  The lookup failed, and will not succeed until the configuration is fixed.

.. _socketmap: http://www.postfix.org/socketmap_table.5.html

"""

import gevent
from gevent.lock import Semaphore
from gevent.server import StreamServer

from mongotable import logging
from mongotable.lookup import TableLookupError
from mongotable.util import netstring
from mongotable.util.netstring import NetstringReader, NetstringError

__all__ = ['SocketmapEdge']

log = logging.getSocketLogger(__name__)


class SocketmapEdge(gevent.Greenlet):
    """This class implements a :class:`~gevent.Greenlet` serving a
    :class:`~gevent.server.StreamServer` until killed. Every accepted
    connection may send any number of requests. Lookups on the same dictionary
    are serialized, since a dictionary holds a single connection.

    :param listener: Usually a ``(ip, port)`` tuple defining the interface and
                     port upon which to listen for connections. See
                     the ``listener`` parameter to
                     :class:`~gevent.baseserver.BaseServer` for more
                     information.
    :param dictionaries: Mapping of map names to
                         :class:`~mongotable.dict.Dictionary` objects. The
                         caller remains responsible for closing them.
    :param pool: If given, defines a specific :class:`gevent.pool.Pool` to
                 use for new greenlets.

    """

    def __init__(self, listener, dictionaries, pool=None):
        super(SocketmapEdge, self).__init__()
        self.dictionaries = dictionaries
        self._locks = dict((name, Semaphore()) for name in dictionaries)
        spawn = pool or 'default'
        self.server = StreamServer(listener, self._handle, spawn=spawn)

    def _handle(self, socket, address):
        log.accept(self.server.socket, socket, address)
        try:
            self.handle(socket, address)
        except Exception:
            logging.log_exception(__name__)
            raise

    def handle(self, socket, address):
        """Answers requests on the connected socket until the client closes
        it. A malformed request is answered with ``PERM`` and the connection
        is dropped.

        :param socket: The socket for the connected client.
        :param address: The address of the connected client.

        """
        reader = NetstringReader(socket)
        while True:
            try:
                request = reader.read()
            except NetstringError as exc:
                log.error(socket, exc)
                self._send_reply(socket, 'PERM ' + str(exc))
                return
            if request is None:
                return
            log.recv(socket, request)
            self._send_reply(socket, self.query(request))

    def _send_reply(self, socket, reply):
        data = netstring.encode(reply.encode('utf-8'))
        socket.sendall(data)
        log.send(socket, data)

    def query(self, request):
        """Produces the reply for one request.

        :param request: The decoded netstring, ``b'<name> <key>'``.
        :type request: bytes
        :returns: The reply string, without netstring framing.

        """
        try:
            name, sep, key = request.decode('utf-8').partition(' ')
        except UnicodeDecodeError:
            return 'PERM invalid request encoding'
        if not name or not sep:
            return 'PERM invalid request'
        dictionary = self.dictionaries.get(name)
        if dictionary is None:
            return 'PERM unknown map: ' + name
        try:
            with self._locks[name]:
                value = dictionary.lookup(key)
        except TableLookupError as exc:
            return '{0} {1!s}'.format(exc.status, exc)
        if value is None:
            return 'NOTFOUND '
        return 'OK ' + value

    def kill(self):
        self.server.stop()

    def _run(self):
        self.server.start()
        self.server.serve_forever()


# vim:et:fdm=marker:sts=4:sw=4:ts=4
