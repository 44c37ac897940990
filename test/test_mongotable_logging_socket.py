
import unittest

from testfixtures import log_capture

from mongotable.logging import getSocketLogger


class FakeSocket(object):

    def __init__(self, fd, peer=None):
        self.fd = fd
        self.peer = peer

    def fileno(self):
        return self.fd

    def getpeername(self):
        return self.peer


class TestSocketLogger(unittest.TestCase):

    def setUp(self):
        self.log = getSocketLogger('test')

    @log_capture()
    def test_send(self, l):
        sock = FakeSocket(136)
        self.log.send(sock, b'3:foo,')
        l.check(('test', 'DEBUG', 'fd:136:send data=b\'3:foo,\''))

    @log_capture()
    def test_recv(self, l):
        sock = FakeSocket(29193)
        self.log.recv(sock, b'aliases a@b.com')
        l.check(('test', 'DEBUG',
                 'fd:29193:recv data=b\'aliases a@b.com\''))

    @log_capture()
    def test_accept(self, l):
        server = FakeSocket(926)
        client = FakeSocket(927, 'testpeer')
        self.log.accept(server, client)
        self.log.accept(server, client, 'testpeer2')
        l.check(('test', 'DEBUG',
                 'fd:926:accept clientfd=927 peer=\'testpeer\''),
                ('test', 'DEBUG',
                 'fd:926:accept clientfd=927 peer=\'testpeer2\''))

    @log_capture()
    def test_error(self, l):
        sock = FakeSocket(123)
        self.log.error(sock, ValueError('invalid netstring length'))
        l.check(('test', 'ERROR',
                 'fd:123:error args=(\'invalid netstring length\',) '
                 'message=\'invalid netstring length\''))


# vim:et:fdm=marker:sts=4:sw=4:ts=4
