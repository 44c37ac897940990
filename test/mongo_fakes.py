
class FakeCollection(object):

    def __init__(self, *results):
        self.results = list(results)
        self.queries = []

    def find_one(self, query, projection=None):
        self.queries.append((query, projection))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeDatabase(object):

    def __init__(self, client, name):
        self.client = client
        self.name = name

    def __getitem__(self, name):
        self.client.opened.append((self.name, name))
        return self.client.collection


class FakeClient(object):

    def __init__(self, ping_error=None, collection=None):
        self.ping_error = ping_error
        self.collection = collection or FakeCollection()
        self.admin = self
        self.opened = []
        self.pings = 0
        self.closed = False

    def command(self, name):
        assert name == 'ping'
        self.pings += 1
        if self.ping_error is not None:
            raise self.ping_error
        return {'ok': 1.0}

    def __getitem__(self, name):
        return FakeDatabase(self, name)

    def close(self):
        self.closed = True


# vim:et:fdm=marker:sts=4:sw=4:ts=4
