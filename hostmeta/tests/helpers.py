import os

import httplib2

from ..http import Client

FIXTURES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'fixtures')


def fixture(name):
    """Return the contents of a file in the fixtures directory"""
    with open(os.path.join(FIXTURES, name)) as fh:
        return fh.read()


class RoutingHttp(object):
    """A stand in for httplib2.Http that answers by URL

    Any URL without a route gets a 404, which is how metadata services say a field isn't there.

    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def request(self, uri, method='GET', body=None, headers=None, **kwargs):
        self.requests.append((uri, method, headers))

        status, content = self.routes.get(uri, (404, ''))
        if isinstance(content, str):
            content = content.encode('utf-8')

        return httplib2.Response({'status': str(status)}), content

    def requested(self):
        return [uri for uri, _, _ in self.requests]


def make_client(routes=None, **kwargs):
    """Return a (client, http) pair where the client never waits between attempts"""
    http = RoutingHttp(routes)

    kwargs.setdefault('initial_backoff', 0)
    kwargs.setdefault('max_attempts', 3)

    return Client(http=http, **kwargs), http
