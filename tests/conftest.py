import queue

import pytest

import satori


class FakeTransport(satori.transport.Transport):
    """ In-memory stand-in for the remote engine. Whatever the client sends
        is decoded and queued for the test to inspect via :func:`request`;
        whatever the test hands to :func:`push` is what the client receives.
        If *respond* is set, it is invoked with every decoded request and its
        return value, if any, is pushed straight back as the reply.
    """

    def __init__(self, respond=None):
        self.respond = respond
        self.inbound = queue.Queue()
        self.outbound = queue.Queue()
        self.fail_open = False
        self.opened = False
        self.closed = False

    @property
    def is_open(self):
        return self.opened and not self.closed

    def open(self):
        if self.fail_open:
            raise satori.errors.ConnectionError('connection refused')
        self.opened = True

    def close(self):
        self.closed = True

    def send(self, data):
        if self.closed:
            raise satori.errors.TransportError('connection is closed')

        request = satori.json.loads(data)
        self.outbound.put(request)

        if self.respond is not None:
            reply = self.respond(request)
            if reply is not None:
                self.push(reply)

    def recv(self, timeout=None):
        try:
            item = self.inbound.get(timeout=timeout)
        except queue.Empty:
            return None

        if isinstance(item, Exception):
            raise item

        return item

    # Engine-side helpers.

    def request(self, timeout=2):
        return self.outbound.get(timeout=timeout)

    def push(self, envelope):
        self.inbound.put(satori.json.dumps(envelope))

    def push_raw(self, raw):
        self.inbound.put(raw)

    def drop(self):
        self.inbound.put(satori.errors.TransportError('connection reset by peer'))


def echo(request):
    """ Answer every request with a copy of itself, which conveniently
        carries the correlation id.
    """

    return dict(request)


@pytest.fixture
def engine():
    return FakeTransport()


@pytest.fixture
def client(engine):

    instance = satori.Satori('ws://engine.test:1234', 'user', 'secret', timeout=5, transport=lambda host: engine)
    instance.connect()

    yield instance

    instance.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
