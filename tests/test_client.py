""" Exercise the correlation and dispatch machinery of :class:`satori.Client`
    against an in-memory engine. Calls block, so each one is issued from a
    worker thread while the test plays the engine's part.
"""

import concurrent.futures
import itertools
import queue
import threading

import pytest
import satori

from conftest import FakeTransport, echo


@pytest.fixture
def workers():
    pool = concurrent.futures.ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=False)


def test_call_before_connect():

    client = satori.Client('ws://engine.test:1234', transport=lambda host: FakeTransport())

    with pytest.raises(satori.NotConnectedError):
        client.call('GET', {'key': 'a'})

    assert client.pending() == ()


def test_connect_failure():

    engine = FakeTransport()
    engine.fail_open = True

    client = satori.Client('ws://engine.test:1234', transport=lambda host: engine)

    with pytest.raises(satori.ConnectionError):
        client.connect()

    assert client.connected == False

    # The builtin exception is a parent class.
    assert issubclass(satori.ConnectionError, ConnectionError)


def test_round_trip(client, engine, workers):

    future = workers.submit(client.call, 'GET', {'key': 'a'})

    request = engine.request()
    id = request['id']

    assert request == {
        'id': id,
        'username': 'user',
        'password': 'secret',
        'command': 'GET',
        'key': 'a',
    }

    engine.push({'id': id, 'value': 'v'})

    assert future.result(timeout=2) == {'id': id, 'value': 'v'}
    assert client.pending() == ()


def test_reserved_keys_on_the_wire(client, engine):

    engine.respond = echo

    fields = dict()
    fields['id'] = 'forged'
    fields['username'] = 'mallory'
    fields['password'] = 'guess'
    fields['command'] = 'DELETE'
    fields['key'] = 'a'

    response = client.call('GET', fields)

    assert response['id'] != 'forged'
    assert response['username'] == 'user'
    assert response['password'] == 'secret'
    assert response['command'] == 'GET'
    assert response['key'] == 'a'


def test_unknown_command(client):

    with pytest.raises(ValueError):
        client.call('NOT_A_COMMAND')

    assert client.pending() == ()


def test_interleaved_responses(client, engine, workers):

    first = workers.submit(client.call, 'GET', {'key': 'first'})
    first_request = engine.request()

    second = workers.submit(client.call, 'GET', {'key': 'second'})
    second_request = engine.request()

    assert first_request['id'] != second_request['id']
    assert len(client.pending()) == 2

    # Answer in the reverse order.

    engine.push({'id': second_request['id'], 'value': 'two'})
    assert second.result(timeout=2)['value'] == 'two'
    assert first.done() == False

    engine.push({'id': first_request['id'], 'value': 'one'})
    assert first.result(timeout=2)['value'] == 'one'

    assert client.pending() == ()


def test_unmatched_and_malformed_messages_are_discarded(client, engine, workers):

    future = workers.submit(client.call, 'GET', {'key': 'a'})
    request = engine.request()

    engine.push({'id': 'ffffffff', 'value': 'stray'})
    engine.push_raw(b'this is not json')
    engine.push_raw(b'{"value": "no id"}')
    engine.push_raw(b'{"id": ["x"], "value": 1}')
    engine.push_raw(b'{"id": {"x": 1}, "value": 1}')
    engine.push({'id': request['id'], 'value': 'mine'})

    assert future.result(timeout=2)['value'] == 'mine'
    assert client.connected == True


def test_malformed_notification_key_is_discarded(client, engine):

    received = queue.Queue()

    engine.respond = echo
    client.subscribe('a', received.put)

    engine.push({'type': 'notification', 'key': ['x'], 'data': 1})
    engine.push({'type': 'notification', 'key': {'x': 1}, 'data': 1})
    engine.push({'type': 'notification', 'key': 'a', 'data': 2})

    assert received.get(timeout=2) == 2
    assert client.connected == True


def test_notifier_survives_a_failing_delivery():

    delivered = queue.Queue()

    def method(item):
        if item == 'bad':
            raise TypeError('cannot deliver')
        delivered.put(item)

    notifier = satori.client._Notifier(method)
    notifier.put('bad')
    notifier.put('good')

    assert delivered.get(timeout=2) == 'good'

    notifier.stop()
    notifier.thread.join(2)
    assert notifier.thread.is_alive() == False


def test_notification_delivery(client, engine, workers):

    received = queue.Queue()

    engine.respond = echo
    client.subscribe('a', received.put)
    engine.respond = None

    request = engine.request()
    assert request['command'] == 'NOTIFY'
    assert request['key'] == 'a'
    assert client.subscriptions() == ('a',)

    # A notification arriving while a call is pending goes to the callback,
    # and leaves the pending call alone.

    future = workers.submit(client.call, 'GET', {'key': 'b'})
    pending = engine.request()

    engine.push({'type': 'notification', 'key': 'a', 'data': {'value': 1}})

    assert received.get(timeout=2) == {'value': 1}
    assert future.done() == False

    engine.push({'id': pending['id'], 'value': 'b'})
    assert future.result(timeout=2)['value'] == 'b'

    # Exactly once.
    assert received.empty()


def test_notification_without_subscriber(client, engine):

    engine.respond = echo

    engine.push({'type': 'notification', 'key': 'nobody', 'data': 1})
    response = client.call('GET', {'key': 'a'})

    assert response['key'] == 'a'


def test_notification_arriving_before_subscribe_reply(client, engine):

    received = queue.Queue()

    def respond(request):
        # Push the first notification ahead of the NOTIFY reply.
        engine.push({'type': 'notification', 'key': request['key'], 'data': 'early'})
        return dict(request)

    engine.respond = respond
    client.subscribe('a', received.put)

    assert received.get(timeout=2) == 'early'


def test_unsubscribe(client, engine):

    removed = queue.Queue()
    kept = queue.Queue()

    engine.respond = echo
    client.subscribe('removed', removed.put)
    client.subscribe('kept', kept.put)

    response = client.unsubscribe('removed')
    assert response['command'] == 'UNNOTIFY'
    assert response['key'] == 'removed'
    assert client.subscriptions() == ('kept',)

    # Notifications are handled in order; once the second one has been
    # delivered the late one for the removed key has been dealt with too.

    engine.push({'type': 'notification', 'key': 'removed', 'data': 'late'})
    engine.push({'type': 'notification', 'key': 'kept', 'data': 'marker'})

    assert kept.get(timeout=2) == 'marker'
    assert removed.empty()


def test_resubscribe_replaces_callback(client, engine):

    first = queue.Queue()
    second = queue.Queue()

    engine.respond = echo
    client.subscribe('a', first.put)
    client.subscribe('a', second.put)

    engine.push({'type': 'notification', 'key': 'a', 'data': 1})

    assert second.get(timeout=2) == 1
    assert first.empty()


def test_subscribe_rolls_back_on_failure(client, engine):

    client.timeout = 0.1

    with pytest.raises(satori.TimeoutError):
        client.subscribe('a', print)

    assert client.subscriptions() == ()
    assert client.pending() == ()

    with pytest.raises(TypeError):
        client.subscribe('a', 'not callable')


def test_subscribe_failure_restores_previous_callback(client, engine):

    received = queue.Queue()

    engine.respond = echo
    client.subscribe('a', received.put)

    def replacement(data):
        raise AssertionError('rolled back callback was invoked')

    client.timeout = 0.1
    engine.respond = None

    with pytest.raises(satori.TimeoutError):
        client.subscribe('a', replacement)

    assert client.subscriptions() == ('a',)

    engine.push({'type': 'notification', 'key': 'a', 'data': 'still here'})
    assert received.get(timeout=2) == 'still here'


def test_callback_failure_does_not_stop_delivery(client, engine):

    received = queue.Queue()

    def broken(data):
        raise RuntimeError('callback failure')

    engine.respond = echo
    client.subscribe('broken', broken)
    client.subscribe('working', received.put)

    engine.push({'type': 'notification', 'key': 'broken', 'data': 1})
    engine.push({'type': 'notification', 'key': 'working', 'data': 2})

    assert received.get(timeout=2) == 2
    assert client.connected == True


def test_slow_callback_does_not_block_responses(client, engine):

    release = threading.Event()
    entered = threading.Event()

    def slow(data):
        entered.set()
        release.wait(5)

    engine.respond = echo
    client.subscribe('slow', slow)

    engine.push({'type': 'notification', 'key': 'slow', 'data': None})
    assert entered.wait(2)

    # The callback is still blocked; responses must get through regardless.
    response = client.call('GET', {'key': 'a'}, timeout=2)
    assert response['key'] == 'a'

    release.set()


def test_timeout(client, engine):

    with pytest.raises(satori.TimeoutError):
        client.call('GET', {'key': 'a'}, timeout=0.1)

    assert client.pending() == ()
    timed_out = engine.request()

    # The connection is still usable, and the late response for the call
    # that timed out is discarded.

    engine.push({'id': timed_out['id'], 'value': 'late'})

    engine.respond = echo
    response = client.call('GET', {'key': 'b'}, timeout=2)
    assert response['key'] == 'b'

    assert issubclass(satori.TimeoutError, TimeoutError)


def test_transport_failure_fails_pending_calls(client, engine, workers):

    first = workers.submit(client.call, 'GET', {'key': 'a'})
    second = workers.submit(client.call, 'GET', {'key': 'b'})
    engine.request()
    engine.request()

    engine.drop()

    for future in (first, second):
        with pytest.raises(satori.TransportError):
            future.result(timeout=2)

    assert client.pending() == ()
    assert client.connected == False
    assert engine.closed == True

    with pytest.raises(satori.NotConnectedError):
        client.call('GET', {'key': 'c'})


def test_send_failure_fails_every_pending_call(client, engine, workers):

    in_flight = workers.submit(client.call, 'GET', {'key': 'a'})
    engine.request()

    engine.closed = True

    with pytest.raises(satori.TransportError):
        client.call('GET', {'key': 'b'})

    # The call already waiting on the connection fails too.

    with pytest.raises(satori.TransportError):
        in_flight.result(timeout=2)

    assert client.pending() == ()
    assert client.connected == False

    with pytest.raises(satori.NotConnectedError):
        client.call('GET', {'key': 'c'})


def test_close_fails_pending_calls(client, engine, workers):

    future = workers.submit(client.call, 'GET', {'key': 'a'})
    engine.request()

    client.close()

    with pytest.raises(satori.TransportError):
        future.result(timeout=2)

    assert client.pending() == ()
    assert client.connected == False
    assert engine.closed == True


def test_reconnect_creates_new_transport():

    created = list()

    def factory(host):
        engine = FakeTransport(respond=echo)
        created.append(engine)
        return engine

    client = satori.Client('ws://engine.test:1234', timeout=2, transport=factory)

    with client:
        client.connect()
        assert len(created) == 1
        assert client.call('GET', {'key': 'a'})['key'] == 'a'

    assert created[0].closed == True

    with client:
        assert len(created) == 2
        assert client.call('GET', {'key': 'b'})['key'] == 'b'


def test_id_collision_is_skipped(client, engine, workers):

    client._ids = itertools.count(5)

    future = workers.submit(client.call, 'GET', {'key': 'a'})
    held = engine.request()
    assert held['id'] == '00000005'

    # Rewind the counter; the id still pending must not be reissued.

    client._ids = itertools.count(5)
    engine.respond = echo

    response = client.call('GET', {'key': 'b'})
    assert response['id'] == '00000006'

    engine.respond = None
    engine.push({'id': held['id'], 'value': 'a'})
    assert future.result(timeout=2)['value'] == 'a'


def test_from_config(tmp_path, monkeypatch):

    monkeypatch.setattr(satori.config.directory, 'found', str(tmp_path))
    monkeypatch.setenv('SATORI_HOST', 'ws://configured:4321')
    monkeypatch.setenv('SATORI_USERNAME', 'configured')
    monkeypatch.delenv('SATORI_PASSWORD', raising=False)
    monkeypatch.delenv('SATORI_TIMEOUT', raising=False)

    client = satori.Satori.from_config(timeout=3)

    assert isinstance(client, satori.Satori)
    assert client.host == 'ws://configured:4321'
    assert client.username == 'configured'
    assert client.password == ''
    assert client.timeout == 3


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
