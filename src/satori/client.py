""" The :class:`Client` issues commands to the remote engine and receives
    both the responses to those commands and unsolicited notifications, all
    over a single connection.

    Three threads cooperate:

    * the caller's thread, which registers a :class:`PendingCall`, writes the
      request, and blocks on the pending call's event;
    * the dispatcher thread, which owns the receiving end of the transport,
      matches each response to its pending call by correlation id, and hands
      notifications off to the notifier;
    * the notifier thread, which invokes subscription callbacks in the order
      notifications arrived, so that a slow callback never delays delivery
      of a response.
"""

import itertools
import logging
import queue
import threading

from . import config
from . import errors
from . import transport as transports
from .protocol import commands
from .protocol import fields
from .protocol import message

logger = logging.getLogger(__name__)


class PendingCall:
    """ Client-side synchronization for a single outstanding request. The
        caller blocks in :func:`wait`; the dispatcher completes the call with
        either a :class:`message.Response` or an exception.

        :ivar response: The response, once one arrives.
        :ivar error: The exception that failed this call, if any.
    """

    def __init__(self, request):
        self.request = request
        self.response = None
        self.error = None
        self.event = threading.Event()


    @property
    def id(self):
        return self.request.id


    def _complete(self, response):
        self.response = response
        self.event.set()


    def _fail(self, error):
        self.error = error
        self.event.set()


    def poll(self):
        """ Return True if the call is complete, otherwise return False.
        """

        return self.event.is_set()


    def wait(self, timeout=None):
        """ Block until the call completes. Returns False if *timeout*
            seconds elapse first; if *timeout* is None this will block
            indefinitely.
        """

        return self.event.wait(timeout)


    def result(self):
        """ Return the body of the response, or raise the exception that
            failed the call.
        """

        if self.error is not None:
            raise self.error

        return self.response.body


# end of class PendingCall



class Client:
    """ Maintain a connection to the remote engine at *host*. The *username*
        and *password* are sent with every request. *timeout* is the default
        number of seconds :func:`call` will wait for a response; None waits
        forever. *transport* is a factory that accepts the host and returns
        an unopened :class:`satori.transport.Transport`; the default picks
        one from the URL scheme.

        :ivar host: The engine endpoint.
        :ivar transport: The open transport, or None when disconnected.
    """

    poll_interval = 0.1

    def __init__(self, host, username='', password='', timeout=None, transport=None):

        if transport is None:
            transport = transports.create

        self.host = host
        self.username = username
        self.password = password
        self.timeout = timeout
        self.transport_factory = transport
        self.transport = None

        self._lock = threading.Lock()
        self._pending = dict()
        self._subscriptions = dict()
        self._ids = itertools.count(_id_min)
        self._connected = False
        self._closing = None
        self._dispatcher = None
        self._notifier = None


    @classmethod
    def from_config(cls, profile='default', **overrides):
        """ Create an instance from the settings stored for *profile*; see
            :func:`satori.config.load`. Keyword arguments override the
            stored settings.
        """

        settings = config.load(profile)
        settings.update(overrides)
        return cls(**settings)


    def __enter__(self):
        self.connect()
        return self


    def __exit__(self, *exc_info):
        self.close()


    @property
    def connected(self):
        return self._connected


    def connect(self):
        """ Open the connection to the engine and start the background
            threads. A :class:`satori.errors.ConnectionError` is raised if
            the transport cannot be established. Calling this method while
            already connected has no effect; calling it after :func:`close`
            or a transport failure establishes a new connection.
        """

        with self._lock:
            if self._connected:
                return

            transport = self.transport_factory(self.host)

            try:
                transport.open()
            except errors.ConnectionError:
                raise
            except OSError as e:
                raise errors.ConnectionError('cannot connect to %s: %s' % (self.host, e)) from e

            closing = threading.Event()

            self.transport = transport
            self._closing = closing
            self._notifier = _Notifier(self._notify)
            self._dispatcher = threading.Thread(target=self.run, args=(transport, closing, self._notifier))
            self._dispatcher.daemon = True
            self._connected = True
            self._dispatcher.start()

        logger.info('connected to %s', self.host)


    def close(self):
        """ Close the connection. Any calls still awaiting a response fail
            with a :class:`satori.errors.TransportError`. Subscriptions are
            kept, but the engine will not resume notifications on a new
            connection unless they are subscribed again.
        """

        with self._lock:
            if not self._connected:
                return

            closing = self._closing
            dispatcher = self._dispatcher

        closing.set()

        if dispatcher is not threading.current_thread():
            dispatcher.join()


    def call(self, command, payload=None, timeout=None):
        """ Send *command* with the *payload* fields and block until the
            matching response arrives. The full response envelope is
            returned as a dictionary. If *timeout* (default: the instance's
            timeout) elapses first, a :class:`satori.errors.TimeoutError` is
            raised; the connection and other pending calls are unaffected.
        """

        if timeout is None:
            timeout = self.timeout

        with self._lock:
            if not self._connected:
                raise errors.NotConnectedError('connect() must be called before issuing commands')

            id = self._id_next()
            request = message.Request(id, command, payload, self.username, self.password)
            data = request.encode()
            pending = PendingCall(request)
            self._pending[id] = pending
            transport = self.transport
            closing = self._closing

        logger.debug('send %s %s', request.command.value, id)

        try:
            transport.send(data)
        except errors.TransportError as e:
            # A failed send means the connection is gone; the dispatcher
            # tears it down and fails every other pending call.
            logger.error('send to %s failed: %s', self.host, e)
            self._abandon(pending)
            closing.set()
            raise

        if pending.wait(timeout):
            return pending.result()

        if self._abandon(pending):
            raise errors.TimeoutError('%s %s: no response in %.2f sec' % (request.command.value, id, timeout))

        # The dispatcher claimed the response in the gap between the wait
        # expiring and the entry being removed; it is about to complete.

        pending.wait()
        return pending.result()


    def subscribe(self, key, callback):
        """ Invoke *callback* with the data of every notification the engine
            pushes for *key*. The callback is registered before the NOTIFY
            request goes out, so no notification sent in reply is missed. A
            new callback for the same key replaces the old one. If the
            request fails the registration is rolled back.
        """

        if not callable(callback):
            raise TypeError('the subscription callback must be callable')

        with self._lock:
            previous = self._subscriptions.get(key)
            self._subscriptions[key] = callback

        try:
            return self.call(commands.Command.NOTIFY, {fields.KEY: key})
        except BaseException:
            with self._lock:
                if self._subscriptions.get(key) is callback:
                    if previous is None:
                        del self._subscriptions[key]
                    else:
                        self._subscriptions[key] = previous
            raise


    def unsubscribe(self, key):
        """ Stop invoking the callback for *key*, then ask the engine to stop
            pushing notifications for it. Any notification for *key* that
            arrives afterwards is discarded.
        """

        with self._lock:
            self._subscriptions.pop(key, None)

        return self.call(commands.Command.UNNOTIFY, {fields.KEY: key})


    def subscriptions(self):
        """ Return the keys that currently have a registered callback.
        """

        with self._lock:
            return tuple(self._subscriptions.keys())


    def pending(self):
        """ Return the correlation ids of calls still awaiting a response.
        """

        with self._lock:
            return tuple(self._pending.keys())


    def run(self, transport, closing, notifier):
        """ This is the 'main' method for the dispatcher thread. It is the
            only reader of *transport*, and closes it on the way out.
        """

        error = None

        try:
            while not closing.is_set():
                try:
                    raw = transport.recv(self.poll_interval)
                except errors.TransportError as e:
                    error = e
                    break

                if raw is None:
                    continue

                self._incoming(raw, notifier)
        finally:
            if error is None:
                error = errors.TransportError('connection to %s closed' % (self.host))
            else:
                logger.error('connection to %s lost: %s', self.host, error)

            self._disconnect(transport, error, notifier)


    def _incoming(self, raw, notifier):
        """ Route one message off the wire: notifications to the notifier,
            responses to the call waiting on their correlation id.
        """

        try:
            envelope = message.parse(raw)
        except errors.ProtocolError as e:
            logger.warning('discarding malformed message from %s: %s', self.host, e)
            return

        if isinstance(envelope, message.Notification):
            notifier.put(envelope)
            return

        with self._lock:
            pending = self._pending.pop(envelope.id, None)

        if pending is None:
            logger.debug('discarding response with unmatched id %r', envelope.id)
            return

        pending._complete(envelope)


    def _notify(self, notification):
        """ Invoked on the notifier thread. The callback is looked up at this
            point, not when the notification arrived, so that an unsubscribe
            takes effect for notifications still queued.
        """

        with self._lock:
            callback = self._subscriptions.get(notification.key)

        if callback is None:
            return

        try:
            callback(notification.data)
        except Exception:
            logger.exception('notification callback for %r failed', notification.key)


    def _abandon(self, pending):
        """ Remove *pending* from the registry. Returns True if it was still
            there, False if the dispatcher had already claimed it.
        """

        with self._lock:
            if self._pending.get(pending.id) is pending:
                del self._pending[pending.id]
                return True

        return False


    def _disconnect(self, transport, error, notifier):

        with self._lock:
            if self.transport is transport:
                self.transport = None
                self._connected = False

            failed = list(self._pending.values())
            self._pending.clear()

        try:
            transport.close()
        except errors.TransportError as e:
            logger.debug('error closing transport to %s: %s', self.host, e)
        finally:
            for pending in failed:
                failure = errors.TransportError(str(error))
                failure.__cause__ = error
                pending._fail(failure)

            notifier.stop()
        logger.info('disconnected from %s', self.host)


    def _id_next(self):
        """ Return the next correlation id not already in use by a pending
            call. Must be called with the lock held.
        """

        while True:
            id = next(self._ids)

            if id >= _id_max:
                self._ids = itertools.count(_id_min)

            id = '%08x' % (id)

            if id not in self._pending:
                return id


# end of class Client



_id_min = 0
_id_max = 0xFFFFFFFF


class _NotifierWake(RuntimeError):
    pass


class _Notifier:
    """ Background thread to invoke subscription callbacks. This allows the
        dispatcher sitting on the transport to be consistent and tight,
        where a user-provided callback may require an unbounded amount of
        time to process.
    """

    def __init__(self, method):

        self.method = method
        self.queue = queue.SimpleQueue()
        self.shutdown = False

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def put(self, notification):
        self.queue.put(notification)


    def run(self):

        while True:
            dequeued = self.queue.get()

            if isinstance(dequeued, _NotifierWake):
                if self.shutdown == True:
                    break
                continue

            try:
                self.method(dequeued)
            except Exception:
                logger.exception('unhandled error delivering %r', dequeued)


    def stop(self):
        self.shutdown = True
        self.queue.put(_NotifierWake())


# end of class _Notifier


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
