""" Class representations of the three envelopes exchanged with the remote
    engine: the :class:`Request` a client sends, the :class:`Response` that
    answers it, and the unsolicited :class:`Notification` pushed for a
    subscribed key. :func:`parse` turns one raw message off the wire into
    either of the latter two.
"""

import logging

from .. import errors
from .. import json
from . import commands
from . import fields

logger = logging.getLogger(__name__)


class Request:
    """ A :class:`Request` is built once per call and never modified after
        it is encoded. The envelope carries the correlation *id*, the stored
        credentials, the *command* tag, and the caller's *payload* fields
        merged at the top level.

        The reserved keys (id, username, password, command) always carry the
        values supplied here; a field in *payload* with one of those names is
        dropped rather than allowed to override them.

        :ivar envelope: The dictionary that will be put on the wire.
    """

    def __init__(self, id, command, payload=None, username='', password=''):

        if id is None:
            raise ValueError('requests must have an id to be put on the wire')

        command = commands.validate(command)

        self.id = id
        self.command = command

        envelope = dict()
        envelope[fields.ID] = id
        envelope[fields.USERNAME] = username
        envelope[fields.PASSWORD] = password
        envelope[fields.COMMAND] = command.value

        if payload:
            for key, value in payload.items():
                if key in fields.RESERVED:
                    logger.debug('%s %s: dropping reserved field %r', command.value, id, key)
                    continue
                envelope[key] = value

        self.envelope = envelope
        self._encoded = None


    def __repr__(self):
        return 'Request(%s, %r)' % (self.command.value, self.id)


    def encode(self):
        """ Return the JSON encoding of the envelope as bytes. Calling this
            method multiple times will return the cached encoding rather than
            generate it anew.
        """

        if self._encoded is None:
            self._encoded = json.dumps(self.envelope)

        return self._encoded


# end of class Request



class Response:
    """ The engine's answer to a :class:`Request`. The *body* is the full
        decoded envelope, including the echoed id.
    """

    def __init__(self, body):
        self.body = body


    def __repr__(self):
        return 'Response(%r)' % (self.id,)


    @property
    def id(self):
        return self.body[fields.ID]


# end of class Response



class Notification:
    """ An unsolicited message pushed by the engine for a subscribed *key*.
        Notifications never carry a correlation id.
    """

    def __init__(self, key, data=None):
        self.key = key
        self.data = data


    def __repr__(self):
        return 'Notification(%r)' % (self.key,)


# end of class Notification



def parse(raw):
    """ Decode one *raw* message (bytes or str) received from the engine.
        Returns a :class:`Notification` if the message is tagged as one,
        otherwise a :class:`Response`. A :class:`satori.errors.ProtocolError`
        is raised if the message is not a JSON object, or if the field its
        kind requires (the key of a notification, the id of a response) is
        missing or is not a scalar that can be looked up.
    """

    try:
        decoded = json.loads(raw)
    except (json.DecodeError, ValueError) as e:
        raise errors.ProtocolError('message is not valid JSON: %s' % (e,)) from e

    if not isinstance(decoded, dict):
        raise errors.ProtocolError('message is not a JSON object: %r' % (type(decoded).__name__,))

    if decoded.get(fields.TYPE) == fields.NOTIFICATION:
        try:
            key = decoded[fields.KEY]
        except KeyError:
            raise errors.ProtocolError('notification has no %r field' % (fields.KEY,)) from None

        if not isinstance(key, str):
            raise errors.ProtocolError('notification key must be a string, not %s' % (type(key).__name__,))

        return Notification(key, decoded.get(fields.DATA))

    try:
        id = decoded[fields.ID]
    except KeyError:
        raise errors.ProtocolError('response has no %r field' % (fields.ID,)) from None

    # bool is an int subclass, but is never a correlation id.
    if isinstance(id, bool) or not isinstance(id, (str, int)):
        raise errors.ProtocolError('response id must be a string, not %s' % (type(id).__name__,))

    return Response(decoded)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
