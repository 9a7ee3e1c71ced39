""" A :class:`Schema` groups the schema name, key, and body of one entity so
    the same values can be replayed into several commands without spelling
    out each field every time::

        user = satori.schema('user', key='ada').set_body({'name': 'Ada'})
        user.set()
        user.set_vertex()
        user.get_vertex()
"""

from .protocol import fields


class Schema:
    """ Hold a *name*, *key*, and *body* for the given *client*, which is
        expected to be a :class:`satori.facade.Satori` instance.
    """

    def __init__(self, client, name, key=None, body=None):
        self.client = client
        self.name = name
        self.key = key
        self.body = body


    def __repr__(self):
        return 'Schema(%r, key=%r)' % (self.name, self.key)


    def set_body(self, body):
        self.body = body
        return self


    def set_key(self, key):
        self.key = key
        return self


    def _fields(self, data=False):
        payload = dict()
        payload[fields.SCHEMA] = self.name
        payload[fields.KEY] = self.key

        if data:
            payload[fields.DATA] = self.body

        return payload


    def set(self):
        return self.client.set(self._fields(data=True))


    def delete(self):
        return self.client.delete(self._fields())


    def encrypt(self):
        return self.client.encrypt(self._fields(data=True))


    def decrypt(self):
        return self.client.decrypt(self._fields(data=True))


    def set_vertex(self):
        return self.client.set_vertex(self._fields(data=True))


    def get_vertex(self):
        return self.client.get_vertex(self._fields())


    def delete_vertex(self):
        return self.client.delete_vertex(self._fields())


    def dfs(self):
        return self.client.dfs(self._fields(data=True))


    def set_ref(self):
        return self.client.set_ref(self._fields(data=True))


    def get_refs(self):
        return self.client.get_refs(self._fields())


    def delete_refs(self):
        return self.client.delete_refs(self._fields())


    def push(self):
        return self.client.push(self._fields(data=True))


    def pop(self):
        return self.client.pop(self._fields())


    def splice(self):
        return self.client.splice(self._fields(data=True))


    def remove(self):
        return self.client.remove(self._fields(data=True))


# end of class Schema


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
