""" The :class:`Satori` facade: one method per engine command. Each method
    merges the command tag with the caller's fields and hands the result to
    :func:`satori.client.Client.call`; no method adds protocol logic of its
    own.

    Fields may be given as a mapping, as keyword arguments, or both::

        satori.get({'key': 'user:1'})
        satori.set(key='user:1', data={'name': 'Ada'}, expires=True)
"""

from .client import Client
from .protocol.commands import Command
from .schema import Schema


def _merge(payload, kwargs):
    if payload is None:
        return kwargs

    merged = dict(payload)
    merged.update(kwargs)
    return merged


class Satori(Client):
    """ A :class:`satori.client.Client` with a method for every command in
        the engine's vocabulary. All of them return the full response
        envelope as a dictionary.
    """

    def schema(self, name, key=None, body=None):
        """ Return a :class:`satori.schema.Schema` bound to this client.
        """

        return Schema(self, name, key=key, body=body)


    def set(self, payload=None, **kwargs):
        return self.call(Command.SET, _merge(payload, kwargs))


    def get(self, payload=None, **kwargs):
        return self.call(Command.GET, _merge(payload, kwargs))


    def put(self, payload=None, **kwargs):
        return self.call(Command.PUT, _merge(payload, kwargs))


    def delete(self, payload=None, **kwargs):
        return self.call(Command.DELETE, _merge(payload, kwargs))


    def set_vertex(self, payload=None, **kwargs):
        return self.call(Command.SET_VERTEX, _merge(payload, kwargs))


    def get_vertex(self, payload=None, **kwargs):
        return self.call(Command.GET_VERTEX, _merge(payload, kwargs))


    def delete_vertex(self, payload=None, **kwargs):
        return self.call(Command.DELETE_VERTEX, _merge(payload, kwargs))


    def set_ref(self, payload=None, **kwargs):
        return self.call(Command.SET_REF, _merge(payload, kwargs))


    def get_refs(self, payload=None, **kwargs):
        return self.call(Command.GET_REFS, _merge(payload, kwargs))


    def delete_refs(self, payload=None, **kwargs):
        return self.call(Command.DELETE_REFS, _merge(payload, kwargs))


    def delete_ref(self, payload=None, **kwargs):
        return self.call(Command.DELETE_REF, _merge(payload, kwargs))


    def query(self, payload=None, **kwargs):
        return self.call(Command.QUERY, _merge(payload, kwargs))


    def dfs(self, payload=None, **kwargs):
        return self.call(Command.DFS, _merge(payload, kwargs))


    def encrypt(self, payload=None, **kwargs):
        return self.call(Command.ENCRYPT, _merge(payload, kwargs))


    def decrypt(self, payload=None, **kwargs):
        return self.call(Command.DECRYPT, _merge(payload, kwargs))


    def push(self, payload=None, **kwargs):
        return self.call(Command.PUSH, _merge(payload, kwargs))


    def pop(self, payload=None, **kwargs):
        return self.call(Command.POP, _merge(payload, kwargs))


    def splice(self, payload=None, **kwargs):
        return self.call(Command.SPLICE, _merge(payload, kwargs))


    def remove(self, payload=None, **kwargs):
        return self.call(Command.REMOVE, _merge(payload, kwargs))


    # Embeddings and language

    def ask(self, payload=None, **kwargs):
        """ Pose a natural language question; the engine answers from the
            stored data.
        """

        return self.call(Command.ASK, _merge(payload, kwargs))


    def ann(self, payload=None, **kwargs):
        return self.call(Command.ANN, _merge(payload, kwargs))


    def get_similar(self, payload=None, **kwargs):
        return self.call(Command.GET_SIMILAR, _merge(payload, kwargs))


    def train(self, payload=None, **kwargs):
        return self.call(Command.TRAIN, _merge(payload, kwargs))


    # Introspection and middleware

    def get_operations(self):
        """ Return the engine's record of recent operations. This command
            takes no fields.
        """

        return self.call(Command.GET_OPERATIONS)


    def get_access_frequency(self, payload=None, **kwargs):
        return self.call(Command.GET_ACCESS_FREQUENCY, _merge(payload, kwargs))


    def set_middleware(self, payload=None, **kwargs):
        return self.call(Command.SET_MIDDLEWARE, _merge(payload, kwargs))


    # Graph analysis

    def graph_bfs(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_BFS, _merge(payload, kwargs))


    def graph_dfs(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_DFS, _merge(payload, kwargs))


    def graph_shortest_path(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_SHORTEST_PATH, _merge(payload, kwargs))


    def graph_connected_components(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_CONNECTED_COMPONENTS, _merge(payload, kwargs))


    def graph_scc(self, payload=None, **kwargs):
        """ Strongly connected components.
        """

        return self.call(Command.GRAPH_SCC, _merge(payload, kwargs))


    def graph_degree_centrality(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_DEGREE_CENTRALITY, _merge(payload, kwargs))


    def graph_closeness_centrality(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_CLOSENESS_CENTRALITY, _merge(payload, kwargs))


    def graph_centroid(self, payload=None, **kwargs):
        return self.call(Command.GRAPH_CENTROID, _merge(payload, kwargs))


    # Mindspaces

    def set_mindspace(self, payload=None, **kwargs):
        return self.call(Command.SET_MINDSPACE, _merge(payload, kwargs))


    def create_mindspace(self, payload=None, **kwargs):
        """ Alias for :func:`set_mindspace`.
        """

        return self.set_mindspace(payload, **kwargs)


    def delete_mindspace(self, payload=None, **kwargs):
        return self.call(Command.DELETE_MINDSPACE, _merge(payload, kwargs))


    def chat_mindspace(self, payload=None, **kwargs):
        return self.call(Command.CHAT_MINDSPACE, _merge(payload, kwargs))


    def lecture_mindspace(self, payload=None, **kwargs):
        return self.call(Command.LECTURE_MINDSPACE, _merge(payload, kwargs))


    # Notifications

    def notify(self, key, callback):
        """ Alias for :func:`satori.client.Client.subscribe`.
        """

        return self.subscribe(key, callback)


    def unnotify(self, key):
        """ Alias for :func:`satori.client.Client.unsubscribe`.
        """

        return self.unsubscribe(key)


# end of class Satori


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
