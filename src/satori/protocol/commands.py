"""The closed vocabulary of command tags understood by the remote engine."""

from __future__ import annotations

import enum


class Command(str, enum.Enum):
    """ Every command tag the client is allowed to send. The value of each
        member is the literal string placed in the ``command`` field of a
        request envelope.
    """

    # Key/value store
    SET = "SET"
    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"

    # Vertices and references
    SET_VERTEX = "SET_VERTEX"
    GET_VERTEX = "GET_VERTEX"
    DELETE_VERTEX = "DELETE_VERTEX"
    SET_REF = "SET_REF"
    GET_REFS = "GET_REFS"
    DELETE_REFS = "DELETE_REFS"
    DELETE_REF = "DELETE_REF"

    QUERY = "QUERY"
    DFS = "DFS"

    ENCRYPT = "ENCRYPT"
    DECRYPT = "DECRYPT"

    # Arrays
    PUSH = "PUSH"
    POP = "POP"
    SPLICE = "SPLICE"
    REMOVE = "REMOVE"

    NOTIFY = "NOTIFY"
    UNNOTIFY = "UNNOTIFY"

    # Embeddings and language
    ASK = "ASK"
    ANN = "ANN"
    GET_SIMILAR = "GET_SIMILAR"
    TRAIN = "TRAIN"

    # Introspection
    GET_OPERATIONS = "GET_OPERATIONS"
    GET_ACCESS_FREQUENCY = "GET_ACCESS_FREQUENCY"
    SET_MIDDLEWARE = "SET_MIDDLEWARE"

    # Graph analysis
    GRAPH_BFS = "GRAPH_BFS"
    GRAPH_DFS = "GRAPH_DFS"
    GRAPH_SHORTEST_PATH = "GRAPH_SHORTEST_PATH"
    GRAPH_CONNECTED_COMPONENTS = "GRAPH_CONNECTED_COMPONENTS"
    GRAPH_SCC = "GRAPH_SCC"
    GRAPH_DEGREE_CENTRALITY = "GRAPH_DEGREE_CENTRALITY"
    GRAPH_CLOSENESS_CENTRALITY = "GRAPH_CLOSENESS_CENTRALITY"
    GRAPH_CENTROID = "GRAPH_CENTROID"

    # Mindspaces
    SET_MINDSPACE = "SET_MINDSPACE"
    DELETE_MINDSPACE = "DELETE_MINDSPACE"
    CHAT_MINDSPACE = "CHAT_MINDSPACE"
    LECTURE_MINDSPACE = "LECTURE_MINDSPACE"

    def __str__(self) -> str:
        return self.value


def validate(command) -> Command:
    """ Return the :class:`Command` member for *command*, which may be a
        member or its string tag. A ValueError is raised for anything outside
        the vocabulary.
    """

    try:
        return Command(command)
    except ValueError:
        raise ValueError("unknown command: %r" % (command,)) from None
