"""Envelope field names and message kind tags.

Keep these in one place to avoid stringly-typed message handling.
"""

ID = "id"
USERNAME = "username"
PASSWORD = "password"
COMMAND = "command"

TYPE = "type"
KEY = "key"
DATA = "data"

# Builder fields used by satori.schema.
SCHEMA = "schema"

# Message kind tags carried in the TYPE field.
NOTIFICATION = "notification"

# Request keys that always carry client-assigned values; caller supplied
# fields with these names are dropped.
RESERVED = frozenset((ID, USERNAME, PASSWORD, COMMAND))
