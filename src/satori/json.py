''' The JSON codec for envelopes on the wire, built on msgspec. :func:`dumps`
    returns bytes; :func:`loads` accepts bytes or str, the latter being what
    a WebSocket text frame arrives as.
'''

import msgspec


encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

# Raised by loads() for anything that is not well-formed JSON.
DecodeError = msgspec.DecodeError


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
