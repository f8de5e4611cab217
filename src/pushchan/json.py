''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`.

    Whichever library is selected, :func:`dumps` returns compact UTF-8
    bytes with mapping order preserved; the subscribe message is positional
    on the wire, and must come out the same regardless of the backend.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available. With
# the right build process this could be determined at build time, instead
# of at run time.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. To
# maintain alignment all 'dumps' methods need to do so as well.

def json_dumps(*args, **kwargs):
    return json.dumps(*args, separators=(',', ':'), ensure_ascii=False, **kwargs).encode()

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = (msgspec.DecodeError,)
    EncodeError = (msgspec.EncodeError, TypeError, UnicodeEncodeError)
    library = 'msgspec'
elif orjson is not None:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = (orjson.JSONDecodeError,)
    EncodeError = (orjson.JSONEncodeError,)
    library = 'orjson'
else:
    dumps = json_dumps
    loads = json.loads
    DecodeError = (json.JSONDecodeError,)
    EncodeError = (TypeError, ValueError)
    library = 'json'


def dumps_str(value):
    ''' Same as :func:`dumps`, but return a string instead of bytes.
    '''

    return dumps(value).decode()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
