""" Interpretation of the response returned by an authorizer.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Mapping, Optional

from .. import json
from ..errors import AuthorizationFailure, MissingAuthToken, MissingSharedSecret
from . import fields

logger = logging.getLogger(__name__)

key_size = 32


class AuthorizationResult:
    """ The parsed authorization for a single subscribe attempt. Instances
        are not modified after :func:`parse` creates them.

        :ivar auth: The signed token, always a non-empty string.
        :ivar channel_data: Opaque string forwarded verbatim, or None.
        :ivar shared_secret: Decoded key bytes for an encrypted channel,
            otherwise None.
    """

    __slots__ = ('auth', 'channel_data', 'shared_secret')

    def __init__(self, auth: str, channel_data: Optional[str] = None, shared_secret: Optional[bytes] = None):
        object.__setattr__(self, 'auth', auth)
        object.__setattr__(self, 'channel_data', channel_data)
        object.__setattr__(self, 'shared_secret', shared_secret)


    def __setattr__(self, name, value):
        raise AttributeError('AuthorizationResult is immutable')


    def __repr__(self):
        if self.shared_secret is None:
            secret = 'None'
        else:
            secret = '<redacted>'

        return "AuthorizationResult(auth=%r, channel_data=%r, shared_secret=%s)" % (self.auth, self.channel_data, secret)


def decode(payload: Any, channel: Optional[str] = None) -> Mapping:
    """ Return the authorizer *payload* as a mapping. A raw JSON string (or
        bytes) is decoded; a mapping is accepted as-is.
    """

    if isinstance(payload, Mapping):
        return payload

    if isinstance(payload, (str, bytes, bytearray)):
        pass
    else:
        raise AuthorizationFailure('unable to parse response from authorizer', payload, channel)

    try:
        decoded = json.loads(payload)
    except json.DecodeError + (UnicodeDecodeError,) as e:
        raise AuthorizationFailure('unable to parse response from authorizer', payload, channel) from e

    if isinstance(decoded, dict):
        pass
    else:
        raise AuthorizationFailure('response from authorizer is not a JSON object', payload, channel)

    return decoded


def parse(payload: Any, kind, channel: Optional[str] = None) -> AuthorizationResult:
    """ Parse the authorizer *payload* for a channel of the given *kind*.
        Missing or malformed fields raise an
        :class:`pushchan.errors.AuthorizationFailure` (or one of its
        subclasses) carrying the original payload; nothing is defaulted.
    """

    if kind.requires_auth == False:
        raise ValueError("%s channels do not require authorization" % (kind,))

    response = decode(payload, channel)

    auth = response.get(fields.AUTH)

    if auth is None or auth == '':
        raise MissingAuthToken("authorizer response has no 'auth' token", payload, channel)

    if isinstance(auth, str):
        pass
    else:
        raise AuthorizationFailure("'auth' must be a string", payload, channel)

    channel_data = response.get(fields.CHANNEL_DATA)

    if channel_data is None or isinstance(channel_data, str):
        pass
    else:
        raise AuthorizationFailure("'channel_data' must be a string", payload, channel)

    secret = response.get(fields.SHARED_SECRET)

    if kind.requires_secret:
        shared_secret = _decode_secret(secret, payload, channel)
    else:
        if secret is not None:
            logger.debug('ignoring shared_secret supplied for %s channel %s', kind, channel)
        shared_secret = None

    return AuthorizationResult(auth, channel_data, shared_secret)


def _decode_secret(secret, payload, channel):

    if secret is None or secret == '':
        raise MissingSharedSecret("authorizer response has no 'shared_secret'", payload, channel)

    if isinstance(secret, str):
        pass
    else:
        raise AuthorizationFailure("'shared_secret' must be a string", payload, channel)

    try:
        decoded = base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AuthorizationFailure("'shared_secret' is not valid base64", payload, channel) from e

    if len(decoded) != key_size:
        raise AuthorizationFailure("'shared_secret' must decode to %d bytes, not %d" % (key_size, len(decoded)), payload, channel)

    return decoded


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
