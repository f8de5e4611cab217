""" Exceptions raised by the channel subscription layer. Every exception
    carries the context needed to act on it without re-running the failed
    operation: the channel name, the state(s) involved, and for
    authorization failures, the raw payload returned by the authorizer.

    None of these are retried internally; retry policy, if any, belongs to
    the caller or the transport.
"""


class ChannelError(Exception):
    """ Base class for all channel-layer errors.
    """


class InvalidChannelName(ChannelError, ValueError):
    """ The channel name is not acceptable for the channel kind. """

    def __init__(self, name, kind, reason=None):

        self.name = name
        self.kind = kind
        self.reason = reason

        error = "invalid %s channel name: %r" % (kind, name)
        if reason:
            error = error + ' (' + reason + ')'

        ChannelError.__init__(self, error)


class InvalidClientEventName(ChannelError, ValueError):

    def __init__(self, event):
        self.event = event
        error = "cannot trigger event %r: client events must start with \"client-\"" % (event,)
        ChannelError.__init__(self, error)


class InvalidChannelState(ChannelError, RuntimeError):

    def __init__(self, event, channel, state):
        self.event = event
        self.channel = channel
        self.state = state
        error = "cannot trigger event %s because channel %s is in %s state" % (event, channel, state)
        ChannelError.__init__(self, error)


class InvalidConnectionState(ChannelError, RuntimeError):

    def __init__(self, event, state):
        self.event = event
        self.state = state
        error = "cannot trigger event %s because connection is in %s state" % (event, state)
        ChannelError.__init__(self, error)


class InvalidEventPayload(ChannelError, ValueError):

    def __init__(self, event, data):
        self.event = event
        self.data = data
        error = "cannot trigger event %s because %r could not be parsed as valid JSON" % (event, data)
        ChannelError.__init__(self, error)


class AuthorizationFailure(ChannelError):
    """ The authorizer failed, or its response could not be used. The
        original *payload* is retained for diagnostics; a malformed payload
        is never treated as "no authorization required".
    """

    def __init__(self, message, payload=None, channel=None):
        self.payload = payload
        self.channel = channel

        if channel is not None:
            message = message + " (channel " + channel + ")"

        ChannelError.__init__(self, message)


class MissingAuthToken(AuthorizationFailure):
    """ The authorization response has no usable 'auth' token. """


class MissingSharedSecret(AuthorizationFailure):
    """ The authorization response for an encrypted channel has no usable
        'shared_secret'. The channel cannot reach a consistent subscribed
        state without one.
    """


class SecretBoxOpenerRemoved(ChannelError, RuntimeError):
    """ A decryption was attempted after the key material was disposed. """


class DecryptionFailure(ChannelError, ValueError):
    """ The ciphertext could not be authenticated with the current key, or
        the encrypted envelope itself was malformed.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
