""" Connection and channel state vocabulary. Connection states are owned by
    the transport; channel states are owned by :class:`pushchan.Channel`.
    Nothing in this package mutates a connection state, it only observes.
"""


class ConnectionState:

    CONNECTING = 'CONNECTING'
    CONNECTED = 'CONNECTED'
    DISCONNECTING = 'DISCONNECTING'
    DISCONNECTED = 'DISCONNECTED'
    RECONNECTING = 'RECONNECTING'

    valid = set((CONNECTING, CONNECTED, DISCONNECTING, DISCONNECTED, RECONNECTING))


class ChannelState:

    INITIAL = 'INITIAL'
    SUBSCRIBE_SENT = 'SUBSCRIBE_SENT'
    SUBSCRIBED = 'SUBSCRIBED'
    UNSUBSCRIBED = 'UNSUBSCRIBED'
    FAILED = 'FAILED'

    valid = set((INITIAL, SUBSCRIBE_SENT, SUBSCRIBED, UNSUBSCRIBED, FAILED))


class ConnectionStateChange:
    """ The argument handed to any callback registered via
        :func:`pushchan.connection.Connection.bind`.
    """

    def __init__(self, previous, current):
        self.previous = previous
        self.current = current


    def __repr__(self):
        return "ConnectionStateChange(%s -> %s)" % (self.previous, self.current)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
