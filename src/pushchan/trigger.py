""" Validation and sending of client-originated ("client-*") events.
"""

from . import json
from .errors import InvalidChannelState, InvalidClientEventName, InvalidConnectionState, InvalidEventPayload
from .protocol import fields
from .protocol.message import TriggerMessage
from .states import ChannelState, ConnectionState


class ClientEventGate:
    """ Check the preconditions for a client event and hand the resulting
        :class:`pushchan.protocol.message.TriggerMessage` to the
        *connection*. Failures in the transport itself are the transport's
        business, and are not handled here.
    """

    def __init__(self, connection):
        self.connection = connection


    def check(self, channel, event, data, channel_state, connection_state):
        """ Raise the appropriate exception if any precondition fails;
            otherwise return the :class:`TriggerMessage` to send. The checks
            run in a fixed order, so the event name is rejected first
            regardless of any state.
        """

        if isinstance(event, str) and event.startswith(fields.CLIENT_PREFIX):
            pass
        else:
            raise InvalidClientEventName(event)

        if channel_state != ChannelState.SUBSCRIBED:
            raise InvalidChannelState(event, channel, channel_state)

        if connection_state != ConnectionState.CONNECTED:
            raise InvalidConnectionState(event, connection_state)

        if isinstance(data, str):
            pass
        else:
            raise InvalidEventPayload(event, data)

        try:
            data.encode('utf-8')
            json.loads(data)
        except json.DecodeError + (UnicodeError,):
            raise InvalidEventPayload(event, data)

        return TriggerMessage(event, channel, data)


    def trigger(self, channel, event, data, channel_state, connection_state=None):
        """ Validate and send a client *event* with *data* on *channel*. If
            no *connection_state* is given the connection's current state is
            used. Returns the message that was sent.
        """

        if connection_state is None:
            connection_state = self.connection.state

        message = self.check(channel, event, data, channel_state, connection_state)
        self.connection.send(message)
        return message


# end of class ClientEventGate


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
