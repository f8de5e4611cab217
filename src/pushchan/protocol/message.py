""" A class representation of an outgoing protocol message, including
    subclasses for specific messages.
"""

from .. import json
from . import fields


class Message:
    """ The :class:`Message` provides a very thin encapsulation of what it
        means to be a message sent by a client. The fields are in the order
        they are represented on the wire: the *event* name, the *channel*
        (only present for client events), and the *data*. The order of the
        keys within *data*, when it is a mapping, is preserved as given.

        Messages are treated as immutable once constructed; the encoded
        form is generated once and cached.
    """

    def __init__(self, event, data=None, channel=None):

        self.event = event
        self.channel = channel
        self.data = data

        self._encapsulated = None


    def __eq__(self, other):
        try:
            return self.dict() == other.dict()
        except AttributeError:
            return NotImplemented


    def __repr__(self):
        return self.encapsulate().decode()


    def dict(self):
        """ Return the message as a Python dictionary, in wire order.
        """

        message = dict()
        message['event'] = self.event

        if self.channel is not None:
            message['channel'] = self.channel

        if isinstance(self.data, dict):
            message['data'] = dict(self.data)
        else:
            message['data'] = self.data

        return message


    def encapsulate(self):
        ''' Return the JSON encoding of this message as bytes. Calling this
            method multiple times will return the cached encapsulation rather
            than generate it anew.
        '''

        if self._encapsulated:
            return self._encapsulated

        encapsulated = json.dumps(self.dict())

        self._encapsulated = encapsulated
        return encapsulated


# end of class Message



class SubscribeMessage(Message):
    """ Request a subscription to *channel*. Protected channels include the
        *auth* token and, if the authorizer supplied one, the opaque
        *channel_data*. Optional fields that are None are omitted entirely,
        never sent as null.
    """

    def __init__(self, channel, auth=None, channel_data=None):

        data = dict()
        data[fields.CHANNEL] = channel

        if auth is not None:
            data[fields.AUTH] = auth

        if channel_data is not None:
            data[fields.CHANNEL_DATA] = channel_data

        Message.__init__(self, fields.SUBSCRIBE, data)


# end of class SubscribeMessage



class UnsubscribeMessage(Message):

    def __init__(self, channel):

        data = dict()
        data[fields.CHANNEL] = channel

        Message.__init__(self, fields.UNSUBSCRIBE, data)


# end of class UnsubscribeMessage



class TriggerMessage(Message):
    """ A client-originated event. The *data* is an opaque string, sent
        as-is; validation happens in :mod:`pushchan.trigger` before one of
        these is constructed.
    """

    def __init__(self, event, channel, data):
        Message.__init__(self, event, data, channel)


# end of class TriggerMessage


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
