from . import fields
from . import message
from . import auth
from . import builder


"""
pushchan Protocol Layer
=======================

This package defines the messages a client sends when subscribing to,
unsubscribing from, and triggering events on a channel, along with the
interpretation of authorizer responses.

The protocol layer MUST NOT depend on any transport implementation, nor
on channel state; every function here is a pure transform.

---------------------------------------------------------------------

Layer Overview
--------------

Channel (pushchan.channel)
    │
    ▼
Subscribe Builder (builder.py)
    channel name + AuthorizationResult -> SubscribeMessage
    │
    ▼
Authorization Parser (auth.py)
    raw authorizer payload -> AuthorizationResult
    │
    ▼
Message Model (message.py)
    SubscribeMessage, UnsubscribeMessage, TriggerMessage
    │
    ▼
Field Vocabulary (fields.py)
    Canonical event and field names

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
