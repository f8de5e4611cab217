import pytest

import pushchan
from pushchan.protocol import auth
from pushchan.protocol import builder
from pushchan.protocol.message import SubscribeMessage, TriggerMessage, UnsubscribeMessage


def test_public():

    message = builder.build('chat')

    assert message.dict() == {'event': 'pusher:subscribe', 'data': {'channel': 'chat'}}
    assert message.encapsulate() == b'{"event":"pusher:subscribe","data":{"channel":"chat"}}'


def test_private_with_channel_data():

    payload = '{"auth":"123:abc","channel_data":"{\\"uid\\":42}"}'
    result = auth.parse(payload, pushchan.kinds.PRIVATE, 'private-chat')

    message = builder.SubscribeMessageBuilder().build('private-chat', result)

    expected = b'{"event":"pusher:subscribe","data":{"channel":"private-chat","auth":"123:abc","channel_data":"{\\"uid\\":42}"}}'
    assert message.encapsulate() == expected


def test_field_order():

    result = auth.AuthorizationResult('123:abc', channel_data='{}')
    message = builder.build('presence-room', result)

    data = message.dict()['data']
    assert list(data) == ['channel', 'auth', 'channel_data']

    # The order must survive the trip through the JSON backend.
    decoded = pushchan.json.loads(message.encapsulate())
    assert list(decoded) == ['event', 'data']
    assert list(decoded['data']) == ['channel', 'auth', 'channel_data']


def test_absent_channel_data_omitted():

    result = auth.AuthorizationResult('123:abc')
    message = builder.build('private-chat', result)

    assert message.dict()['data'] == {'channel': 'private-chat', 'auth': '123:abc'}
    assert b'null' not in message.encapsulate()


def test_pure():

    result = auth.AuthorizationResult('123:abc', channel_data='x')

    first = builder.build('private-chat', result)
    second = builder.build('private-chat', result)

    assert first is not second
    assert first == second
    assert first.encapsulate() == second.encapsulate()


def test_messages():

    message = UnsubscribeMessage('chat')
    assert message.encapsulate() == b'{"event":"pusher:unsubscribe","data":{"channel":"chat"}}'

    message = TriggerMessage('client-typing', 'private-chat', '{"who":"me"}')
    assert message.dict() == {'event': 'client-typing', 'channel': 'private-chat', 'data': '{"who":"me"}'}

    message = SubscribeMessage('chat', auth=None, channel_data=None)
    assert message.dict()['data'] == {'channel': 'chat'}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
