import pytest

import pushchan
from pushchan.states import ConnectionState

from conftest import RecordingConnection


class Observer:
    def __init__(self):
        self.changes = list()

    def changed(self, change):
        self.changes.append((change.previous, change.current))


def test_initial_state():

    connection = RecordingConnection()
    assert connection.state == ConnectionState.DISCONNECTED
    assert connection.is_connected == False


def test_bind_specific_state():

    connection = RecordingConnection()
    observer = Observer()
    connection.bind(ConnectionState.DISCONNECTED, observer.changed)

    connection.update_state(ConnectionState.CONNECTING)
    connection.update_state(ConnectionState.CONNECTED)
    assert observer.changes == []

    connection.update_state(ConnectionState.DISCONNECTED)
    assert observer.changes == [(ConnectionState.CONNECTED, ConnectionState.DISCONNECTED)]


def test_bind_all_states():

    connection = RecordingConnection()
    observer = Observer()
    connection.bind(None, observer.changed)

    connection.update_state(ConnectionState.CONNECTING)
    connection.update_state(ConnectionState.CONNECTING)
    connection.update_state(ConnectionState.CONNECTED)

    assert observer.changes == [
        (ConnectionState.DISCONNECTED, ConnectionState.CONNECTING),
        (ConnectionState.CONNECTING, ConnectionState.CONNECTED),
    ]


def test_unbind():

    connection = RecordingConnection()
    observer = Observer()
    subscription = connection.bind(ConnectionState.CONNECTED, observer.changed)

    assert connection.unbind(subscription) == True
    assert connection.unbind(subscription) == False

    connection.update_state(ConnectionState.CONNECTED)
    assert observer.changes == []


def test_invalid_state():

    connection = RecordingConnection()

    with pytest.raises(ValueError):
        connection.bind('SLEEPING', print)

    with pytest.raises(ValueError):
        connection.update_state('SLEEPING')


def test_abstract():

    with pytest.raises(TypeError):
        pushchan.Connection()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
