import base64
import threading

import nacl.utils
import pytest

import pushchan


class RecordingConnection(pushchan.Connection):
    """ In-memory stand-in for the transport: every message handed to
        send() is kept, in order, for inspection.
    """

    def __init__(self, socket_id='1234.5678'):
        pushchan.Connection.__init__(self)
        self.socket_id = socket_id
        self.sent = list()

    def send(self, message):
        self.sent.append(message)


class StaticAuthorizer(pushchan.Authorizer):
    """ Return the configured *response* for every call, or raise *error*.
        If *hold* is set, the first call blocks until it is released.
    """

    def __init__(self, response=None, error=None, hold=False):
        self.response = response
        self.error = error
        self.calls = list()
        self.entered = threading.Event()
        self.release = threading.Event()

        if hold == False:
            self.release.set()

    def authorize(self, channel_name, socket_id, append_token=None):
        self.calls.append((channel_name, socket_id))

        if len(self.calls) == 1:
            self.entered.set()
            self.release.wait(5)

        if self.error is not None:
            raise self.error

        return self.response


class RecordingListener(pushchan.listeners.PrivateEncryptedChannelEventListener,
                        pushchan.listeners.PresenceChannelEventListener):

    def __init__(self):
        self.succeeded = list()
        self.events = list()
        self.failures = list()
        self.channel_data = list()
        self.decryption_failures = list()

    def on_subscription_succeeded(self, channel_name):
        self.succeeded.append(channel_name)

    def on_event(self, event):
        self.events.append(event)

    def on_authentication_failure(self, message, exception):
        self.failures.append(exception)

    def on_channel_data_received(self, channel_name, channel_data):
        self.channel_data.append((channel_name, channel_data))

    def on_decryption_failure(self, event, reason):
        self.decryption_failures.append((event, reason))


@pytest.fixture
def connection():
    connection = RecordingConnection()
    connection.update_state(pushchan.ConnectionState.CONNECTED)
    return connection


@pytest.fixture
def dispatcher():
    dispatcher = pushchan.Dispatcher()
    yield dispatcher
    dispatcher.stop()


@pytest.fixture
def worker(dispatcher):
    worker = pushchan.AuthorizationWorker(dispatcher, workers=2)
    yield worker
    worker.shutdown(wait=False)


@pytest.fixture
def key():
    return nacl.utils.random(32)


@pytest.fixture
def secret(key):
    return base64.b64encode(key).decode()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
