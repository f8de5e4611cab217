""" The channel: a named subscription topic whose naming, authorization, and
    encryption rules depend on its :class:`pushchan.kinds.Kind`.
"""

import logging

from . import authorize
from . import json
from . import keys
from . import listeners
from . import names
from .errors import AuthorizationFailure, DecryptionFailure, SecretBoxOpenerRemoved
from .protocol import auth
from .protocol import builder
from .protocol import fields
from .protocol.message import UnsubscribeMessage
from .states import ChannelState, ConnectionState
from .trigger import ClientEventGate

logger = logging.getLogger(__name__)


class Channel:
    """ A :class:`Channel` represents one subscription on a *connection*.
        The *kind* is derived from the channel *name* unless it is given
        explicitly; either way the name is validated against the kind before
        anything else happens, and an invalid name raises
        :class:`pushchan.errors.InvalidChannelName`.

        Protected kinds (private, presence, private-encrypted) require an
        *authorizer*. The call to the authorizer runs on the background
        *worker*, and its result is applied on the worker's dispatcher; if
        no worker is given, the shared one from
        :func:`pushchan.authorize.worker` is used.

        Apart from :func:`subscribe` and :func:`trigger` being called by the
        application, every method here expects to run on the dispatch
        sequence; there is no internal locking.

        :ivar state: The current :class:`pushchan.states.ChannelState`.
        :ivar keys: The :class:`pushchan.keys.SecretKeyLifecycleManager` for
            an encrypted channel, otherwise None.
    """

    def __init__(self, connection, name, authorizer=None, worker=None, kind=None):

        kind = names.validate(name, kind)

        if kind.requires_auth and authorizer is None:
            raise ValueError("%s channel %s requires an authorizer" % (kind, name))

        self.name = name
        self.kind = kind
        self.connection = connection
        self.authorizer = authorizer
        self.worker = worker
        self.state = ChannelState.INITIAL
        self.gate = ClientEventGate(connection)

        if kind.requires_secret:
            self.keys = keys.SecretKeyLifecycleManager(connection, name, kind, self._key_revoked)
        else:
            self.keys = None

        self.events = listeners.Registry()

        # Keyed on (event, id(listener)); each value is the weak reference
        # to the listener and the Subscription for its on_event callback.

        self._bindings = dict()

        # Every subscribe attempt gets a new generation number; an
        # authorization result is only applied if its generation is still
        # the pending one. While an attempt is pending the channel watches
        # for DISCONNECTED itself, since no key exists yet to do it.

        self._generation = 0
        self._pending = None
        self._watch = None
        self._channel_data = None


    def __repr__(self):
        return "[%s Channel: name=%s]" % (self.kind.title, self.name)


    @property
    def listeners(self):
        """ The distinct listener objects currently bound to this channel.
        """

        self._prune()
        live = list()

        for reference, subscription in self._bindings.values():
            listener = reference()

            for existing in live:
                if existing is listener:
                    break
            else:
                if listener is not None:
                    live.append(listener)

        return live


    def _prune(self):
        """ Drop the bindings of listeners that have been garbage collected.
        """

        invalid = list()

        for binding, (reference, subscription) in self._bindings.items():
            if reference() is None:
                invalid.append(binding)

        for binding in invalid:
            reference, subscription = self._bindings.pop(binding)
            subscription.release()


    def bind(self, event, listener):
        """ Deliver events named *event* to *listener*; an *event* of None
            means every event. The listener must be an instance of the
            listener class for this channel's kind, otherwise TypeError is
            raised. Like other callbacks in pushchan, the listener is held
            by weak reference: the caller must keep it alive.
        """

        required = self.kind.listener

        if isinstance(listener, required):
            pass
        else:
            raise TypeError("only %s instances can be bound to a %s channel" % (required.__name__, self.kind))

        self._prune()
        binding = (event, id(listener))

        if binding in self._bindings:
            return

        subscription = self.events.register(listener.on_event, event)
        self._bindings[binding] = (listeners.ref(listener), subscription)


    def unbind(self, event, listener):

        self._prune()

        try:
            reference, subscription = self._bindings.pop((event, id(listener)))
        except KeyError:
            return

        subscription.release()


    def subscribe(self):
        """ Start a new subscribe attempt, superseding any attempt still in
            progress. A public channel sends its subscribe message right
            away and None is returned; a protected channel submits the
            authorization to the worker and returns the
            :class:`concurrent.futures.Future` for that call.
        """

        self._generation += 1
        generation = self._generation
        self._channel_data = None

        if self.kind.requires_auth == False:
            self._pending = None
            self._send_subscribe(builder.build(self.name))
            return None

        socket_id = self.connection.socket_id

        if socket_id is None:
            raise RuntimeError("cannot authorize %s: the connection has no socket id" % (self.name))

        worker = self.worker
        if worker is None:
            worker = authorize.worker()

        if self._watch is None:
            self._watch = self.connection.bind(ConnectionState.DISCONNECTED, self._disconnected)

        self._pending = generation
        return worker.submit(self.authorizer, self.name, socket_id, self._authorized, generation)


    def to_subscribe_message(self, response):
        """ Parse the authorizer *response* and return the subscribe message
            for this channel. For an encrypted channel this also replaces
            the key: any existing key is disposed before the new one is
            installed. A response that cannot be parsed raises
            :class:`pushchan.errors.AuthorizationFailure` and leaves no key
            installed.
        """

        if self.keys is not None:
            self.keys.dispose()

        result = auth.parse(response, self.kind, self.name)

        if self.keys is not None:
            self.keys.create(result.shared_secret)

        self._channel_data = result.channel_data
        return builder.build(self.name, result)


    def _authorized(self, generation, response, error):

        if generation != self._pending:
            logger.debug('discarding stale authorization for %s', self.name)
            return

        self._pending = None
        self._unwatch()

        if error is not None:
            failure = AuthorizationFailure('authorizer failed: ' + str(error), None, self.name)
            failure.__cause__ = error
            self._authorization_failed(failure)
            return

        try:
            message = self.to_subscribe_message(response)
        except AuthorizationFailure as failure:
            self._authorization_failed(failure)
            return

        self._send_subscribe(message)


    def _authorization_failed(self, failure):

        self.state = ChannelState.FAILED
        logger.warning('authorization failed for %s: %s', self.name, failure)

        if self.keys is not None:
            self.keys.dispose()

        self._notify('on_authentication_failure', str(failure), failure)


    def _send_subscribe(self, message):
        self.state = ChannelState.SUBSCRIBE_SENT
        self.connection.send(message)


    def unsubscribe(self):
        """ End the subscription. Any authorization still in flight is
            discarded when it arrives, and an encrypted channel's key is
            disposed.
        """

        self._generation += 1
        self._pending = None
        self._channel_data = None
        self._unwatch()

        if self.state in (ChannelState.SUBSCRIBE_SENT, ChannelState.SUBSCRIBED):
            self.connection.send(UnsubscribeMessage(self.name))

        self.state = ChannelState.UNSUBSCRIBED

        if self.keys is not None:
            self.keys.dispose()


    def _key_revoked(self):
        """ The connection went away and took the key with it. Fall back to
            INITIAL so that the next :func:`subscribe` re-authorizes; an
            authorization still in flight was made for the old connection
            and is discarded when it arrives.
        """

        self._generation += 1
        self._pending = None
        self._channel_data = None
        self._unwatch()

        if self.state in (ChannelState.SUBSCRIBE_SENT, ChannelState.SUBSCRIBED):
            self.state = ChannelState.INITIAL


    def _disconnected(self, change):

        if self.keys is not None:
            self.keys.dispose()

        self._key_revoked()


    def _unwatch(self):

        watch = self._watch
        self._watch = None

        if watch is not None:
            watch.release()


    def on_message(self, event, data=None, user_id=None):
        """ Handle an incoming frame addressed to this channel.
        """

        if event == fields.SUBSCRIPTION_SUCCEEDED:
            self._subscription_succeeded()
            return

        if event == fields.SUBSCRIPTION_ERROR:
            self._subscription_error(data)
            return

        internal = event.startswith(fields.PUSHER_PREFIX) or event.startswith(fields.INTERNAL_PREFIX)

        if self.keys is not None and internal == False:
            try:
                data = self._decrypt(data)
            except (DecryptionFailure, SecretBoxOpenerRemoved) as e:
                logger.warning('cannot decrypt %s on %s: %s', event, self.name, e)
                self._notify('on_decryption_failure', event, str(e))
                return

        event = listeners.ChannelEvent(event, self.name, data, user_id)
        self.events.propagate(event.event, event)


    def _decrypt(self, data):

        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except json.DecodeError + (UnicodeDecodeError,) as e:
                raise DecryptionFailure('encrypted event is not valid JSON') from e

        return self.keys.decrypt(data)


    def _subscription_succeeded(self):

        if self.state != ChannelState.SUBSCRIBE_SENT:
            logger.debug('ignoring subscription success for %s in %s state', self.name, self.state)
            return

        if self.keys is not None and self.keys.state != keys.PRESENT:
            failure = AuthorizationFailure('subscription succeeded with no key present', None, self.name)
            self._authorization_failed(failure)
            return

        self.state = ChannelState.SUBSCRIBED
        self._notify('on_subscription_succeeded', self.name)

        channel_data = self._channel_data
        self._channel_data = None

        if channel_data is not None:
            self._notify('on_channel_data_received', self.name, channel_data)


    def _subscription_error(self, data):

        if self.kind.requires_auth:
            failure = AuthorizationFailure('subscription rejected', data, self.name)
            self._authorization_failed(failure)
        else:
            self.state = ChannelState.FAILED
            logger.warning('subscription rejected for %s: %r', self.name, data)


    def _notify(self, hook, *args):
        """ Invoke the named *hook* on every bound listener that has one.
        """

        for listener in self.listeners:
            method = getattr(listener, hook, None)

            if method is None:
                continue

            try:
                method(*args)
            except Exception:
                logger.exception('%s listener %r failed', hook, listener)
                continue


    def trigger(self, event, data):
        """ Send a client event. See
            :func:`pushchan.trigger.ClientEventGate.check` for the
            preconditions, each of which raises its own exception.
        """

        return self.gate.trigger(self.name, event, data, self.state)


# end of class Channel


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
