""" Callback registration for channel events and connection state changes,
    and the listener classes that may be bound to a channel.
"""

import logging
import threading
import weakref

logger = logging.getLogger(__name__)


def ref(thing):
    """ Return a weak reference to the supplied argument, regardless of
        whether it is a simple object or a bound method.
    """

    try:
        thing.__func__
        thing.__self__
    except AttributeError:
        return weakref.ref(thing)
    else:
        return weakref.WeakMethod(thing)



class ChannelEvent:
    """ A single event delivered to a channel listener. The *data* is the
        event payload as received, or the decrypted plaintext for an
        encrypted channel.
    """

    def __init__(self, event, channel, data=None, user_id=None):
        self.event = event
        self.channel = channel
        self.data = data
        self.user_id = user_id


    def __repr__(self):
        return "ChannelEvent(event=%r, channel=%r, data=%r)" % (self.event, self.channel, self.data)



class ChannelEventListener:
    """ Base listener for public channels. Subclasses override whichever
        hooks they are interested in; the defaults do nothing.
    """

    def on_subscription_succeeded(self, channel_name):
        pass

    def on_event(self, event):
        pass


class PrivateChannelEventListener(ChannelEventListener):

    def on_authentication_failure(self, message, exception):
        pass

    def on_channel_data_received(self, channel_name, channel_data):
        pass


class PresenceChannelEventListener(PrivateChannelEventListener):
    pass


class PrivateEncryptedChannelEventListener(PrivateChannelEventListener):

    def on_decryption_failure(self, event, reason):
        pass



class Subscription:
    """ Handle returned by :func:`Registry.register`. Calling :func:`release`
        unregisters the callback; it is safe to call more than once, only
        the first call has any effect.
    """

    def __init__(self, registry, topic, reference):
        self.registry = registry
        self.topic = topic
        self.reference = reference
        self.released = False


    @property
    def active(self):
        return self.released == False


    def release(self):
        """ Returns True if this call removed the registration, False if it
            had already been released.
        """

        if self.released == True:
            return False

        self.released = True
        self.registry._remove(self.topic, self.reference)
        return True


# end of class Subscription



class Registry:
    """ Topic-keyed callback registration. Callbacks are held by weak
        reference: a registered callback does not keep its owner alive, and
        callbacks whose owner has gone away are silently pruned.
    """

    def __init__(self):
        self.callbacks = dict()
        self.lock = threading.Lock()


    def __len__(self):
        return sum(len(references) for references in self.callbacks.values())


    def register(self, callback, topic=None):
        """ Register a callback for a specific *topic*; a topic of None
            means the callback is interested in everything. Returns a
            :class:`Subscription` handle.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        reference = ref(callback)

        self.lock.acquire()
        try:
            references = self.callbacks[topic]
        except KeyError:
            references = list()
            self.callbacks[topic] = references

        references.append(reference)
        self.lock.release()

        return Subscription(self, topic, reference)


    def _remove(self, topic, reference):

        self.lock.acquire()
        try:
            references = self.callbacks[topic]
        except KeyError:
            self.lock.release()
            return

        try:
            references.remove(reference)
        except ValueError:
            pass

        if len(references) == 0:
            del self.callbacks[topic]

        self.lock.release()


    def live(self, topic):
        """ Return a list of the live callbacks registered for *topic*,
            pruning any that have been garbage collected.
        """

        self.lock.acquire()
        try:
            references = tuple(self.callbacks[topic])
        except KeyError:
            self.lock.release()
            return list()
        self.lock.release()

        callbacks = list()

        for reference in references:
            callback = reference()

            if callback is None:
                self._remove(topic, reference)
            else:
                callbacks.append(callback)

        return callbacks


    def propagate(self, topic, *args):
        """ Invoke any/all callbacks registered for *topic*, then any/all
            callbacks registered for every topic. An exception raised by one
            callback is logged and does not prevent the others from running.
        """

        callbacks = self.live(topic)
        if topic is not None:
            callbacks.extend(self.live(None))

        for callback in callbacks:
            try:
                callback(*args)
            except Exception:
                logger.exception('callback %r failed for %r', callback, topic)
                continue


# end of class Registry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
