""" Lifetime management for the shared secret of an encrypted channel.
"""

import logging

from . import crypto
from .errors import SecretBoxOpenerRemoved
from .states import ConnectionState

logger = logging.getLogger(__name__)

ABSENT = 'ABSENT'
PRESENT = 'PRESENT'


class SecretKeyLifecycleManager:
    """ Create, hold, and destroy the :class:`pushchan.crypto.SecretBoxOpener`
        for a single channel. The key never outlives the connection that
        authorized it: :func:`create` registers for the connection's
        DISCONNECTED notification, and that notification disposes the key.
        Reconnecting always re-authorizes and installs a fresh key; the old
        key bytes are never reused.

        The state cycles ABSENT -> PRESENT -> ABSENT, and may do so any
        number of times over the life of the channel.

        If *on_revoked* is provided it is invoked, with no arguments, after
        the key is disposed because the connection went away.
    """

    def __init__(self, connection, channel, kind, on_revoked=None):

        self.connection = connection
        self.channel = channel
        self.kind = kind
        self.on_revoked = on_revoked

        self._opener = None
        self._subscription = None


    @property
    def state(self):
        if self._opener is None:
            return ABSENT
        return PRESENT


    @property
    def opener(self):
        """ The live opener, or None. Decryption goes through the opener;
            the key bytes themselves are not reachable from here.
        """

        return self._opener


    def create(self, key):
        """ Install a new opener for *key*. The caller must :func:`dispose`
            any existing key first; calling this while a key is present is
            a programming error.
        """

        if self.kind.requires_secret:
            pass
        else:
            raise ValueError("%s channel %s cannot hold a shared secret" % (self.kind, self.channel))

        if self._opener is not None:
            raise RuntimeError('a key is already present for ' + self.channel + ', dispose it first')

        self._opener = crypto.SecretBoxOpener(key)
        self._subscription = self.connection.bind(ConnectionState.DISCONNECTED, self._disconnected)

        logger.debug('key created for %s', self.channel)


    def dispose(self):
        """ Clear the key and unregister the connection observer. Calling
            this when no key is present does nothing; disposal may be
            triggered by an explicit unsubscribe and by a disconnect in
            either order.
        """

        opener = self._opener
        if opener is None:
            return

        self._opener = None
        opener.clear_key()

        subscription = self._subscription
        self._subscription = None
        if subscription is not None:
            subscription.release()

        logger.debug('key disposed for %s', self.channel)


    def decrypt(self, envelope):
        """ Decrypt an encrypted event *envelope* with the current key.
        """

        opener = self._opener
        if opener is None:
            raise SecretBoxOpenerRemoved('no key is present for ' + self.channel)

        return opener.open_message(envelope)


    def _disconnected(self, change):

        if self._opener is None:
            return

        self.dispose()

        if self.on_revoked is not None:
            self.on_revoked()


# end of class SecretKeyLifecycleManager


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
