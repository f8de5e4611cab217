""" The closed set of channel kinds. Each :class:`Kind` is a tagged variant
    carrying everything that differs between kinds: the naming rules, whether
    authorization and a shared secret are required, and which listener class
    may be bound. Behavior is dispatched on these attributes rather than via
    channel subclasses.
"""

import re

from . import listeners


class Kind:
    """ A channel kind. Instances are only created in this module; compare
        kinds with ``is``.

        :ivar name: Human-readable name of the kind.
        :ivar prefix: The leading token every channel name of this kind must
            carry; the empty string means no required prefix.
        :ivar disallowed: Compiled patterns that a name of this kind must
            not match.
        :ivar requires_auth: Whether subscribing requires an authorizer.
        :ivar requires_secret: Whether authorization must deliver a shared
            secret, and the channel must hold a live key to be subscribed.
        :ivar listener: The listener class that may be bound.
    """

    def __init__(self, name, prefix, disallowed, requires_auth, requires_secret, listener):

        self.name = name
        self.prefix = prefix
        self.disallowed = tuple(re.compile(pattern) for pattern in disallowed)
        self.requires_auth = requires_auth
        self.requires_secret = requires_secret
        self.listener = listener


    def __repr__(self):
        return 'Kind(' + self.name + ')'


    def __str__(self):
        return self.name


    @property
    def title(self):
        return self.name.replace('-', ' ').title()


# end of class Kind


PUBLIC = Kind('public', '',
        (r'^private-', r'^presence-'),
        requires_auth=False, requires_secret=False,
        listener=listeners.ChannelEventListener)

PRIVATE = Kind('private', 'private-',
        (r'^private-encrypted-',),
        requires_auth=True, requires_secret=False,
        listener=listeners.PrivateChannelEventListener)

PRESENCE = Kind('presence', 'presence-',
        (),
        requires_auth=True, requires_secret=False,
        listener=listeners.PresenceChannelEventListener)

PRIVATE_ENCRYPTED = Kind('private-encrypted', 'private-encrypted-',
        (),
        requires_auth=True, requires_secret=True,
        listener=listeners.PrivateEncryptedChannelEventListener)

# Order matters for of(): the longest prefix must be tested first.

variants = (PRIVATE_ENCRYPTED, PRIVATE, PRESENCE, PUBLIC)


def of(name):
    """ Return the :class:`Kind` implied by the prefix of the channel *name*.
    """

    for kind in variants:
        if name.startswith(kind.prefix):
            return kind

    # Unreachable: the public prefix is the empty string.
    return PUBLIC


def lookup(name):
    """ Return the :class:`Kind` with the given *name*, such as 'presence'.
    """

    for kind in variants:
        if kind.name == name:
            return kind

    raise KeyError('unknown channel kind: ' + repr(name))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
