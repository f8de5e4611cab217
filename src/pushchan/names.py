""" Channel name validation. Every check here runs before any network
    interaction; an invalid name never reaches the authorizer or the
    transport.
"""

import re

from . import kinds
from .errors import InvalidChannelName

maximum_length = 164
characters = re.compile(r'^[-a-zA-Z0-9_=@,.;]+$')


def validate(name, kind=None):
    """ Raise :class:`pushchan.errors.InvalidChannelName` if *name* is not
        acceptable for *kind*. If no *kind* is given it is derived from the
        name prefix. Returns the kind used for the check.

        A name is invalid if it does not carry the kind's required prefix,
        or if it matches any of the kind's disallowed patterns; the latter
        is how 'private-encrypted-' names are kept out of the plain private
        kind.
    """

    if isinstance(name, str) and name != '':
        pass
    else:
        raise InvalidChannelName(name, kind, 'must be a non-empty string')

    if kind is None:
        kind = kinds.of(name)

    if len(name) > maximum_length:
        raise InvalidChannelName(name, kind, 'longer than %d characters' % (maximum_length))

    if characters.match(name) is None:
        raise InvalidChannelName(name, kind, 'contains characters outside [-a-zA-Z0-9_=@,.;]')

    if name.startswith(kind.prefix):
        pass
    else:
        raise InvalidChannelName(name, kind, 'must start with ' + repr(kind.prefix))

    for pattern in kind.disallowed:
        if pattern.search(name):
            raise InvalidChannelName(name, kind, 'matches disallowed pattern ' + repr(pattern.pattern))

    return kind


def is_valid(name, kind=None):
    """ Return True if *name* passes :func:`validate`, otherwise False.
    """

    try:
        validate(name, kind)
    except InvalidChannelName:
        return False

    return True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
