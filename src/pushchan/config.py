""" Runtime configuration. Values are taken from an explicit argument, then
    from the environment, then from the built-in default; the result is
    cached on the function object, so changes to the environment are
    ignored after the first call.
"""

import os

default_workers = 4


def workers(default=None):
    """ Return the number of background threads used to call authorizers.
        This defaults to 4, but can be overridden by calling this method with
        a positive integer, or by setting the ``PUSHCHAN_AUTH_WORKERS``
        environment variable.
    """

    if default is not None:
        workers.found = _positive(default, 'worker count')

    found = workers.found

    if found is not None:
        return found

    try:
        found = os.environ['PUSHCHAN_AUTH_WORKERS']
    except KeyError:
        found = default_workers
    else:
        found = _positive(found, 'PUSHCHAN_AUTH_WORKERS')

    workers.found = found
    return found

workers.found = None



def _positive(value, label):

    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValueError("%s must be an integer, not %r" % (label, value))

    if value < 1:
        raise ValueError("%s must be positive, not %d" % (label, value))

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
