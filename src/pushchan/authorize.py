""" The authorizer contract, and the worker pool that calls authorizers off
    the dispatch sequence.
"""

import atexit
import concurrent.futures
import logging
from abc import ABC, abstractmethod

from . import config
from . import dispatch

logger = logging.getLogger(__name__)


class Authorizer(ABC):
    """ Prove that this client may subscribe to a protected channel. The
        application implements :func:`authorize`, typically as an HTTP call
        to its own authorization endpoint.
    """

    @abstractmethod
    def authorize(self, channel_name, socket_id, append_token=None):
        """ Return the authorization for *channel_name* on the connection
            identified by *socket_id*: either the raw JSON response as a
            string, or an already-decoded mapping with 'auth' and optionally
            'channel_data' and 'shared_secret'. Raise an exception on
            failure; it is reported to the channel as an authorization
            failure.

            The optional *append_token* is for applications that call the
            authorizer directly with extra request data; the
            :class:`AuthorizationWorker` always leaves it as None.
        """


    def authorize_many(self, channel_names, socket_id, append_token=None):
        """ Authorize several channels at once, returning a dictionary keyed
            by channel name. Override this if the authorization endpoint
            accepts batched requests; the default calls :func:`authorize`
            once per channel.
        """

        responses = dict()

        for channel_name in channel_names:
            responses[channel_name] = self.authorize(channel_name, socket_id, append_token)

        return responses


# end of class Authorizer



class AuthorizationWorker:
    """ Run authorizer calls on a pool of background threads, so that a
        slow authorization endpoint cannot stall event delivery for other
        channels. The outcome of each call is handed back to the
        *dispatcher* rather than acted on directly.
    """

    def __init__(self, dispatcher, workers=None):

        if workers is None:
            workers = config.workers()

        self.dispatcher = dispatcher
        self.workers = concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix='pushchan-auth')


    def submit(self, authorizer, channel_name, socket_id, done, *args):
        """ Call *authorizer* in the background. When it completes, ``done(*args,
            response, error)`` is queued on the dispatcher; *error* is None unless the
            authorizer raised an exception. Returns the
            :class:`concurrent.futures.Future` for the background call.
        """

        return self.workers.submit(self._authorize, authorizer.authorize, channel_name, socket_id, done, args)


    def submit_many(self, authorizer, channel_names, socket_id, done, *args):
        """ Like :func:`submit`, but call :func:`Authorizer.authorize_many`
            for all of *channel_names* at once. The response handed to *done*
            is the dictionary of responses keyed by channel name. This is the
            path for re-authorizing every protected channel after a
            reconnect, when the endpoint accepts batched requests.
        """

        channel_names = tuple(channel_names)
        return self.workers.submit(self._authorize, authorizer.authorize_many, channel_names, socket_id, done, args)


    def _authorize(self, method, target, socket_id, done, args):

        try:
            response = method(target, socket_id)
        except Exception as e:
            logger.warning('authorizer failed for %s: %s', target, e)
            self.dispatcher.call(done, *args, None, e)
            return None

        self.dispatcher.call(done, *args, response, None)
        return response


    def shutdown(self, wait=True):
        self.workers.shutdown(wait=wait)


# end of class AuthorizationWorker



_default = None

def worker():
    """ Factory function for a shared :class:`AuthorizationWorker`, with its
        own :class:`pushchan.dispatch.Dispatcher`. Channels use this one
        unless they are given a worker explicitly.
    """

    global _default

    if _default is None:
        _default = AuthorizationWorker(dispatch.Dispatcher())

    return _default



def shutdown():
    global _default

    instance = _default
    _default = None

    if instance is not None:
        instance.shutdown(wait=False)
        instance.dispatcher.stop()


atexit.register(shutdown)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
