""" The single logical dispatch sequence. Every change to channel state
    happens on one of these; work that may block, such as a call to the
    authorizer, happens elsewhere and marshals its result back here via
    :func:`Dispatcher.call`.
"""

import logging
import queue
import threading

logger = logging.getLogger(__name__)


class Dispatcher:
    """ Background thread to invoke queued calls, one at a time, in the
        order they were queued.
    """

    def __init__(self, name='pushchan-dispatch'):

        self.queue = queue.SimpleQueue()
        self.shutdown = False

        self.thread = threading.Thread(target=self.run, name=name)
        self.thread.daemon = True
        self.thread.start()


    def call(self, method, *args):
        """ Queue *method* to be invoked with *args* on the dispatch thread.
        """

        if self.shutdown == True:
            raise RuntimeError('dispatcher is stopped')

        self.queue.put((method, args))


    def flush(self, timeout=None):
        """ Block until every call queued before this one has run. Returns
            False if the *timeout* expired first.
        """

        if threading.current_thread() is self.thread:
            raise RuntimeError('cannot flush the dispatcher from its own thread')

        done = threading.Event()
        self.call(done.set)
        return done.wait(timeout)


    def run(self):

        while True:
            method, args = self.queue.get()

            if method is None:
                break

            try:
                method(*args)
            except Exception:
                logger.exception('dispatched call to %r failed', method)
                continue


    def stop(self):
        """ Stop the dispatch thread once the calls already queued have run.
        """

        if self.shutdown == True:
            return

        self.shutdown = True
        self.queue.put((None, None))


    @property
    def current(self):
        """ True if the caller is running on the dispatch thread.
        """

        return threading.current_thread() is self.thread


# end of class Dispatcher


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
