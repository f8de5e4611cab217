""" Confirm that authorizer calls run off the dispatch thread, and that their
    outcomes are delivered back on it.
"""

import threading
import time

import pytest

import pushchan

from conftest import StaticAuthorizer


class Recorder:
    def __init__(self):
        self.outcomes = list()

    def done(self, tag, response, error):
        self.outcomes.append((tag, response, error, threading.current_thread()))


def test_outcome_marshalled(dispatcher, worker):

    recorder = Recorder()
    authorizer = StaticAuthorizer('{"auth":"123:abc"}')

    future = worker.submit(authorizer, 'private-chat', '1.2', recorder.done, 'tag')
    assert future.result(timeout=5) == '{"auth":"123:abc"}'
    assert dispatcher.flush(5)

    assert authorizer.calls == [('private-chat', '1.2')]
    assert len(recorder.outcomes) == 1

    tag, response, error, thread = recorder.outcomes[0]
    assert tag == 'tag'
    assert response == '{"auth":"123:abc"}'
    assert error is None
    assert thread is dispatcher.thread


def test_error_marshalled(dispatcher, worker):

    recorder = Recorder()
    failure = OSError('endpoint unreachable')
    authorizer = StaticAuthorizer(error=failure)

    future = worker.submit(authorizer, 'private-chat', '1.2', recorder.done, 'tag')
    assert future.result(timeout=5) is None
    assert dispatcher.flush(5)

    tag, response, error, thread = recorder.outcomes[0]
    assert response is None
    assert error is failure
    assert thread is dispatcher.thread


def test_slow_authorizer_does_not_block_dispatch(dispatcher, worker):

    recorder = Recorder()
    authorizer = StaticAuthorizer('{"auth":"123:abc"}', hold=True)

    future = worker.submit(authorizer, 'private-chat', '1.2', recorder.done, 'tag')
    assert authorizer.entered.wait(5)

    # The authorizer is stuck, but the dispatch sequence carries on.
    called = list()
    dispatcher.call(called.append, 'other channel event')
    assert dispatcher.flush(5)
    assert called == ['other channel event']
    assert recorder.outcomes == []

    authorizer.release.set()
    future.result(timeout=5)
    assert dispatcher.flush(5)
    assert len(recorder.outcomes) == 1


def test_workers_run_concurrently(dispatcher):

    worker = pushchan.AuthorizationWorker(dispatcher, workers=2)

    class Sleepy(pushchan.Authorizer):
        def authorize(self, channel_name, socket_id, append_token=None):
            time.sleep(0.1)
            return '{"auth":"x"}'

    recorder = Recorder()
    authorizer = Sleepy()

    begin = time.time()
    first = worker.submit(authorizer, 'private-one', '1.2', recorder.done, 1)
    second = worker.submit(authorizer, 'private-two', '1.2', recorder.done, 2)
    first.result(timeout=5)
    second.result(timeout=5)
    elapsed = time.time() - begin

    worker.shutdown()

    assert elapsed >= 0.1
    assert elapsed < 0.2


def test_authorize_many():

    class Counting(pushchan.Authorizer):
        def authorize(self, channel_name, socket_id, append_token=None):
            return '{"auth":"%s:%s"}' % (socket_id, channel_name)

    responses = Counting().authorize_many(['private-a', 'presence-b'], '1.2')

    assert responses == {
        'private-a': '{"auth":"1.2:private-a"}',
        'presence-b': '{"auth":"1.2:presence-b"}',
    }


def test_submit_many(dispatcher, worker):

    recorder = Recorder()
    authorizer = StaticAuthorizer('{"auth":"123:abc"}')

    future = worker.submit_many(authorizer, ['private-a', 'presence-b'], '1.2', recorder.done, 'batch')
    responses = future.result(timeout=5)
    assert dispatcher.flush(5)

    assert authorizer.calls == [('private-a', '1.2'), ('presence-b', '1.2')]
    assert responses == {'private-a': '{"auth":"123:abc"}', 'presence-b': '{"auth":"123:abc"}'}

    tag, response, error, thread = recorder.outcomes[0]
    assert tag == 'batch'
    assert response == responses
    assert error is None
    assert thread is dispatcher.thread


def test_submit_many_error(dispatcher, worker):

    recorder = Recorder()
    failure = OSError('endpoint unreachable')
    authorizer = StaticAuthorizer(error=failure)

    future = worker.submit_many(authorizer, ['private-a'], '1.2', recorder.done, 'batch')
    assert future.result(timeout=5) is None
    assert dispatcher.flush(5)

    tag, response, error, thread = recorder.outcomes[0]
    assert response is None
    assert error is failure


def test_authorizer_is_abstract():

    with pytest.raises(TypeError):
        pushchan.Authorizer()


def test_default_worker():

    first = pushchan.authorize.worker()
    second = pushchan.authorize.worker()
    assert first is second

    pushchan.authorize.shutdown()
    third = pushchan.authorize.worker()
    assert third is not first

    pushchan.authorize.shutdown()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
