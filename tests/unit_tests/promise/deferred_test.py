# -*- coding: utf-8 -*-

from threading import Thread

from defer.promise import Deferred, Promise, rejected, resolved


class TestDeferred(object):

    def test_initial_state(self):
        df = Deferred()
        assert df.state() == Deferred.PENDING
        assert df.promise().state() == 'pending'

    def test_deferred_resolve_promise(self):
        df = Deferred()
        results = []
        df.promise().done(lambda *args: results.append(args))
        df.resolve(42)

        assert df.state() == Deferred.RESOLVED
        assert results == [(42,)]

    def test_deferred_reject_promise(self):
        df = Deferred()
        errors = []
        df.promise().fail(lambda *args: errors.append(args))
        df.reject('boom', 3)

        assert df.state() == Deferred.REJECTED
        assert errors == [('boom', 3)]

    def test_resolve_is_idempotent(self):
        df = Deferred()
        results = []
        df.done(results.append)
        df.resolve(42)
        df.resolve(99)
        assert results == [42]

    def test_reject_after_resolve(self):
        df = Deferred()
        errors = []
        df.fail(errors.append)
        df.resolve('OK')
        df.reject('KO')

        assert df.state() == Deferred.RESOLVED
        assert errors == []

    def test_resolve_after_reject(self):
        df = Deferred()
        results = []
        df.done(results.append)
        df.reject('KO')
        df.resolve('OK')

        assert df.state() == Deferred.REJECTED
        assert results == []

    def test_done_after_resolution(self):
        """A callback added after the resolution is called immediately."""
        df = Deferred()
        df.resolve(1, 2)
        results = []
        df.done(lambda *args: results.append(args))
        assert results == [(1, 2)]

    def test_fail_after_resolution_is_never_called(self):
        df = Deferred()
        df.resolve()
        errors = []
        df.fail(errors.append)
        df.reject('KO')
        assert errors == []

    def test_callbacks_see_the_new_state(self):
        df = Deferred()
        states = []
        df.done(lambda: states.append(df.state()))
        df.resolve()
        assert states == [Deferred.RESOLVED]

    def test_notify(self):
        df = Deferred()
        notifications = []
        df.progress(notifications.append)
        df.notify(10)
        df.notify(50)
        df.resolve()
        df.notify(100)
        assert notifications == [10, 50]

    def test_notify_after_reject(self):
        df = Deferred()
        notifications = []
        df.progress(notifications.append)
        df.reject()
        df.notify(1)
        assert notifications == []

    def test_notify_called_once_per_call(self):
        df = Deferred()
        notifications = []
        df.progress(notifications.append)
        df.notify('step')
        assert notifications == ['step']

    def test_progress_added_after_notify(self):
        df = Deferred()
        df.notify(10)
        df.notify(20)
        notifications = []
        df.progress(notifications.append)
        assert notifications == [20]

    def test_resolve_from_callback(self):
        """Settle another Deferred from a callback, in chain."""
        df1 = Deferred()
        df2 = Deferred()
        results = []
        df1.done(df2.resolve)
        df2.done(results.append)
        df1.resolve('chained')
        assert results == ['chained']

    def test_reject_from_own_done_callback(self):
        df = Deferred()
        df.done(lambda: df.reject('too late'))
        df.resolve()
        assert df.state() == Deferred.RESOLVED

    def test_methods_are_chainable(self):
        df = Deferred()
        f = lambda *args: None  # noqa
        assert df.resolve() is df
        assert df.reject() is df
        assert df.notify() is df
        assert df.done(f) is df
        assert df.fail(f) is df
        assert df.progress(f) is df
        assert df.always(f) is df
        assert df.then(f, f, f) is df
        assert df.pipe(f) is df

    def test_repr(self):
        df = Deferred(name='download')
        assert repr(df) == 'Deferred(download pending)'
        df.resolve()
        assert repr(df) == 'Deferred(download resolved)'
        assert repr(df.promise()) == 'Promise(download resolved)'

    def test_concurrent_done_and_resolve(self):
        """Every callback is called exactly once, whatever the interleaving.
        """
        df = Deferred()
        counter = []

        def add_callbacks():
            for _ in range(200):
                df.done(lambda value: counter.append(value))

        threads = [Thread(target=add_callbacks) for _ in range(4)]
        for t in threads:
            t.start()
        df.resolve(1)
        for t in threads:
            t.join()

        assert len(counter) == 800


class TestPromiseCache(object):

    def test_same_promise_instance(self):
        df = Deferred()
        p = df.promise()
        assert isinstance(p, Promise)
        assert df.promise() is p
        assert p.promise() is p

    def test_promise_has_no_mutator(self):
        p = Deferred().promise()
        for name in ('resolve', 'reject', 'notify'):
            assert not hasattr(p, name)


class TestFactories(object):

    def test_resolved(self):
        results = []
        p = resolved('a', 'b')
        assert p.state() == Promise.RESOLVED
        p.done(lambda *args: results.append(args))
        assert results == [('a', 'b')]

    def test_rejected(self):
        errors = []
        p = rejected(ValueError('bad'))
        assert p.state() == Promise.REJECTED
        p.fail(errors.append)
        assert isinstance(errors[0], ValueError)
