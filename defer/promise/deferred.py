# -*- coding: utf-8 -*-

import logging
from threading import RLock

from .callback_list import CallbackList, Flags
from .promise import Promise

_logger = logging.getLogger(__name__)


class Deferred(object):
    """The "creator" side of an async task.

    A Deferred is the object driving an asynchronous operation to its
    outcome, whereas the Promise represents that outcome from the "consumer"
    side. The owner of the Deferred settles it by calling `resolve()` or
    `reject()`, and can report the progress of the operation with
    `notify()`. Everybody else should only get the `promise()`.

    A Deferred starts in the state PENDING, and is settled at most once,
    either RESOLVED or REJECTED. Further calls to `resolve()` or `reject()`
    are ignored.

    For convenience, the subscription methods of the Promise (`done()`,
    `fail()`, `then()`, ...) are also available on the Deferred, and return
    the Deferred.

    All calls to the methods are thread-safe.
    """

    PENDING = Promise.PENDING
    RESOLVED = Promise.RESOLVED
    REJECTED = Promise.REJECTED

    def __init__(self, name=None):
        """
        Args:
            name (str, optional): if set, name used when converted to text.
        """
        self._name = name or 'Deferred'
        self._state = self.PENDING
        self._promise = None

        # The three lists share the lock: a settlement is atomic.
        self._lock = RLock()
        self._resolution = CallbackList(Flags(once=True, memory=True),
                                        lock=self._lock)
        self._rejection = CallbackList(Flags(once=True, memory=True),
                                       lock=self._lock)
        self._progress = CallbackList(Flags(memory=True), lock=self._lock)

        # These must be the first callbacks of their lists, so the state is
        # up to date when the users' callbacks are called.
        self._resolution.add(self._on_resolved)
        self._rejection.add(self._on_rejected)

    def _on_resolved(self, *args):
        self._state = self.RESOLVED
        self._rejection.disable()
        self._progress.lock()

    def _on_rejected(self, *args):
        self._state = self.REJECTED
        self._resolution.disable()
        self._progress.lock()

    def resolve(self, *args):
        """Settle the Deferred as RESOLVED and call the `done` callbacks.

        Args:
            *args: values passed to each callback.
        Returns:
            Deferred: self
        """
        with self._lock:
            if self._state != self.PENDING:
                _logger.debug('Try to resolve %r already settled. New values '
                              'will be ignored: %r', self, args)
                return self
            self._resolution.fire_with(args)
        return self

    def reject(self, *args):
        """Settle the Deferred as REJECTED and call the `fail` callbacks.

        Args:
            *args: values describing the failure, passed to each callback.
        Returns:
            Deferred: self
        """
        with self._lock:
            if self._state != self.PENDING:
                _logger.debug('Try to reject %r already settled. New values '
                              'will be ignored: %r', self, args)
                return self
            self._rejection.fire_with(args)
        return self

    def notify(self, *args):
        """Call the `progress` callbacks. No effect once settled.

        Returns:
            Deferred: self
        """
        self._progress.fire_with(args)
        return self

    def promise(self):
        """Returns the Promise associated to the Deferred.

        The Promise is created at the first call; the same instance is
        returned by all subsequent calls.
        """
        with self._lock:
            if self._promise is None:
                self._promise = Promise(self)
            return self._promise

    def done(self, *callbacks):
        self.promise().done(*callbacks)
        return self

    def fail(self, *callbacks):
        self.promise().fail(*callbacks)
        return self

    def progress(self, *callbacks):
        self.promise().progress(*callbacks)
        return self

    def always(self, *callbacks):
        self.promise().always(*callbacks)
        return self

    def then(self, done=None, fail=None, progress=None):
        self.promise().then(done, fail, progress)
        return self

    pipe = then

    def state(self):
        """Returns the current state: PENDING, RESOLVED or REJECTED."""
        return self._state

    def __repr__(self):
        return 'Deferred(%s)' % self._inner_print()

    def _inner_print(self):
        return '%s %s' % (self._name, self._state)


def resolved(*args):
    """Create a Promise already resolved with the given values.

    Returns:
        Promise: new Promise in the state RESOLVED.
    """
    return Deferred(name='RESOLVED').resolve(*args).promise()


def rejected(*args):
    """Create a Promise already rejected with the given values.

    Returns:
        Promise: new Promise in the state REJECTED.
    """
    return Deferred(name='REJECTED').reject(*args).promise()
