# -*- coding: utf-8 -*-


class Promise(object):
    """Read-only view of a Deferred: the "consumer" side of an async task.

    A Promise represents the outcome of an operation not yet known when the
    Promise is created. It allows to register callbacks who will be called as
    soon as the result is known, but it can't change that result: only the
    Deferred owning it can be resolved, rejected or notified.

    Callbacks can be added at any time. Callbacks added after the Deferred
    has been settled are called immediately with the values of the
    settlement.

    All registration methods return the Promise itself, and so can be chained:

        >>> df = Deferred()
        >>> df.promise().done(on_success).fail(on_error)

    All calls to the methods are thread-safe.
    """

    PENDING = 'pending'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'

    def __init__(self, deferred):
        """Bind the view to its Deferred.

        Promise objects should not be created directly: use
        `Deferred.promise()` instead.

        Args:
            deferred (Deferred): the Deferred represented by this view.
        """
        self._deferred = deferred

    def done(self, *callbacks):
        """Add callbacks called when the Deferred is resolved.

        Args:
            *callbacks (callable): each callback receives the arguments given
                to `Deferred.resolve()`. Lists of callbacks are accepted too.
        Returns:
            Promise: self
        """
        self._deferred._resolution.add(*callbacks)
        return self

    def fail(self, *callbacks):
        """Add callbacks called when the Deferred is rejected.

        Args:
            *callbacks (callable): each callback receives the arguments given
                to `Deferred.reject()`.
        Returns:
            Promise: self
        """
        self._deferred._rejection.add(*callbacks)
        return self

    def progress(self, *callbacks):
        """Add callbacks called each time the Deferred is notified.

        A callback added after a notification receives the last notified
        values immediately.

        Returns:
            Promise: self
        """
        self._deferred._progress.add(*callbacks)
        return self

    def always(self, *callbacks):
        """Add callbacks called when the Deferred is either resolved or
        rejected.

        Returns:
            Promise: self
        """
        return self.done(*callbacks).fail(*callbacks)

    def then(self, done=None, fail=None, progress=None):
        """Add callbacks for the resolution, the rejection and the progress.

        Each argument is a callback, a list of callbacks, or None.

        Args:
            done (callable, optional): see `done()`.
            fail (callable, optional): see `fail()`.
            progress (callable, optional): see `progress()`.
        Returns:
            Promise: self
        """
        if progress is not None:
            self.progress(progress)
        if fail is not None:
            self.fail(fail)
        if done is not None:
            self.done(done)
        return self

    pipe = then

    def state(self):
        """Returns the current state of the Deferred.

        Returns:
            str: one of `Promise.PENDING`, `Promise.RESOLVED` or
                `Promise.REJECTED`.
        """
        return self._deferred._state

    def promise(self):
        """Returns the Promise itself."""
        return self

    def __repr__(self):
        return 'Promise(%s)' % self._deferred._inner_print()
