# -*- coding: utf-8 -*-

from collections import namedtuple
import logging
from threading import RLock

_logger = logging.getLogger(__name__)


Flags = namedtuple('Flags', ['once', 'memory'])
Flags.__new__.__defaults__ = (False, False)
Flags.__doc__ = """Behavior of a CallbackList, fixed at construction.

Attributes:
    once (boolean): the list can be fired only one time.
    memory (boolean): the list keeps the arguments of the last firing, and
        callbacks added afterwards are called immediately with them.
"""


class CallbackList(object):
    """Ordered list of callbacks, fired all together.

    It's a variation of the Observer pattern: observers add their callbacks
    to the list, and the owner fires them. The firing semantics are controlled
    by two flags (see `Flags`):

        >>> cl = CallbackList(Flags(once=True, memory=True))
        >>> cl.fire('OK')
        CallbackList(once memory, 0 callbacks, locked)
        >>> cl.add(print)  # called immediately: the list remembers 'OK'
        OK
        CallbackList(once memory, 1 callbacks, locked)
        >>> cl.fire('KO')  # no effect: the list can be fired only once.
        CallbackList(once memory, 1 callbacks, locked)

    Callbacks are called synchronously, in the order they have been added.
    If a callback raises an exception, the error is logged and the following
    callbacks are called anyway.

    All calls to the methods are thread-safe. Owners of several lists (like
    the Deferred) can share one lock between them.
    """

    def __init__(self, flags=None, lock=None):
        """
        Args:
            flags (Flags, optional): behavior of the list. By default, the
                list can be fired many times and has no memory.
            lock (RLock, optional): lock guarding the list. A new lock is
                created if not set.
        """
        self.flags = flags or Flags()
        self._lock = lock or RLock()

        self._callbacks = []
        self._memory = None
        self._fired = False
        self._disabled = False
        self._locked = False

        # Firing state
        self._firing = False
        self._replaying = False
        self._firing_index = 0
        self._replay_queue = []
        self._fire_queue = []

    @property
    def fired(self):
        """True if the list has been fired at least one time."""
        return self._fired

    @property
    def disabled(self):
        return self._disabled

    @property
    def locked(self):
        return self._locked or self._disabled

    def add(self, *callbacks):
        """Register one or more callbacks.

        If the list has memory and has already been fired, the new callbacks
        are called immediately with the last arguments.

        Args:
            *callbacks (callable): callbacks to add. An argument can also be
                a list (or tuple) of callbacks. `None` values are ignored.
        Returns:
            CallbackList: self
        """
        with self._lock:
            if self._disabled:
                return self

            new_callbacks = list(_flatten(callbacks))
            self._callbacks.extend(new_callbacks)

            if self._fired and self.flags.memory:
                if self._replaying:
                    self._replay_queue.extend(new_callbacks)
                elif not self._firing:
                    self._replay(new_callbacks)
                # else, the current firing pass will reach them.
        return self

    def remove(self, *callbacks):
        """Remove all occurrences of the callbacks.

        Returns:
            CallbackList: self
        """
        with self._lock:
            for callback in _flatten(callbacks):
                while callback in self._callbacks:
                    index = self._callbacks.index(callback)
                    del self._callbacks[index]
                    if self._firing and index < self._firing_index:
                        self._firing_index -= 1
                while callback in self._replay_queue:
                    self._replay_queue.remove(callback)
        return self

    def has(self, callback=None):
        """Check if a callback is registered.

        Args:
            callback (callable, optional): if not set, checks if the list
                contains at least one callback.
        Returns:
            boolean
        """
        with self._lock:
            if callback is None:
                return bool(self._callbacks)
            return callback in self._callbacks

    def empty(self):
        """Remove all callbacks. The list keeps its state and its memory."""
        with self._lock:
            self._callbacks = []
            self._firing_index = 0
        return self

    def disable(self):
        """Disable the list: `add()` and `fire()` won't do anything anymore.

        Registered callbacks and memorized arguments are dropped.
        """
        with self._lock:
            self._disabled = True
            self._callbacks = []
            self._memory = None
            self._replay_queue = []
            self._fire_queue = []
        return self

    def lock(self):
        """Lock the list in its current state: `fire()` has no effect.

        Callbacks can still be added. If the list has memory and has been
        fired, they are called immediately with the memorized arguments.
        """
        with self._lock:
            self._locked = True
            self._fire_queue = []
        return self

    def fire(self, *args):
        """Call all the callbacks with the given arguments."""
        return self.fire_with(args)

    def fire_with(self, args):
        """Call all the callbacks with the given sequence of arguments.

        A fire requested by a callback of this same list is delayed until the
        end of the current pass (and ignored if the list is `once`).

        Args:
            args (sequence): arguments passed to each callback.
        Returns:
            CallbackList: self
        """
        with self._lock:
            if self._disabled or self._locked:
                return self
            if self._firing:
                if not (self.flags.once and self._fired):
                    self._fire_queue.append(tuple(args))
                return self

            self._fire_queue.append(tuple(args))
            self._drain_fire_queue()
        return self

    def _drain_fire_queue(self):
        while self._fire_queue and not self.locked:
            self._fire_pass(self._fire_queue.pop(0))
            if self.flags.once:
                if self.flags.memory:
                    self.lock()
                else:
                    self.disable()

    def _fire_pass(self, args):
        if self.flags.memory:
            self._memory = args
        self._fired = True
        self._firing = True
        self._firing_index = 0
        try:
            # The list may grow (or shrink) while callbacks are running.
            while self._firing_index < len(self._callbacks):
                callback = self._callbacks[self._firing_index]
                self._firing_index += 1
                self._exec_callback(callback, args)
        finally:
            self._firing = False

    def _replay(self, callbacks):
        """Call new callbacks with the memorized arguments."""
        self._replay_queue = list(callbacks)
        self._replaying = True
        self._firing = True
        try:
            # Callbacks added by a replayed callback join the queue.
            while self._replay_queue:
                self._exec_callback(self._replay_queue.pop(0), self._memory)
        finally:
            self._firing = False
            self._replaying = False
            self._replay_queue = []
        self._drain_fire_queue()

    @staticmethod
    def _exec_callback(callback, args):
        try:
            callback(*args)
        except Exception:
            _logger.exception('Callback %r raised an exception!' % callback)

    def __len__(self):
        with self._lock:
            return len(self._callbacks)

    def __repr__(self):
        if self._disabled:
            status = 'disabled'
        elif self._locked:
            status = 'locked'
        elif self._fired:
            status = 'fired'
        else:
            status = 'ready'
        flags = [name for name, value in self.flags._asdict().items()
                 if value]
        return 'CallbackList(%s, %s callbacks, %s)' % (
            ' '.join(flags) or 'no flag', len(self._callbacks), status)


def _flatten(callbacks):
    for callback in callbacks:
        if callback is None:
            continue
        if isinstance(callback, (list, tuple)):
            for c in _flatten(callback):
                yield c
        else:
            yield callback
