# -*- coding: utf-8 -*-

from functools import partial
import logging
from threading import Lock

from .deferred import Deferred

_logger = logging.getLogger(__name__)


def when(promises):
    """Create a Promise who waits a list of promises to be all resolved.

    The resulting Promise is resolved when all of the promises in the list are
    resolved. Its `done` callbacks receive one argument per promise of the
    list, keeping the order of the list (not the order of resolution). Each
    argument is the tuple of the values the promise has been resolved with:
    `()` for `resolve()`, `(1,)` for `resolve(1)`, `(1, 2)` for
    `resolve(1, 2)`.

    If a promise is rejected, the resulting promise is rejected with the same
    values, and the results of other promises are ignored.
    Each notification of a promise of the list is relayed by the resulting
    promise, as is.

    Args:
        promises (list of Promise)
    Returns:
        Promise: the aggregated promise. If the list is empty, a promise
            already resolved without value. If the list contains a single
            promise, this promise itself.
    """
    promises = list(promises)

    if len(promises) == 0:
        return Deferred(name='WHEN').resolve().promise()
    if len(promises) == 1:
        return promises[0]

    lock = Lock()
    df = Deferred(name='WHEN')
    remaining = [len(promises)]
    results = [None] * len(promises)

    def resolve_one_promise(index, *values):
        with lock:
            results[index] = values
            remaining[0] -= 1
            is_complete = remaining[0] == 0

        if is_complete:
            _logger.debug('All %s promises of %r are resolved.',
                          len(promises), df)
            df.resolve(*results)

    for index, p in enumerate(promises):
        p.done(partial(resolve_one_promise, index))
        p.fail(df.reject)
        p.progress(df.notify)

    return df.promise()
