# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

import logging
from threading import Timer

from .common import config
from .common import log
from .promise import (CallbackList, Deferred, Flags, Promise,  # noqa
                      rejected, resolved, when, wrap_promise)


def _demo():
    """Combine three deferreds settled out of order, and wait the result."""
    logger = logging.getLogger(__name__)

    names = ['task-%s' % i for i in range(3)]
    deferreds = [Deferred(name=name) for name in names]
    aggregate = when([df.promise() for df in deferreds])

    aggregate.progress(
        lambda name, percent: logger.info('%s: %s%%', name, percent))
    aggregate.done(lambda *results: logger.info('All done: %s', results))
    aggregate.fail(lambda reason: logger.error('Failed: %s', reason))

    timers = []
    for delay, name, df in zip([0.3, 0.1, 0.2], names, deferreds):
        def settle(name=name, df=df):
            df.notify(name, 100)
            df.resolve('result of %s' % name)
        timers.append(Timer(delay, settle))

    for timer in timers:
        timer.start()
    for timer in timers:
        timer.join()
    return aggregate


def main():
    """Entry point: configure the logs, then run a short demonstration."""

    config.load()

    with log.Context(config.get('log_file')):
        log.set_debug_mode(config.get('debug_mode'))
        log.set_logs_level(config.get('log_levels'))

        logger = logging.getLogger(__name__)
        aggregate = _demo()
        logger.info('Aggregate promise is %s', aggregate.state())


if __name__ == "__main__":
    main()
