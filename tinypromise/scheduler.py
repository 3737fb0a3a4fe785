# -*- coding: utf-8 -*-

"""Deferred-callback queue running the continuations of the promises.

Callbacks given to ``schedule()`` are never executed immediately: they are
appended to a queue, and the queue is drained later by a "flush", arranged
by a backend (an asyncio loop, a worker thread, or the caller itself for the
manual backend).

All callbacks submitted before a flush are run together, in submission
order, in one batch. Callbacks submitted during a flush are run by the next
flush.
"""

import asyncio
from collections import deque
from concurrent.futures import ThreadPoolExecutor
import logging
from threading import Lock, RLock

from . import config

_logger = logging.getLogger(__name__)


class AsyncioBackend(object):
    """Run the flushes as callbacks of an asyncio event loop.

    It's the lowest latency backend: the flush is executed as soon as the
    loop has finished the callbacks already in its ready queue.
    """

    def __init__(self, loop=None):
        """
        Args:
            loop (asyncio.AbstractEventLoop, optional): loop receiving the
                flushes. By default, the loop running in the thread calling
                ``arrange()`` is used.
        """
        self._loop = loop

    @staticmethod
    def is_available():
        """Check if an asyncio loop is running in the current thread."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return False
        return True

    def arrange(self, flush):
        """
        Raises:
            RuntimeError: if no loop was given and none is running.
        """
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon_threadsafe(flush)


class ThreadBackend(object):
    """Run the flushes, one after another, in a dedicated worker thread."""

    def __init__(self):
        self._lock = Lock()
        self._executor = None

    def arrange(self, flush):
        with self._lock:
            if self._executor is None:
                # A single worker keeps the flushes in submission order.
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix='tinypromise')
            self._executor.submit(flush)

    def shutdown(self, wait=True):
        """Stop the worker thread. It will be restarted on demand.

        Args:
            wait (boolean): if True, wait for the arranged flushes to be
                executed.
        """
        with self._lock:
            executor, self._executor = self._executor, None
        if executor:
            executor.shutdown(wait)


class ManualBackend(object):
    """Keep the flushes until the owner decides to run them.

    Useful to embed the scheduler into a foreign main loop, and in tests,
    where the moment continuations run must be controlled.
    """

    def __init__(self):
        self._pending = deque()

    @property
    def pending(self):
        """Number of flushes arranged and not yet executed."""
        return len(self._pending)

    def arrange(self, flush):
        self._pending.append(flush)

    def run_pending(self):
        """Run the flushes arranged until now.

        Flushes arranged while running them are kept for the next call.

        Returns:
            int: number of flushes executed.
        """
        count = len(self._pending)
        for _ in range(count):
            self._pending.popleft()()
        return count

    def run_until_idle(self):
        """Run flushes until no more are arranged.

        Returns:
            int: number of flushes executed.
        """
        total = 0
        while self._pending:
            total += self.run_pending()
        return total


class AutoBackend(object):
    """Pick, for each flush, the best backend available.

    The asyncio loop of the calling thread is used when there is one;
    otherwise the flush goes to the worker thread.
    """

    def __init__(self):
        self._asyncio = AsyncioBackend()
        self._thread = ThreadBackend()

    def arrange(self, flush):
        if AsyncioBackend.is_available():
            self._asyncio.arrange(flush)
        else:
            self._thread.arrange(flush)

    def shutdown(self, wait=True):
        self._thread.shutdown(wait)


_backends = {
    'auto': AutoBackend,
    'asyncio': AsyncioBackend,
    'thread': ThreadBackend,
    'manual': ManualBackend
}


def select_backend(name='auto'):
    """Build a scheduler backend from its name.

    Args:
        name (str): one of 'auto', 'asyncio', 'thread' or 'manual'.
    Returns:
        A new backend instance.
    Raises:
        ValueError: if the name is unknown.
    """
    try:
        backend_class = _backends[name.strip().lower()]
    except KeyError:
        raise ValueError('Unknown scheduler backend "%s"' % name)
    _logger.debug('Scheduler backend selected: %s' % backend_class.__name__)
    return backend_class()


class Scheduler(object):
    """Batch callbacks and run them after the current code has finished.

    All calls to the methods are thread-safe. Batches never overlap, even
    when the backend can execute flushes from several threads.
    """

    def __init__(self, backend=None):
        """
        Args:
            backend (optional): object with an ``arrange(flush)`` method, who
                must call ``flush()`` once, asynchronously. Default to an
                ``AutoBackend``.
        """
        self.backend = backend if backend is not None else AutoBackend()
        self._lock = Lock()
        self._flush_lock = RLock()
        self._queue = []
        self._flush_scheduled = False

    @property
    def flush_scheduled(self):
        """True if a flush has been arranged and has not started yet."""
        return self._flush_scheduled

    @property
    def pending(self):
        """Number of callbacks waiting for the next flush."""
        return len(self._queue)

    def schedule(self, callback):
        """Add a callback to the next batch.

        Args:
            callback (callable): function without argument.
        """
        with self._lock:
            self._queue.append(callback)
            if self._flush_scheduled:
                return
            self._flush_scheduled = True

        try:
            self.backend.arrange(self.flush)
        except Exception:
            # The callback stays queued, for the next successful arrangement.
            with self._lock:
                self._flush_scheduled = False
            raise

    def flush(self):
        """Run the batch of callbacks queued until now.

        An exception raised by a callback is logged, then the next callbacks
        are executed.
        """
        with self._flush_lock:
            with self._lock:
                batch, self._queue = self._queue, []
                self._flush_scheduled = False

            for callback in batch:
                try:
                    callback()
                except Exception:
                    _logger.exception('Scheduled callback %r raised an '
                                      'exception!' % (callback,))


_default_lock = Lock()
_default_scheduler = None


def get_scheduler():
    """Returns the process-wide scheduler, creating it if needed.

    Its backend is chosen by the config entry 'scheduler_backend'.
    """
    global _default_scheduler

    with _default_lock:
        if _default_scheduler is None:
            backend = select_backend(config.get('scheduler_backend'))
            _default_scheduler = Scheduler(backend)
        return _default_scheduler


def set_scheduler(scheduler):
    """Replace the process-wide scheduler.

    Args:
        scheduler (Scheduler): new scheduler. If None, a new one will be
            created on demand by ``get_scheduler()``.
    Returns:
        Scheduler: the previous scheduler (or None).
    """
    global _default_scheduler

    with _default_lock:
        previous, _default_scheduler = _default_scheduler, scheduler
    return previous


def schedule(callback):
    """Add a callback to the next batch of the process-wide scheduler."""
    get_scheduler().schedule(callback)
