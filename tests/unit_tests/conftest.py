# -*- coding: utf-8 -*-

import pytest

from tinypromise import (ManualBackend, Scheduler, ThreadBackend,
                         set_scheduler)


@pytest.fixture(autouse=True)
def thread_scheduler():
    """Give to each test its own process-wide scheduler.

    The continuations run in a worker thread, so the tests can wait the
    results with ``Promise.result()``.

    Returns:
        Scheduler: the scheduler installed.
    """
    backend = ThreadBackend()
    scheduler = Scheduler(backend)
    previous = set_scheduler(scheduler)
    yield scheduler
    set_scheduler(previous)
    backend.shutdown()


@pytest.fixture
def manual(thread_scheduler):
    """Install a scheduler whose flushes are run by the test itself.

    Nothing scheduled is executed until the test calls
    ``manual.run_pending()`` or ``manual.run_until_idle()``.

    Returns:
        ManualBackend: the backend of the installed scheduler.
    """
    backend = ManualBackend()
    previous = set_scheduler(Scheduler(backend))
    yield backend
    set_scheduler(previous)
