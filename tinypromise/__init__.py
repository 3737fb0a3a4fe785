# -*- coding: utf-8 -*-

from .__version__ import __version__
from .decorators import wrap_promise
from .deferred import Deferred
from .errors import (PromiseError, RejectionError, SelfResolutionError,
                     TimeoutError)
from .promise import Promise
from .scheduler import (AsyncioBackend, AutoBackend, ManualBackend, Scheduler,
                        ThreadBackend, get_scheduler, schedule,
                        select_backend, set_scheduler)
from .util import is_thenable

__all__ = ['__version__', 'wrap_promise', 'Deferred', 'PromiseError',
           'RejectionError', 'SelfResolutionError', 'TimeoutError', 'Promise',
           'AsyncioBackend', 'AutoBackend', 'ManualBackend', 'Scheduler',
           'ThreadBackend', 'get_scheduler', 'schedule', 'select_backend',
           'set_scheduler', 'is_thenable']
