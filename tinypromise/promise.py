# -*- coding: utf-8 -*-

from collections import namedtuple
from functools import partial
import logging
from threading import Condition

from .errors import RejectionError, SelfResolutionError, TimeoutError
from .scheduler import get_scheduler
from .util import get_then

_logger = logging.getLogger(__name__)

# Outcome of a settlement.
Fulfilled = namedtuple('Fulfilled', ['value'])
Rejected = namedtuple('Rejected', ['reason'])

# Continuation attached by `then()`, settling `promise` once run.
_Task = namedtuple('_Task', ['promise', 'on_fulfilled', 'on_rejected'])


def _pass_value(value):
    return value


def _pass_error(reason):
    raise RejectionError(reason)


def _noop_executor(resolve, reject):
    pass


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise is used for asynchronous computation. It contains a value not yet
    known when the Promise is created. It allows to set callbacks who will be
    called as soon as the result is known. It's a "promise" of a future value.

    The Promise follows the Promise/A+ contract: callbacks set by `then()`
    are never called synchronously, but by the scheduler, in the order they
    have been set, and at most once.

    All calls to the methods are thread-safe.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, scheduler=None, _name=None, _previous=None):
        """Constructor of the Promise.

        Generate the two callbacks for the executor, then call the `executor`.
        It means the executor will be fully executed before the the constructor
        returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Only the first call to one of the two callbacks is taken in account.
        The next calls are ignored.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `resolve()` should be called when the Promise
                is fulfilled (ie the tasks is done) and accepts the
                result's value as its only argument. If this value is a
                thenable, the Promise will follow its state.
                The second, `reject()`, should be called when an error
                occurs, with the reason (usually an instance of `Exception`)
                as argument.
            scheduler (Scheduler, optional): scheduler running the callbacks
                set by `then()`. Default to the process-wide scheduler.
            _name (str): if set, name used when converted to text.
        """

        self._state = self.PENDING
        self._value = None
        self._reason = None
        self._tasks = []
        self._condition = Condition()
        if scheduler is None:
            scheduler = get_scheduler()
        self._scheduler = scheduler
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous

        self._run_executor(executor)

    @property
    def state(self):
        """One of PENDING, FULFILLED or REJECTED."""
        return self._state

    @property
    def value(self):
        """Result of the Promise if it's fulfilled; None otherwise."""
        return self._value

    @property
    def reason(self):
        """Reason of the rejection if it's rejected; None otherwise."""
        return self._reason

    @property
    def scheduler(self):
        return self._scheduler

    def _run_executor(self, executor):
        """Call the executor with a couple of resolve/reject callbacks.

        The callbacks share a guard: only the first call has an effect. It's
        used both for the executor given at construction, and for the
        `then()` method of the thenables this Promise is resolved with.
        """
        called = False

        def first_call():
            nonlocal called
            if called:
                _logger.debug('Promise %r already resolved by its executor. '
                              'New call ignored.', self)
                return False
            called = True
            return True

        def resolve(value=None):
            if first_call():
                self._resolve(value)

        def reject(reason=None):
            if first_call():
                self._settle(Rejected(reason))

        try:
            executor(resolve, reject)
        except Exception as error:
            reject(error)

    def _resolve(self, x):
        """Promise resolution procedure.

        See https://promisesaplus.com/#the-promise-resolution-procedure
        """
        if x is self:
            self._settle(Rejected(SelfResolutionError()))
            return

        try:
            then = get_then(x)
        except Exception as error:
            # `x.then` is a property who raised an exception.
            self._settle(Rejected(error))
            return

        if then is None:
            self._settle(Fulfilled(x))
        else:
            self._run_executor(then)

    def _settle(self, outcome):
        with self._condition:
            if self._state != self.PENDING:
                _logger.debug('Promise %r already settled. %r ignored.', self,
                              outcome)
                return

            if isinstance(outcome, Fulfilled):
                self._state = self.FULFILLED
                self._value = outcome.value
            else:
                self._state = self.REJECTED
                self._reason = outcome.reason

            self._condition.notify_all()

            # Dispatched under the lock, so a concurrent call to `then()` can
            # not overtake the tasks already queued.
            tasks, self._tasks = self._tasks, []
            first_error = None
            for task in tasks:
                try:
                    self._dispatch(task)
                except Exception as error:
                    # The task stays queued in the scheduler: the next
                    # tasks must be handed to it too.
                    if first_error is None:
                        first_error = error

        if first_error is not None:
            raise first_error

    def _dispatch(self, task):
        with self._condition:
            if self._state == self.PENDING:
                self._tasks.append(task)
                return
            self._scheduler.schedule(partial(self._run_task, task))

    def _run_task(self, task):
        if self._state == self.REJECTED and task.on_rejected is _pass_error:
            # No rejection handler: the reason is transmitted as is.
            task.promise._settle(Rejected(self._reason))
            return

        try:
            if self._state == self.FULFILLED:
                result = task.on_fulfilled(self._value)
            else:
                result = task.on_rejected(self._reason)
        except Exception as error:
            task.promise._settle(Rejected(error))
            return

        task.promise._resolve(result)

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise, or any object with a `then` method: when fulfilled
            or rejected, will transfer its status (state and result/error) to
            the Promise returned by this method.

        If a callback is not defined, the state of the self promise is
        transferred at the new promise (the state and the value/error).

        The callbacks are never called before `then()` returns, even if the
        promise is already settled.

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                reason of the rejection of the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """
        if not callable(on_rejected):
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not callable(on_fulfilled):
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))

        task = _Task(
            promise=Promise(_noop_executor, self._scheduler, _name=name,
                            _previous=self),
            on_fulfilled=on_fulfilled if callable(on_fulfilled)
            else _pass_value,
            on_rejected=on_rejected if callable(on_rejected) else _pass_error)
        self._dispatch(task)
        return task.promise

    def catch(self, on_rejected=None):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): Will be called with the rejection reason
                if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        The wait blocks the current thread: it must not be the thread
        running the scheduler flushes, or the Promise may never be settled.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled. By default, it can wait indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            RejectionError: if the promise is rejected with a reason who
                is not an exception.
            *: If the promise is rejected, the rejection cause is raised.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._state != self.PENDING,
                                     timeout)

            if self._state == self.PENDING:
                raise TimeoutError()
            elif self._state == self.FULFILLED:
                return self._value
            reason = self._reason

        if isinstance(reason, BaseException):
            raise reason
        raise RejectionError(reason)

    def exception(self, timeout=None):
        """Wait for the promise rejection and returns its reason.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled. By default, it can wait indefinitely.
        Returns:
            *: the reason of the rejection of the Promise.
            None: if the promise is fulfilled.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._state != self.PENDING,
                                     timeout)

            if self._state == self.PENDING:
                raise TimeoutError()
            return self._reason

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        This method is aimed to protect the program from uncaught rejected
        Promise. If no error handler has been set (via then() or catch()), the
        default behavior is to do nothing, and thus, errors are silently
        ignored.
        Calling `safeguard()` after all chains are set will catch these errors,
        and log them as ERROR with the maximum of details possible.
        """
        def guard(reason):
            if isinstance(reason, BaseException):
                _logger.error('[SAFEGUARD] %r' % self, exc_info=(
                    type(reason), reason, reason.__traceback__))
            else:
                _logger.error('[SAFEGUARD] %r rejected with: %r'
                              % (self, reason))

        self.then(None, guard)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        if self._state == self.REJECTED:
            state = 'R'
        elif self._state == self.FULFILLED:
            state = 'F'
        else:
            state = 'P'

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)

    @classmethod
    def resolve(cls, value=None):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a thenable, the new promise
                follows its state: it's never fulfilled with a thenable.
        Returns:
            Promise: new Promise, fulfilled (or soon fulfilled) with the
                value passed in parameter.
        """
        return cls(lambda resolve, reject: resolve(value), _name='RESOLVE')

    @classmethod
    def reject(cls, reason):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: reason of the rejection, usually an Exception.
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda resolve, reject: reject(reason), _name='REJECT')
