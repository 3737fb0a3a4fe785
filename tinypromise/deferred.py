# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """Creator side of a Promise.

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        resolve (function): resolve the promise. Only the first call to
            `resolve()` or `reject()` has an effect.
        reject (function): reject the promise.
    """

    def __init__(self, scheduler=None, _name='DEFERRED'):
        self.promise = Promise(self._executor, scheduler, _name=_name)

    def _executor(self, resolve, reject):
        self.resolve = resolve
        self.reject = reject
