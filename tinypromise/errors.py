# -*- coding: utf-8 -*-


class PromiseError(Exception):
    """Base class of the errors raised by the tinypromise package."""
    pass


class SelfResolutionError(PromiseError, TypeError):
    """A promise has been resolved with itself.

    It's the reason of the rejection, as resolving a promise with itself
    would wait forever.
    """

    def __init__(self, message='cannot resolve promise with itself'):
        PromiseError.__init__(self, message)


class RejectionError(PromiseError):
    """Raised in place of a rejection reason which is not an exception.

    Attributes:
        reason: the original rejection reason, untouched.
    """

    def __init__(self, reason):
        PromiseError.__init__(self, 'Promise rejected with non-exception '
                                    'value: %r' % (reason,))
        self.reason = reason


class TimeoutError(PromiseError):
    """The promise has not been settled within the time allowed."""
    pass
