# -*- coding: utf-8 -*-

"""Entry points used by Promise/A+ conformance test suites.

A conformance harness needs only three operations: creating a pending
promise with its resolve/reject functions, and the two "already settled"
constructors.
"""

from .deferred import Deferred
from .promise import Promise


def deferred():
    """Returns a pending promise and its settlement functions.

    Returns:
        Deferred: object with the attributes `promise`, `resolve` and
            `reject`.
    """
    return Deferred()


def resolved(value):
    return Promise.resolve(value)


def rejected(reason):
    return Promise.reject(reason)
