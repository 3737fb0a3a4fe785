# -*- coding: utf-8 -*-

from functools import wraps

from .promise import Promise


def wrap_promise(f):
    """Decorator who converts the result in a Promise object.

    If the function decorated returns a thenable, the promise follows its
    state. Else, the promise is fulfilled with the returned value.
    If the function raises an exception, the promise is rejected.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            result = f(*args, **kwargs)
        except Exception as error:
            return Promise.reject(error)
        return Promise.resolve(result)

    return wrapper
