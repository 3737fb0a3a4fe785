# -*- coding: utf-8 -*-

# Values of these types are never thenable, and can be used without
# looking up a `then` attribute.
_SCALAR_TYPES = (type(None), bool, int, float, complex, str, bytes)


def is_scalar(value):
    """Check if the value is a builtin scalar (None, numbers, strings)."""
    return type(value) in _SCALAR_TYPES


def get_then(value):
    """Read the `then` attribute of a value.

    The lookup is done only once: a `then` property may have side effects,
    or return a different object each time.

    Returns:
        callable: the `then` method, bound to the value, if it exists and is
            callable. None otherwise.
    Raises:
        *: any exception raised by the attribute lookup, except
            `AttributeError` who means the attribute is missing.
    """
    if is_scalar(value):
        return None
    try:
        then = value.then
    except AttributeError:
        return None
    return then if callable(then) else None


def is_thenable(value):
    """Check if an object can be chained, like a Promise, or is a "result".

    The promise module uses this function to differentiate "chainable" objects
    and direct return values, when using a callback who can returns both.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not (or if the attribute can't be read).
    """
    try:
        return get_then(value) is not None
    except Exception:
        return False
