# -*- coding: utf-8 -*-

import pytest

from tinypromise import Promise, is_thenable
from tinypromise.util import get_then


class TestThenable(object):

    def test_promise_is_thenable(self):
        assert is_thenable(Promise.resolve(1))

    def test_plain_values(self):
        for value in (None, 3, 'then', [], {}, object()):
            assert not is_thenable(value)

    def test_non_callable_then(self):
        class Data(object):
            then = 'not a method'

        assert not is_thenable(Data())
        assert get_then(Data()) is None

    def test_then_raising_on_access(self):
        class Trap(object):
            @property
            def then(self):
                raise KeyError('then')

        assert not is_thenable(Trap())
        with pytest.raises(KeyError):
            get_then(Trap())

    def test_get_then_is_bound(self):
        class Thenable(object):
            def then(self, ok, err):
                ok(self)

        thenable = Thenable()
        values = []
        get_then(thenable)(values.append, None)
        assert values == [thenable]
