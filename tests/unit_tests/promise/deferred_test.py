# -*- coding: utf-8 -*-

import pytest

from tinypromise import Deferred, Promise, TimeoutError
from tinypromise import adapter


class TestDeferred(object):

    def test_deferred_resolve_promise(self):
        df = Deferred()
        assert isinstance(df.promise, Promise)

        with pytest.raises(TimeoutError):
            df.promise.result(0.001)
        df.resolve('Value')
        assert df.promise.result(0.001) == 'Value'

    def test_deferred_reject_promise(self):
        class MyException(Exception):
            pass

        df = Deferred()
        with pytest.raises(TimeoutError):
            df.promise.result(0.001)
        df.reject(MyException())

        with pytest.raises(MyException):
            df.promise.result(0.001)

    def test_deferred_resolved_once(self):
        df = Deferred()
        df.resolve(1)
        df.reject(ValueError())
        df.resolve(2)
        assert df.promise.result(0) == 1

    def test_deferred_resolved_with_thenable(self):
        df = Deferred()
        df.resolve(Promise.resolve('inner'))
        assert df.promise.result(1) == 'inner'


class TestAdapter(object):

    def test_deferred_factory(self, manual):
        calls = []
        d = adapter.deferred()
        d.promise.then(calls.append)

        d.resolve('a')
        d.resolve('b')
        manual.run_until_idle()
        assert calls == ['a']

    def test_deferred_factory_rejection(self, manual):
        reasons = []
        d = adapter.deferred()
        d.promise.catch(reasons.append)

        d.reject('r')
        manual.run_until_idle()
        assert reasons == ['r']

    def test_resolved_and_rejected(self, manual):
        sentinel = object()
        assert adapter.resolved(sentinel).value is sentinel
        assert adapter.rejected(sentinel).reason is sentinel

    def test_resolved_flattens_thenables(self, manual):
        p = adapter.resolved(adapter.resolved(5))
        manual.run_until_idle()
        assert p.value == 5
