"""Pytest configuration and shared fixtures."""
import pytest

from fieldmodel import define


def _snapper(raw, model):
    return raw['foo'] + model.get('bar') + model.get('wowza')


@pytest.fixture
def sub_type():
    """Model type with mapped, nested, defaulted and computed fields."""
    return define('Sub', [
        'foo',
        {'name': 'bar', 'mapping': 'b.a.r'},
        {'name': 'barZ', 'mapping': 'b.a.r.Z.Z.Z', 'defaultValue': 'Z'},
        {'name': 'wowza', 'defaultValue': 5},
        {'name': 'snapper', 'convert': _snapper},
    ])


@pytest.fixture
def sub(sub_type):
    return sub_type({'foo': 1, 'b': {'a': {'r': 2}}})


@pytest.fixture
def record_type():
    """Model type used for extraction round trips."""
    return define('Record', [
        'foo',
        {'name': 'bar', 'mapping': 'attributes.bar'},
        {'name': 'wowza', 'convert': lambda raw, model: (model.get('foo') or 0) * 10},
    ])
