import pytest
import requests

from clinic.cache import ExpiringCache
from clinic.services.user_cache import ProfileUnavailable, UserProfileCache, user_cache_key


class Retriever:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, user_id):
        self.calls.append(user_id)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make(retriever, clock=None):
    kwargs = {'clock': clock} if clock else {}
    return UserProfileCache(ExpiringCache(ttl=300, **kwargs), retrieve=retriever)


def test_two_fetches_within_ttl_retrieve_once():
    retriever = Retriever({'id': 7, 'name': 'A'})
    users = make(retriever)
    assert users.fetch(7) == {'id': 7, 'name': 'A'}
    assert users.fetch(7) == {'id': 7, 'name': 'A'}
    assert retriever.calls == ['7']


def test_fetch_after_expiry_retrieves_again():
    now = [0.0]
    retriever = Retriever({'id': 1, 'name': 'old'}, {'id': 1, 'name': 'new'})
    users = make(retriever, clock=lambda: now[0])
    assert users.fetch(1)['name'] == 'old'
    now[0] = 301
    assert users.fetch(1)['name'] == 'new'
    assert len(retriever.calls) == 2


@pytest.mark.parametrize('error', [ProfileUnavailable('500'), requests.ConnectionError('down')])
def test_failed_retrieval_is_not_cached(error):
    retriever = Retriever(error, {'id': 3})
    users = make(retriever)
    assert users.fetch(3) is None
    assert users.stats().total_entries == 0
    assert users.fetch(3) == {'id': 3}
    assert len(retriever.calls) == 2


def test_not_found_is_not_cached():
    retriever = Retriever(None, {'id': 4})
    users = make(retriever)
    assert users.fetch(4) is None
    assert users.peek(4) is None
    assert users.fetch(4) == {'id': 4}


def test_invalidate_forces_refetch():
    retriever = Retriever({'id': 5, 'name': 'before'}, {'id': 5, 'name': 'after'})
    users = make(retriever)
    users.fetch(5)
    users.invalidate(5)
    assert users.fetch(5)['name'] == 'after'


def test_entries_use_user_prefix():
    users = make(Retriever({'id': 9}))
    users.fetch(9)
    assert user_cache_key(9) == 'user_9'
    assert users.cache.get('user_9') == {'id': 9}


def test_prime_serves_profile_without_retrieval():
    retriever = Retriever()
    users = make(retriever)
    users.prime(11, {'id': 11, 'name': 'primed'})
    assert users.fetch(11) == {'id': 11, 'name': 'primed'}
    assert retriever.calls == []
