import os

from client.cache import CONTENT_KEY, FileCache, MemoryCache, snapshot_collection


def test_file_cache_round_trip(tmp_path):
    cache = FileCache(str(tmp_path / 'cache'))
    assert cache.get(CONTENT_KEY) is None

    cache.set(CONTENT_KEY, {'projects': [{'id': 'p1', 'title': 'Ñeon'}]})
    assert cache.get(CONTENT_KEY) == {'projects': [{'id': 'p1', 'title': 'Ñeon'}]}
    assert os.listdir(tmp_path / 'cache') == ['adminData.json']

    cache.remove(CONTENT_KEY)
    cache.remove(CONTENT_KEY)
    assert cache.get(CONTENT_KEY) is None


def test_file_cache_ignores_corrupt_entries(tmp_path):
    (tmp_path / 'adminData.json').write_text('{not json', encoding='utf-8')
    assert FileCache(str(tmp_path)).get(CONTENT_KEY) is None


def test_memory_cache_returns_copies():
    cache = MemoryCache()
    value = {'projects': []}
    cache.set(CONTENT_KEY, value)
    value['projects'].append('leak')

    assert cache.get(CONTENT_KEY) == {'projects': []}
    assert CONTENT_KEY in cache


def test_snapshot_collection_skips_malformed_records():
    cache = MemoryCache({CONTENT_KEY: {'projects': [{'id': 'p1'}, 'junk', None]}})
    assert snapshot_collection(cache, 'projects') == [{'id': 'p1'}]
    assert snapshot_collection(cache, 'blogPosts') == []
    assert snapshot_collection(MemoryCache({CONTENT_KEY: []}), 'projects') == []
