"""
Cache Module - Durable key/value snapshots of JSON documents
Handles: Content snapshot and session storage for the admin store
"""

import copy
import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

CONTENT_KEY = 'adminData'
AUTH_KEY = 'adminAuth'


class FileCache:
    """One JSON file per key inside a directory"""

    def __init__(self, directory):
        self.directory = directory

    def _path(self, key):
        return os.path.join(self.directory, f'{key}.json')

    def get(self, key):
        """Stored value, or None when missing or unreadable"""
        try:
            with open(self._path(key), 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read cache entry {key}: {str(e)}")
            return None

    def set(self, key, value):
        """Replace the entry atomically"""
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f'.{key}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove(self, key):
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass


class MemoryCache:
    """In-process cache with the FileCache interface"""

    def __init__(self, initial=None):
        self._entries = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key):
        if key not in self._entries:
            return None
        return json.loads(self._entries[key])

    def set(self, key, value):
        # Stored serialized so callers never share mutable state with the cache
        self._entries[key] = json.dumps(value)

    def remove(self, key):
        self._entries.pop(key, None)

    def __contains__(self, key):
        return key in self._entries


def snapshot_collection(cache, name):
    """
    One collection from the content snapshot

    Args:
        cache: FileCache or MemoryCache
        name (str): 'projects' or 'blogPosts'

    Returns:
        list: Copy of the cached records, [] when absent or malformed
    """
    try:
        snapshot = cache.get(CONTENT_KEY)
    except Exception as e:
        logger.warning(f"Failed to load cached {name}: {str(e)}")
        return []
    if not isinstance(snapshot, dict):
        return []
    records = snapshot.get(name)
    if not isinstance(records, list):
        return []
    return [copy.deepcopy(r) for r in records if isinstance(r, dict)]
