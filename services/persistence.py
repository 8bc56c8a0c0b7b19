import json
import os
import tempfile
import logging
from typing import List, Dict, Any

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(
    os.path.abspath(__file__)), '..', 'data')
DATA_DIR = os.path.normpath(DATA_DIR)

FILES = {
    'deeds': 'deeds.json',
    'accounts': 'accounts.json',
}


def _path(key: str) -> str:
    return os.path.join(DATA_DIR, FILES[key])


def load_list(key: str) -> List[Dict[str, Any]]:
    file_path = _path(key)
    if not os.path.exists(file_path):
        return []
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read %s: %s", file_path, e)
        return []
    return data if isinstance(data, list) else []


def atomic_write(key: str, data: List[Dict[str, Any]]):
    file_path = _path(key)
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    # temp file in the target directory so os.replace stays a same-filesystem rename
    tmp_fd, tmp_path = tempfile.mkstemp(prefix='tmp_', suffix='.json', dir=os.path.dirname(file_path))
    try:
        with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, file_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def replace_all(key: str, items: List[Dict[str, Any]]):
    atomic_write(key, items)
