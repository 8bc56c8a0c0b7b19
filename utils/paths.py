import os
from typing import Optional


def resolve_data_file(filename: str) -> Optional[str]:
    """Resolve a data file path across local dev and container (/mount/src) layouts.

    Strategy:
    1. Try $DEEDS_DATA_DIR/filename when the variable is set.
    2. Try project-root relative (data/filename) based on this file location.
    3. Try cwd + data/filename (in case working dir is project root).
    4. Try /mount/src/data/filename (Streamlit container pattern).
    Returns first existing path or None.
    """
    candidates = []
    override = os.environ.get('DEEDS_DATA_DIR')
    if override:
        candidates.append(os.path.join(override, filename))
    base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    candidates.append(os.path.join(base_dir, 'data', filename))
    candidates.append(os.path.join(os.getcwd(), 'data', filename))
    candidates.append(os.path.join('/mount/src/data', filename))
    for p in candidates:
        if os.path.exists(p):
            return p
    return None
