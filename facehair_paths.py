"""
Path access into nested face trees ("ParamData/Eyes/Right").
"""

from collections.abc import Mapping
from typing import Any, Dict


def get_by_path(root: Any, path: str) -> Any:
    """
    Return the value at a slash-delimited path, or None as soon as a
    segment is missing, None, or not a mapping. Never raises.
    """
    current = root
    for part in path.split('/'):
        if current is None or not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def set_by_path(root: Dict[str, Any], path: str, value: Any) -> None:
    """
    Assign value at a slash-delimited path, creating intermediate dicts.
    Non-mapping intermediates are replaced. Mutates root in place.
    """
    parts = path.split('/')
    current = root
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value
