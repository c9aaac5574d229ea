"""
INDIA STATE / DISTRICT DIRECTORY

Purpose:
- Feed the State and District dropdowns of the institution form
- Accept both published shapes of the directory JSON
- Short-term caching to avoid refetching on every rerun
- Graceful fallback: last good copy, else empty

Author: TruePortMe Admin Console
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import requests

from console.config import GEO_CACHE_SECONDS, GEO_DATA_URL, GEO_TIMEOUT

logger = logging.getLogger(__name__)

# url -> (fetched_at, data)
_geo_cache: Dict[str, Tuple[float, Dict[str, List[str]]]] = {}


def normalize_state_districts(raw: Any) -> Dict[str, List[str]]:
    """
    {"states": [{"state": "Goa", "districts": [...]}]} or {"Goa": [...]}
    -> {"Goa": [...]}
    """
    if isinstance(raw, dict) and isinstance(raw.get("states"), list):
        mapping = {}
        for entry in raw["states"]:
            if isinstance(entry, dict) and entry.get("state"):
                mapping[entry["state"]] = list(entry.get("districts") or [])
        return mapping
    if isinstance(raw, dict):
        return {k: list(v or []) for k, v in raw.items() if isinstance(v, list)}
    return {}


def _get_from_cache(url: str, allow_expired: bool = False) -> Optional[Dict[str, List[str]]]:
    if url not in _geo_cache:
        return None
    fetched_at, data = _geo_cache[url]
    if allow_expired or time.time() - fetched_at < GEO_CACHE_SECONDS:
        return data
    return None


def load_state_districts(url: str = GEO_DATA_URL) -> Dict[str, List[str]]:
    cached = _get_from_cache(url)
    if cached is not None:
        return cached

    try:
        response = requests.get(url, timeout=GEO_TIMEOUT)
        response.raise_for_status()
        data = normalize_state_districts(response.json())
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Failed to load geo data from {url}: {e}")
        return _get_from_cache(url, allow_expired=True) or {}

    _geo_cache[url] = (time.time(), data)
    logger.info(f"Loaded {len(data)} states from {url}")
    return data


def clear_geo_cache() -> None:
    _geo_cache.clear()


def sorted_states(data: Dict[str, List[str]]) -> List[str]:
    return sorted(data.keys())


def districts_for(data: Dict[str, List[str]], state: Optional[str]) -> List[str]:
    if not state:
        return []
    return sorted(data.get(state) or [])
