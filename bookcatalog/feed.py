"""Request details shared by the feed clients."""
import time
from typing import Any, Dict

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def build_feed_params(limit: int) -> Dict[str, Any]:
    """Query parameters for one feed page, with a cache-busting timestamp."""
    return {"_limit": limit, "_": int(time.time() * 1000)}
