"""Shared utility functions for passplay."""

import hashlib
import json
import time
import uuid
from datetime import datetime
from typing import Any


def generate_session_id(prefix: str = "session") -> str:
    """Generate a unique session ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = hashlib.md5(str(time.time()).encode()).hexdigest()[:8]
    return f"{prefix}_{timestamp}_{random_suffix}"


def generate_id(prefix: str = "player") -> str:
    """Generate an opaque identifier for a roster entry."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """Safely dump object to JSON, handling datetime, enums and dataclasses."""
    
    def default_handler(o):
        if isinstance(o, datetime):
            return o.isoformat()
        if hasattr(o, "to_dict"):
            return o.to_dict()
        if hasattr(o, "name") and hasattr(o, "value"):
            return o.name
        if hasattr(o, "__dict__"):
            return o.__dict__
        return str(o)
    
    return json.dumps(obj, default=default_handler, **kwargs)
