"""Default JSON serializer and deserializer."""

import json
from typing import Any


def to_json(value: Any) -> str:
    """Serialize to compact JSON, keeping key order."""
    return json.dumps(value, separators=(",", ":"))


def from_json(raw: str) -> Any:
    """Parse a JSON string."""
    return json.loads(raw)

