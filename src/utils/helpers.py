"""
Utility functions and helpers
"""

import re
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId

_URI_CREDENTIALS = re.compile(r"(?P<scheme>mongodb(?:\+srv)?://)[^@/]+@")

def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (BSON datetime precision)"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)

def parse_object_id(value: str) -> Optional[ObjectId]:
    """Parse a 24-char hex identifier, returning None when it is malformed"""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)

def redact_uri(uri: str) -> str:
    """Hide credentials in a MongoDB connection string for logging"""
    return _URI_CREDENTIALS.sub(r"\g<scheme>***@", uri)

def contains_pattern(term: str) -> dict:
    """Case-insensitive literal substring match for a MongoDB query"""
    return {"$regex": re.escape(term), "$options": "i"}
