import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

from bson import ObjectId

ID_FIELD = "_id"

_HEX_ID = re.compile(r"[0-9a-f]{24}", re.IGNORECASE)


def load_settings(config_file: Path | None) -> Dict[str, Any]:
    try:
        if config_file:
            with open(config_file, 'r') as config_handle:
                return json.load(config_handle)
    except Exception as e:
        logging.error(f"Error loading config file {config_file}: {e}")
        return {}

    return {}


def is_object_id_hex(value: Any) -> bool:
    """Check if value is a 24 digit hex string, i.e. the text form of an ObjectId"""
    return isinstance(value, str) and _HEX_ID.fullmatch(value) is not None


def normalize_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a hex string ``_id`` into an ObjectId, in place.

    Any other ``_id`` value (ints, ObjectIds, arbitrary strings) is left alone.
    The same document is returned so calls can be chained.
    """
    if document is not None and is_object_id_hex(document.get(ID_FIELD)):
        document[ID_FIELD] = ObjectId(document[ID_FIELD])
    return document


def force_acknowledged(options: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the options whose write concern waits for acknowledgement"""
    forced = dict(options)
    if not forced.get("w"):
        forced["w"] = 1
    return forced
