"""
Document rendering.

Renders command documents to text, either in the server's ``toString()`` shell
form (``{ find: "coll", filter: { a: 1 } }``) or as relaxed Extended JSON.
BSON-specific values are rendered with their shell constructors.
"""

from __future__ import annotations

import json
import re
import uuid
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from bson import decode as decode_bson
from bson import json_util
from bson.binary import Binary
from bson.code import Code
from bson.codec_options import CodecOptions
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.errors import BSONError
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.son import SON
from bson.timestamp import Timestamp

from command_diagnostics.config.settings import DocumentStyle

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_TRUNCATION_SUFFIX = "..."
_JSON_OPTIONS = json_util.RELAXED_JSON_OPTIONS

# Python re flags rendered in /pattern/flags form
_REGEX_FLAG_LETTERS = (
    (re.IGNORECASE, "i"),
    (re.LOCALE, "l"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.UNICODE, "u"),
    (re.VERBOSE, "x"),
)


def as_document(obj: Any) -> Mapping[str, Any] | None:
    """Return *obj* as an ordered mapping, or None if it is not a document.

    Raw BSON bytes are decoded; undecodable bytes are not a document.
    """
    if isinstance(obj, Mapping):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)) and not isinstance(obj, Binary):
        try:
            return decode_bson(bytes(obj), codec_options=CodecOptions(document_class=SON))
        except (BSONError, ValueError, TypeError):
            return None
    return None


def format_document(
    document: Any,
    style: DocumentStyle = DocumentStyle.SHELL,
    max_length: int | None = None,
) -> str:
    """Render a document, truncating the result to *max_length* characters.

    Anything that is not a document renders as an empty document.
    """
    doc = as_document(document)
    if doc is None:
        doc = {}
    if style == DocumentStyle.JSON:
        text = json_util.dumps(doc, json_options=_JSON_OPTIONS, default=_safe_repr)
    else:
        text = _shell_document(doc)
    return truncate(text, max_length)


def format_value(value: Any, style: DocumentStyle = DocumentStyle.SHELL) -> str:
    """Render a single value the way it would appear inside a document."""
    if style == DocumentStyle.JSON:
        return json_util.dumps(value, json_options=_JSON_OPTIONS, default=_safe_repr)
    return _shell_value(value)


def truncate(text: str, max_length: int | None) -> str:
    """Cut *text* to *max_length* characters and mark the cut with '...'."""
    if max_length is None or len(text) <= max_length:
        return text
    return text[:max_length] + _TRUNCATION_SUFFIX


def _shell_document(doc: Mapping[str, Any]) -> str:
    if not doc:
        return "{}"
    fields = ", ".join(f"{key}: {_shell_value(value)}" for key, value in doc.items())
    return "{ " + fields + " }"


def _shell_array(items: Any) -> str:
    if not items:
        return "[]"
    return "[ " + ", ".join(_shell_value(item) for item in items) + " ]"


def _shell_value(value: Any) -> str:
    # bool before int; Binary and Int64 subclass bytes and int
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Binary):
        return f"BinData({value.subtype}, {value.hex().upper()})"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, Code):
        return f"Code({json.dumps(str(value), ensure_ascii=False)})"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, DBRef):
        return f"DBRef({json.dumps(value.collection)}, {_shell_value(value.id)})"
    if isinstance(value, Mapping):
        return _shell_document(value)
    if isinstance(value, (list, tuple)):
        return _shell_array(value)
    if isinstance(value, ObjectId):
        return f"ObjectId('{value}')"
    if isinstance(value, datetime):
        return f"new Date({_datetime_to_millis(value)})"
    if isinstance(value, Timestamp):
        return f"Timestamp({value.time}, {value.inc})"
    if isinstance(value, (Decimal128, Decimal)):
        return f'NumberDecimal("{value}")'
    if isinstance(value, uuid.UUID):
        return f'UUID("{value}")'
    if isinstance(value, (bytes, bytearray)):
        return f"BinData(0, {bytes(value).hex().upper()})"
    if isinstance(value, (Regex, re.Pattern)):
        return _shell_regex(value)
    if isinstance(value, MinKey):
        return "MinKey"
    if isinstance(value, MaxKey):
        return "MaxKey"
    return _safe_repr(value)


def _shell_regex(value: Regex | re.Pattern) -> str:
    flags = value.flags
    if isinstance(flags, str):
        letters = flags
    else:
        letters = "".join(letter for flag, letter in _REGEX_FLAG_LETTERS if flags & flag)
    pattern = value.pattern
    if isinstance(pattern, bytes):
        pattern = pattern.decode("utf-8", "replace")
    return f"/{pattern}/{letters}"


def _datetime_to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _ONE_MS


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"
