"""Utility modules for infrastructure verification."""

from .arn_utils import ACCOUNT_ID_PATTERN, arn_prefix, extract_resource_id
from .tag_utils import TagMismatch, extract_settings, extract_tags, find_tag_mismatches

__all__ = [
    "arn_prefix",
    "extract_resource_id",
    "ACCOUNT_ID_PATTERN",
    "TagMismatch",
    "extract_settings",
    "extract_tags",
    "find_tag_mismatches",
]
