"""
Generic response envelopes.

The backend wraps resource payloads as ``{"data": ...}``; these models unwrap
them for any record type.
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class BaseDataDto(BaseModel, Generic[T]):
    """Envelope carrying a single record."""

    data: Optional[T] = None


class BaseDataListDto(BaseModel, Generic[T]):
    """Envelope carrying a list of records."""

    data: Optional[List[T]] = None


__all__ = ["BaseDataDto", "BaseDataListDto"]
