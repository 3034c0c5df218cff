"""Pydantic schemas for the persisted index and JSON search output."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RecordModel(BaseModel):
    """Serialized record."""

    id: str
    kind: Literal["section", "qa"]
    doc_id: str
    title: str
    text: str
    position: int = Field(..., ge=0)
    heading_path: list[str] = Field(default_factory=list)


class IndexFileModel(BaseModel):
    """On-disk index snapshot."""

    format_version: int
    signature: str
    records: list[RecordModel]
    postings: dict[str, list[str]]


class SearchHitModel(BaseModel):
    """Single search result."""

    id: str
    kind: Literal["section", "qa"]
    doc_id: str
    title: str
    heading_path: list[str]
    score: float
    matched_terms: list[str]


class SearchResponseModel(BaseModel):
    """Response schema for a search."""

    query: str
    mode: Literal["and", "or"]
    ranking: Literal["matches", "bm25"]
    total: int
    results: list[SearchHitModel]
