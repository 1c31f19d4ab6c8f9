from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class SearchQuery:
    query: str
    pageno: int = 1
    count: int = 10
    time_range: Optional[str] = None
    language: str = "all"
    safesearch: Optional[str] = None


@dataclass
class SearchResult:
    title: str
    content: str
    url: str


@dataclass
class ToolRequest:
    name: str
    arguments: Optional[Mapping[str, Any]] = None


@dataclass
class ToolResponse:
    """Uniform envelope returned for every tool call."""

    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    @classmethod
    def error(cls, text: str) -> "ToolResponse":
        return cls.text(text, is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        return {"content": [dict(c) for c in self.content], "isError": self.is_error}
