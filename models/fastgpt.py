from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FastGPTRequest:
    query: str
    web_search: bool = True
    cache: bool = True

    def to_payload(self) -> dict[str, Any]:
        return {"query": self.query, "web_search": self.web_search, "cache": self.cache}


@dataclass(frozen=True)
class Reference:
    """A citation accompanying an answer. Order is significant."""

    title: str
    link: str
    snippet: str = ""


@dataclass(frozen=True)
class FastGPTResponse:
    output: str
    references: list[Reference] = field(default_factory=list)

    # Reported by the API; never shown in the formatted answer
    tokens: int = 0
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CacheEntry:
    question: str
    answer: str  # fully formatted text, references included

    def to_dict(self) -> dict[str, str]:
        return {"question": self.question, "answer": self.answer}
