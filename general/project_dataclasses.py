from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BearerToken:
    token_type: str
    access_token: str


@dataclass
class Rule:
    id: str
    value: str
    tag: Optional[str] = None


@dataclass
class RuleList:
    data: list[Rule] = field(default_factory=list)
    meta: Optional[dict] = None

    def ids(self) -> list[str]:
        return [rule.id for rule in self.data]


@dataclass
class Tweet:
    id: str


@dataclass
class TweetEnvelope:
    data: Tweet


@dataclass
class StreamSettings:
    output_dir: str
    max_workers: int = 8
    max_pending: int = 64
