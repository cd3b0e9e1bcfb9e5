"""Topic content store contract and the in-memory implementation"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from lessonmark.core.utils.hashing import content_hash


logger = logging.getLogger(__name__)


class ContentRecord(BaseModel):
    """Stored markup for one topic plus the persistence envelope fields."""
    topic_id: str
    type: str = "html"
    content: str
    hash: str
    updated_at: datetime = Field(default_factory=datetime.now)

    def envelope(self) -> dict[str, Any]:
        """The {type, content, updated_at} JSON wrapper persisted around the markup."""
        return {
            "type": self.type,
            "content": self.content,
            "updated_at": self.updated_at.isoformat(),
        }


class TopicContentStore(ABC):
    """Opaque markup persistence keyed by topic id. Knows nothing about the markup grammar."""

    @abstractmethod
    def get_record(self, topic_id: str) -> ContentRecord | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, topic_id: str, markup: str) -> tuple[ContentRecord, bool]:
        """Return (saved_record, changed_flag)."""
        raise NotImplementedError

    def load(self, topic_id: str) -> str:
        """Return the stored markup, or '' for a topic with no content yet."""
        record = self.get_record(topic_id)
        return record.content if record else ""


@dataclass
class MemoryStore(TopicContentStore):
    _records: dict[str, ContentRecord] = field(default_factory=dict)

    def get_record(self, topic_id: str) -> ContentRecord | None:
        return self._records.get(topic_id)

    def save(self, topic_id: str, markup: str) -> tuple[ContentRecord, bool]:
        digest = content_hash(markup)
        existing = self._records.get(topic_id)
        if existing and existing.hash == digest:
            return existing, False
        record = ContentRecord(topic_id=topic_id, content=markup, hash=digest)
        self._records[topic_id] = record
        logger.info("Saved %d chars of content for topic %s", len(markup), topic_id)
        return record, True
