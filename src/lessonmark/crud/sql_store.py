"""SQL-backed topic content store"""

import logging
from datetime import datetime

from sqlmodel import Session, select

from lessonmark.core.utils.hashing import content_hash
from lessonmark.crud.models import TopicContentRow
from lessonmark.crud.store import ContentRecord, TopicContentStore


logger = logging.getLogger(__name__)


def _row_to_record(row: TopicContentRow) -> ContentRecord:
    return ContentRecord(
        topic_id=row.topic_id,
        type=row.type,
        content=row.content,
        hash=row.hash,
        updated_at=row.updated_at,
    )


class SQLStore(TopicContentStore):
    """Upserts content by topic id; saving unchanged markup leaves the row untouched."""

    def __init__(self, session: Session):
        self.session = session

    def _get_row(self, topic_id: str) -> TopicContentRow | None:
        return self.session.exec(
            select(TopicContentRow).where(TopicContentRow.topic_id == topic_id)
        ).one_or_none()

    def get_record(self, topic_id: str) -> ContentRecord | None:
        row = self._get_row(topic_id)
        return _row_to_record(row) if row else None

    def save(self, topic_id: str, markup: str) -> tuple[ContentRecord, bool]:
        digest = content_hash(markup)
        row = self._get_row(topic_id)
        if row and row.hash == digest:
            return _row_to_record(row), False

        if row is None:
            row = TopicContentRow(topic_id=topic_id, content=markup, hash=digest)
        else:
            row.content = markup
            row.hash = digest
            row.updated_at = datetime.now()
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        logger.info("Saved %d chars of content for topic %s", len(markup), topic_id)
        return _row_to_record(row), True
