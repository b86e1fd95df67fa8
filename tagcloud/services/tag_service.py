"""Service for reading and writing tags."""

import logging
from typing import Iterable, List

from tagcloud.database import Store
from tagcloud.schemas import Tag

logger = logging.getLogger(__name__)

TAG_CLOUD_SIZE = 20

LIST_TAGS_SQL = "SELECT id, tag, count FROM tags"

# One statement per tag: the unique constraint on tags.tag makes the
# insert-or-increment safe against concurrent submissions of the same string.
UPSERT_TAG_SQL = """
    INSERT INTO tags (tag, count) VALUES (:tag, 1)
    ON CONFLICT (tag) DO UPDATE SET count = tags.count + 1
"""

DELETE_TAG_SQL = "DELETE FROM tags WHERE id = :id"

TAG_CLOUD_SQL = "SELECT id, tag, count FROM tags ORDER BY RANDOM() LIMIT :limit"


class TagService:
    """Tag operations on top of the store."""

    def __init__(self, store: Store):
        self.store = store

    def list_tags(self) -> List[Tag]:
        """Return every tag, in no particular order."""
        rows = self.store.query(LIST_TAGS_SQL)
        return [Tag.model_validate(row) for row in rows]

    def upsert_tags(self, tags: Iterable[str]) -> int:
        """
        Record a submission of each tag string.

        New strings are inserted with a count of 1, known ones have their
        count incremented. Strings are applied in order, each in its own
        transaction; if one fails the earlier ones stay applied.

        Args:
            tags: Tag strings, duplicates allowed

        Returns:
            Number of strings processed

        Raises:
            StoreError: On the first string the store rejects
        """
        processed = 0
        for tag in tags:
            self.store.execute(UPSERT_TAG_SQL, {"tag": tag})
            processed += 1
        logger.info(f"Upserted {processed} tag(s)")
        return processed

    def delete_tag(self, tag_id: int) -> None:
        """Delete a tag by id. Deleting an unknown id is a no-op."""
        deleted = self.store.execute(DELETE_TAG_SQL, {"id": tag_id})
        if deleted:
            logger.info(f"Deleted tag {tag_id}")
        else:
            logger.debug(f"Tag {tag_id} not present, nothing deleted")

    def tag_cloud(self, limit: int = TAG_CLOUD_SIZE) -> List[Tag]:
        """Return up to ``limit`` randomly chosen tags (never more than 20)."""
        limit = max(0, min(limit, TAG_CLOUD_SIZE))
        rows = self.store.query(TAG_CLOUD_SQL, {"limit": limit})
        return [Tag.model_validate(row) for row in rows]
