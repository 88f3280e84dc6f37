"""Comment board for the about page.

Comments are stored newest first under the ``comments`` key and the list
is capped; the oldest entries fall off once the cap is reached.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from hacklearn.config import DEFAULT_COMMENT_LIMIT
from hacklearn.core.logging_config import get_logger
from hacklearn.exceptions import ValidationError, generate_request_id
from hacklearn.storage import KeyValueStore

__all__ = ["COMMENTS_KEY", "CommentBoard"]

_LOGGER = get_logger("comments")

COMMENTS_KEY = "comments"


class CommentBoard:
    def __init__(self, store: KeyValueStore, limit: int = DEFAULT_COMMENT_LIMIT) -> None:
        self.store = store
        self.limit = limit

    def list(self) -> List[Dict[str, Any]]:
        comments = self.store.get(COMMENTS_KEY, [])
        return comments if isinstance(comments, list) else []

    def post(self, name: str, comment: str) -> Dict[str, Any]:
        """Store a comment and return the stored entry.

        Raises:
            ValidationError: name or comment is blank after trimming
        """
        name, comment = name.strip(), comment.strip()
        errors = []
        if not name:
            errors.append({"field": "name", "message": "name must not be blank"})
        if not comment:
            errors.append({"field": "comment", "message": "comment must not be blank"})
        if errors:
            raise ValidationError("Invalid comment", validation_errors=errors)

        entry = {
            "id": generate_request_id("comment"),
            "name": name,
            "comment": comment,
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        comments = [entry, *self.list()][: self.limit]
        self.store.set(COMMENTS_KEY, comments)
        _LOGGER.info("Comment posted", extra={"author": name, "stored": len(comments)})
        return entry
