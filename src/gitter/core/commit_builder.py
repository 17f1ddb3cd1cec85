"""Maps pretty-format field maps onto Commit models."""

from datetime import datetime, timezone
from typing import Any, Dict

from gitter.exceptions import MalformedOutputError, MissingFieldError
from gitter.models.commit import Author, Commit

REQUIRED_FIELDS = (
    "hash",
    "short_hash",
    "tree",
    "parents",
    "author",
    "author_email",
    "date",
    "commiter",
    "commiter_email",
    "commiter_date",
    "message",
)


def _timestamp(record: Dict[str, Any], field: str) -> datetime:
    try:
        return datetime.fromtimestamp(int(record[field]), tz=timezone.utc)
    except (TypeError, ValueError) as e:
        raise MalformedOutputError(
            f"Field {field} is not a unix timestamp: {record[field]!r}"
        ) from e


def build_commit(record: Dict[str, Any]) -> Commit:
    """Build a Commit from one parsed pretty-format record.

    Raises:
        MissingFieldError: a field of the fixed template is absent
    """
    for field in REQUIRED_FIELDS:
        if field not in record:
            raise MissingFieldError(field)

    parents = record["parents"]

    return Commit(
        hash=record["hash"],
        short_hash=record["short_hash"],
        tree_hash=record["tree"],
        parents=parents.split() if parents else [],
        author=Author(name=record["author"], email=record["author_email"]),
        date=_timestamp(record, "date"),
        commiter=Author(name=record["commiter"], email=record["commiter_email"]),
        commiter_date=_timestamp(record, "commiter_date"),
        message=record["message"],
        body=record.get("body") or None,
    )
