from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session, Query
from sqlalchemy import func
from promotion.core.exceptions import BusinessRuleError

def generate_custom_id(db: Session, model, prefix: str, id_field: str):
    """
    Generate a human-readable unique ID with a prefix using COUNT instead of ORDER BY.

    :param db: SQLAlchemy session
    :param model: SQLAlchemy model class
    :param prefix: String prefix for the ID (e.g., "W" for wrestler, "TI" for title)
    :param id_field: Field name storing the custom ID
    :return: Generated custom ID (e.g., "W1", "W9999", "TI10000")
    """
    row_count = db.query(func.count()).select_from(model).scalar()

    new_id = row_count + 1
    new_id_str = f"{prefix}{new_id}"

    # Rows may have been deleted, so the count alone can collide
    while db.query(model).filter(getattr(model, id_field) == new_id_str).first():
        new_id += 1
        new_id_str = f"{prefix}{new_id}"

    return new_id_str


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def paginate(query: Query, page: int = 0, size: Optional[int] = None):
    """Apply zero-based page/size to a query; no size means unpaged."""
    if size is not None:
        query = query.offset(max(page, 0) * size).limit(size)
    return query.all()


def to_slug(name: str) -> str:
    return "-".join(name.lower().split())


def ensure_unused(entity: str, entity_id, usages: dict):
    """Refuse a delete while other rows still point at the entity.

    ``usages`` maps a label such as ``"segments"`` to how many rows use it.
    """
    in_use = [f"{count} {label}" for label, count in usages.items() if count]
    if in_use:
        raise BusinessRuleError(f"{entity} {entity_id} is still in use by {', '.join(in_use)}")
