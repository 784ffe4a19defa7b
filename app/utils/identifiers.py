"""
Prefixed identifier generation ("c1", "u6", "t3", ...)
"""
import re

from sqlalchemy.orm import Session


def next_identifier(db: Session, model, prefix: str) -> str:
    """
    Return prefix + (highest numeric suffix in use + 1).

    Ids that do not follow the prefix+number shape are ignored, so the
    result never collides with an existing id of that shape.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    highest = 0
    for (existing_id,) in db.query(model.id).filter(model.id.like(f"{prefix}%")).all():
        match = pattern.match(existing_id or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}{highest + 1}"
