from datetime import datetime

from src.domain.entities import ChangeType, Revision, RevisionSource


def classify_change(original: str, modified: str) -> ChangeType:
    if not original.strip():
        return "addition"
    if not modified.strip():
        return "deletion"
    return "modification"


def build_revision(
    document_id: str,
    revision_no: int,
    original: str,
    modified: str,
    created_by: str,
    source: RevisionSource,
    now: datetime,
) -> Revision:
    return Revision(
        document_id=document_id,
        revision_no=revision_no,
        field_name="body",
        original_content=original,
        modified_content=modified,
        change_type=classify_change(original, modified),
        source=source,
        created_by=created_by,
        created_at=now,
    )
