"""Build index persistence: upsert built resources and query them back"""

from datetime import datetime

from sqlmodel import Session, select

from mdsite.core.resource.base import Resource
from mdsite.core.resource.taxonomy import taxonomies_to_dict
from mdsite.core.utils.dates import to_datetime
from mdsite.core.utils.hashing import fingerprint
from mdsite.crud.models import ResourceRecord


def get_by_resource_id(session: Session, resource_id: str) -> ResourceRecord | None:
    """Return the record for a resource id, or None if it was never built."""
    return session.exec(select(ResourceRecord).where(ResourceRecord.resource_id == resource_id)).one_or_none()


def get_all_records(session: Session) -> list[ResourceRecord]:
    return list(session.exec(select(ResourceRecord).order_by(ResourceRecord.relative_path)).all())


def get_by_collection(session: Session, collection: str) -> list[ResourceRecord]:
    return list(
        session.exec(
            select(ResourceRecord)
            .where(ResourceRecord.collection == collection)
            .order_by(ResourceRecord.relative_path)
        ).all()
    )


def list_collections(session: Session) -> list[str]:
    """Return sorted distinct collection labels across all stored records."""
    return sorted(set(session.exec(select(ResourceRecord.collection)).all()))


def _fields(resource: Resource) -> dict:
    data = resource.data
    return {
        "collection": resource.collection.label,
        "relative_path": str(resource.relative_path),
        "slug": data.get("slug"),
        "title": data.get("title"),
        "date": to_datetime(data.get("date")),
        "url": resource.relative_url or None,
        "hash": fingerprint(str(resource), resource.relative_url),
        "taxonomies": {
            label: entry["terms"] for label, entry in taxonomies_to_dict(resource.taxonomies).items()
        },
    }


def commit_resource(
    session: Session,
    resource: Resource,
    built_at: datetime | None = None,
    ) -> tuple[ResourceRecord, str]:
    """Upsert the index record for a built resource.

    Returns (record, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit - caller controls the transaction.
    """
    fields = _fields(resource)
    record = get_by_resource_id(session, resource.id)

    if record:
        if record.hash == fields["hash"]:
            return record, 'unchanged'
        for name, value in fields.items():
            setattr(record, name, value)
        record.built_at = built_at or datetime.now()
        session.add(record)
        session.flush()
        return record, 'updated'

    record = ResourceRecord(resource_id=resource.id, built_at=built_at or datetime.now(), **fields)
    session.add(record)
    session.flush()
    return record, 'created'
