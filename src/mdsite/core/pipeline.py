"""Pipeline step functions: read, transform, write and index orchestration"""

import logging
from datetime import datetime
from pathlib import Path

from sqlmodel import Session

from mdsite.config import Settings
from mdsite.core.resource.base import Resource
from mdsite.core.site import Site
from mdsite.crud.resources import commit_resource


logger = logging.getLogger(__name__)


def run_read(settings: Settings, root: Path = Path(".")) -> Site:
    """Build a Site from settings and read every collection."""
    site = Site(settings, root=root)
    if not site.source_dir.exists():
        raise RuntimeError(f"Source directory not found: {site.source_dir}")
    site.read()
    return site


def run_transform(site: Site) -> int:
    """Transform every resource. Returns the number transformed."""
    count = 0
    for resource in site.resources:
        if resource.collection.data:
            continue
        try:
            resource.transform()
        except Exception as e:
            raise RuntimeError(f"Failed to transform {resource.relative_path}: {e}") from e
        count += 1
    return count


def run_write(site: Site) -> list[tuple[Resource, Path]]:
    """Write every publishable resource. Returns (resource, output_path) pairs."""
    results = []
    for resource in site.resources:
        if not resource.write_allowed():
            logger.debug("Skipping %s", resource.relative_path)
            continue
        resource.write()
        results.append((resource, resource.destination.output_path()))
    return results


def run_index(engine, resources: list[Resource]) -> dict[str, int]:
    """Record written resources in the build index. Returns status counts."""
    built_at = datetime.now()
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    with Session(engine) as session:
        for resource in resources:
            _, status = commit_resource(session, resource, built_at)
            counts[status] += 1
        session.commit()
    return counts


def run_build(settings: Settings, engine=None, root: Path = Path(".")) -> tuple[Site, list[tuple[Resource, Path]], dict[str, int]]:
    """Full build: read -> transform -> write, then index when an engine is given."""
    site = run_read(settings, root)
    run_transform(site)
    written = run_write(site)
    counts = run_index(engine, [r for r, _ in written]) if engine is not None else {}
    logger.info("Wrote %d resource(s) to %s", len(written), site.dest_dir)
    return site, written, counts
