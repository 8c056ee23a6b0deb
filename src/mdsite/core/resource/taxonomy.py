"""Taxonomy indexing: per-resource term lists for every registered taxonomy type"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable

from mdsite.core.models import TaxonomyType
from mdsite.core.utils.dotdict import DotDict

if TYPE_CHECKING:
    from mdsite.core.resource.base import Resource


@dataclass(eq=False)
class TaxonomyTerm:
    """One term association between a resource and a taxonomy type."""
    resource: "Resource" = field(repr=False)
    label:    Any
    type:     TaxonomyType

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "type": self.type.label}


@dataclass
class TaxonomyEntry:
    type:  TaxonomyType
    terms: list[TaxonomyTerm] = field(default_factory=list)


def as_list(value: Any) -> list:
    """Coerce a front matter value to a list: None -> [], scalar -> [scalar]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def build_taxonomies(types: Iterable[TaxonomyType]) -> DotDict:
    """Return label -> TaxonomyEntry with empty term lists for each type."""
    return DotDict((t.label, TaxonomyEntry(type=t)) for t in types)


def import_terms(resource: "Resource", taxonomies: DotDict) -> None:
    """Append one term per entry under each type's data key, in source order.

    Duplicate labels are kept.
    """
    for entry in taxonomies.values():
        for label in as_list(resource.data.get(entry.type.key)):
            entry.terms.append(TaxonomyTerm(resource=resource, label=label, type=entry.type))


def pluralized_list(data, singular_key: str, plural_key: str) -> list[str]:
    """Merge a singular and a plural front matter key into a de-duplicated list of strings.

    A string under the plural key is split on whitespace; None entries are dropped.
    """
    plural = data.get(plural_key)
    if isinstance(plural, str):
        plural = plural.split()
    elif isinstance(plural, (list, tuple)):
        plural = [v for v in plural if v is not None]
    else:
        plural = []

    values = as_list(data.get(singular_key)) + plural
    return list(dict.fromkeys(str(v) for v in values if v is not None))


def taxonomies_to_dict(taxonomies: DotDict) -> dict[str, Any]:
    """Serializable form: label -> {type, terms: [label, ...]}."""
    return {
        label: {
            "type": entry.type.model_dump(),
            "terms": [t.label for t in entry.terms],
        }
        for label, entry in taxonomies.items()
    }
