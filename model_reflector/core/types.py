"""
Data structures produced by the model reflector.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RelationDescriptor:
    """
    Metadata for one relation of a model.

    The fields after ``return_type`` are only filled when the relation exposes
    a foreign key name (``MorphTo`` and ``BelongsToMany`` do not).
    """

    relation: str
    return_type: str
    related_class: Optional[type] = None
    related_model: Optional[Any] = None
    related_table: Optional[str] = None
    foreign_key_name: Optional[str] = None
    qualified_foreign_key_name: Optional[str] = None
    is_relation_parent: Optional[bool] = None

    @property
    def has_foreign_key(self) -> bool:
        return self.foreign_key_name is not None


@dataclass
class ModelStructure:
    """Parent and children of a model, inferred from package layout."""

    parent_class: Optional[type] = None
    child_classes: list[type] = field(default_factory=list)
