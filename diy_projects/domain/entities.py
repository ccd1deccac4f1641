"""Plain records mirroring the project/category/material/step tables."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional

from .hours import round_optional_hours


@dataclass
class Category:
    category_id: int | None
    category_name: str

    def __str__(self) -> str:
        return f"ID={self.category_id}, categoryName={self.category_name}"


@dataclass
class Material:
    material_id: int | None
    project_id: int | None
    material_name: str
    num_required: Optional[int] = None
    cost: Optional[Decimal] = None

    def __str__(self) -> str:
        return (
            f"ID={self.material_id}, materialName={self.material_name}, "
            f"numRequired={self.num_required}, cost={self.cost}"
        )


@dataclass
class Step:
    step_id: int | None
    project_id: int | None
    step_text: str
    step_order: int = 0

    def __str__(self) -> str:
        return f"ID={self.step_id}, stepText={self.step_text}"


@dataclass
class Project:
    project_id: int | None = None
    project_name: Optional[str] = None
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None
    notes: Optional[str] = None
    # only filled by a single-project fetch
    materials: list[Material] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)

    def __post_init__(self):
        self.estimated_hours = round_optional_hours(self.estimated_hours)
        self.actual_hours = round_optional_hours(self.actual_hours)

    def __str__(self) -> str:
        lines = [
            f"\n   ID={self.project_id}",
            f"   name={self.project_name}",
            f"   estimatedHours={self.estimated_hours}",
            f"   actualHours={self.actual_hours}",
            f"   difficulty={self.difficulty}",
            f"   notes={self.notes}",
            "\n   Materials:",
        ]
        lines += [f"      {m}" for m in self.materials]
        lines.append("\n   Steps:")
        lines += [f"      {s}" for s in self.steps]
        lines.append("\n   Categories:")
        lines += [f"      {c}" for c in self.categories]
        return "\n".join(lines)


@dataclass
class ProjectChanges:
    """Field-level edits for a project.

    None means "not provided, keep the current value". Any other value,
    including an empty string, replaces the field.
    """
    project_name: Optional[str] = None
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None
    notes: Optional[str] = None

    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.project_name, self.estimated_hours, self.actual_hours, self.difficulty, self.notes)
        )

    def apply_to(self, project: Project) -> Project:
        """Return the whole-record replacement; children are not carried over."""
        return replace(
            project,
            project_name=project.project_name if self.project_name is None else self.project_name,
            estimated_hours=project.estimated_hours if self.estimated_hours is None else self.estimated_hours,
            actual_hours=project.actual_hours if self.actual_hours is None else self.actual_hours,
            difficulty=project.difficulty if self.difficulty is None else self.difficulty,
            notes=project.notes if self.notes is None else self.notes,
            materials=[],
            steps=[],
            categories=[],
        )
