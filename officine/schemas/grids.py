"""Grid catalog schemas — read-only inspection checklists."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Criterion(BaseModel):
    """One checkable item. ``pre_opening`` marks items checked before opening."""

    model_config = ConfigDict(frozen=True)

    id: int
    reference: str
    description: str
    pre_opening: bool = False


class Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    items: tuple[Criterion, ...] = ()


class Grid(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    code: str
    version: str
    description: str = ""
    icon: str = ""
    color: str = ""
    sections: tuple[Section, ...] = ()

    @property
    def criteria_count(self) -> int:
        return sum(len(section.items) for section in self.sections)

    @property
    def section_count(self) -> int:
        return len(self.sections)


class GridSummary(BaseModel):
    """Grid header plus criteria/section counts, used for grid selection."""

    id: str
    name: str
    code: str
    version: str
    description: str
    icon: str
    color: str
    criteria_count: int
    section_count: int
