"""Grid catalog — the read-only checklists inspections are filled against.

To add a grid: create a module exposing ``build() -> Grid`` and list it in
``_BUILDERS`` below.
"""

from __future__ import annotations

from functools import cache

from officine.grids import grossiste, pharmacie
from officine.schemas.grids import Grid, GridSummary

_BUILDERS = (
    pharmacie.build,
    grossiste.build,
)


@cache
def all_grids() -> tuple[Grid, ...]:
    """Return every grid of the catalog, in display order."""
    return tuple(build() for build in _BUILDERS)


def find_grid(grid_id: str) -> Grid | None:
    """Look a grid up by id. Unknown ids return None."""
    return next((g for g in all_grids() if g.id == grid_id), None)


def summarize(grid: Grid) -> GridSummary:
    return GridSummary(
        id=grid.id,
        name=grid.name,
        code=grid.code,
        version=grid.version,
        description=grid.description,
        icon=grid.icon,
        color=grid.color,
        criteria_count=grid.criteria_count,
        section_count=grid.section_count,
    )


def grid_map() -> dict[str, Grid]:
    """Grids keyed by id — the shape CSV export expects."""
    return {g.id: g for g in all_grids()}


__all__ = ["all_grids", "find_grid", "grid_map", "summarize"]
