"""Helper for declaring grid criteria with sequential ids."""

from __future__ import annotations

from officine.schemas.grids import Criterion


class CriterionBuilder:
    """Numbers criteria 1..n across a whole grid, in declaration order."""

    def __init__(self) -> None:
        self.counter = 0

    def next(self, reference: str, description: str, pre_opening: bool = False) -> Criterion:
        self.counter += 1
        return Criterion(
            id=self.counter,
            reference=reference,
            description=description,
            pre_opening=pre_opening,
        )

    def item(self, reference: str, description: str) -> Criterion:
        """Regular criterion."""
        return self.next(reference, description, False)

    def pre(self, reference: str, description: str) -> Criterion:
        """Criterion also checked at the pre-opening visit."""
        return self.next(reference, description, True)
