"""
Curve Labeling Module

Keeps the curves a user has picked in free-selection mode together with the
labels they were given.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..geometry.curve import Curve

logger = logging.getLogger(__name__)


class LabelError(Exception):
    """Raised when a label cannot be saved."""
    pass


@dataclass
class LabeledCurve:
    """A curve and the user's name for it."""
    label: str
    curve: Curve

    @property
    def curve_id(self) -> int:
        return self.curve.curve_id


class LabeledCurveStore:
    """
    Labeling collaborator for SelectionStateMachine.

    The machine hands over the selected curve through curve_selected(); the
    caller then names it with save_label(). A curve is labeled at most once:
    saving again updates the existing entry.
    """

    def __init__(self):
        self._labeled: List[LabeledCurve] = []
        self.pending: Optional[Curve] = None

    def curve_selected(self, curve: Curve) -> None:
        self.pending = curve
        logger.debug(f"Curve {curve.curve_id} ({len(curve.points)} points) awaiting a label")

    def save_label(self, label: str) -> LabeledCurve:
        """
        Label the pending curve.

        Args:
            label: Label text (surrounding whitespace stripped)

        Returns:
            The new or updated LabeledCurve

        Raises:
            LabelError: If no curve is pending or the label is empty
        """
        if self.pending is None:
            raise LabelError("No curve selected. Select a curve before labeling it.")

        label = (label or "").strip()
        if not label:
            raise LabelError("Label must not be empty")

        curve = self.pending
        self.pending = None

        for entry in self._labeled:
            if entry.curve_id == curve.curve_id:
                entry.label = label
                logger.info(f"Updated label for curve {curve.curve_id} to \"{label}\"")
                return entry

        entry = LabeledCurve(label=label, curve=curve)
        self._labeled.append(entry)
        logger.info(f"Saved curve {curve.curve_id} with label \"{label}\"")
        return entry

    def delete(self, index: int) -> LabeledCurve:
        """Remove and return the entry at a list position."""
        entry = self._labeled.pop(index)
        logger.info(f"Deleted labeled curve \"{entry.label}\"")
        return entry

    def clear(self) -> None:
        count = len(self._labeled)
        self._labeled = []
        self.pending = None
        logger.info(f"Cleared {count} labeled curves")

    @property
    def labeled_curves(self) -> List[LabeledCurve]:
        return list(self._labeled)

    def __len__(self) -> int:
        return len(self._labeled)

    def __iter__(self) -> Iterator[LabeledCurve]:
        return iter(list(self._labeled))
