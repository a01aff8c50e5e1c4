"""
Selection State Machine Module

Interprets pointer input against the current page's curves. Depending on the
mode, a selected curve either becomes an axis reference (handed to the
CalibrationSession) or goes to the labeling collaborator.

States:
    IDLE            - browsing; pointer input is ignored
    AWAITING_AXIS   - next selected curve defines the pending axis
    FREE_SELECTING  - selected curves are routed to the labeler

There is exactly one selection target at a time.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from ..calibration.axis_calibrator import CalibrationSession
from ..calibration.scale import Axis
from ..constants import HIT_TEST_THRESHOLD_PX
from ..errors import Failure
from ..geometry.curve import Curve
from ..geometry.hit_test import PointTransform, find_nearest_curve

logger = logging.getLogger(__name__)


class SelectionMode(Enum):
    IDLE = "IDLE"
    AWAITING_AXIS = "AWAITING_AXIS"
    FREE_SELECTING = "FREE_SELECTING"


@dataclass
class SelectionState:
    """Transient pointer state, rebuilt on every move/click."""
    mode: SelectionMode = SelectionMode.IDLE
    pending_axis: Optional[Axis] = None
    hovered_curve_id: Optional[int] = None
    selected_curve_id: Optional[int] = None


@dataclass(frozen=True)
class SelectionResult:
    """
    Notification for one completed selection.

    mode is the mode the selection was interpreted in. For AWAITING_AXIS,
    axis is set and failure carries any calibration problem.
    """
    mode: SelectionMode
    curve: Curve
    axis: Optional[Axis] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


SelectionObserver = Callable[[SelectionResult], None]


class SelectionStateMachine:
    """
    Mode controller between pointer input, hit testing and calibration.

    Args:
        session: CalibrationSession receiving axis reference curves
        labeler: Object with curve_selected(curve), e.g. LabeledCurveStore
        threshold: Hit-test tolerance in pointer coordinates
        transform: Raw -> pointer-space mapping for curve points
            (typically Viewport.to_display)
    """

    def __init__(
        self,
        session: CalibrationSession,
        labeler=None,
        threshold: float = HIT_TEST_THRESHOLD_PX,
        transform: Optional[PointTransform] = None
    ):
        self.session = session
        self.labeler = labeler
        self.threshold = threshold
        self.transform = transform
        self.state = SelectionState()

        self._curves: List[Curve] = []
        self._return_mode = SelectionMode.IDLE
        self._observers: List[SelectionObserver] = []

    @property
    def mode(self) -> SelectionMode:
        return self.state.mode

    @property
    def curves(self) -> List[Curve]:
        return list(self._curves)

    def add_observer(self, observer: SelectionObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: SelectionObserver) -> None:
        self._observers.remove(observer)

    def set_curves(self, curves: Sequence[Curve]) -> None:
        """Install the curves of the current page/rotation."""
        self._curves = list(curves)
        self.state.hovered_curve_id = None
        self.state.selected_curve_id = None
        logger.debug(f"Selection machine holds {len(self._curves)} curves")

    def set_transform(self, transform: Optional[PointTransform]) -> None:
        """Replace the raw -> pointer mapping after a zoom or rotation."""
        self.transform = transform
        self.state.hovered_curve_id = None

    def curve_by_id(self, curve_id: int) -> Optional[Curve]:
        for curve in self._curves:
            if curve.curve_id == curve_id:
                return curve
        return None

    def begin_calibration(self, axis) -> str:
        """
        Wait for the next selected curve to define an axis.

        Returns:
            Prompt message from the session
        """
        axis = Axis.from_string(axis)
        if self.state.mode != SelectionMode.AWAITING_AXIS:
            self._return_mode = self.state.mode

        self.state.mode = SelectionMode.AWAITING_AXIS
        self.state.pending_axis = axis

        message = self.session.begin_calibration(axis)
        logger.info(message)
        return message

    def cancel_calibration(self) -> None:
        if self.state.mode != SelectionMode.AWAITING_AXIS:
            return
        self._leave_calibration()
        logger.info("Axis selection cancelled")

    def toggle_free_selection(self) -> SelectionMode:
        """
        Switch between IDLE and FREE_SELECTING.

        While an axis is pending this only changes the mode calibration
        returns to.

        Returns:
            The mode now in effect
        """
        if self.state.mode == SelectionMode.AWAITING_AXIS:
            self._return_mode = (
                SelectionMode.IDLE
                if self._return_mode == SelectionMode.FREE_SELECTING
                else SelectionMode.FREE_SELECTING
            )
            return self.state.mode

        if self.state.mode == SelectionMode.IDLE:
            self.state.mode = SelectionMode.FREE_SELECTING
            logger.info("Selection mode enabled")
        else:
            self.state.mode = SelectionMode.IDLE
            self.state.hovered_curve_id = None
            self.state.selected_curve_id = None
            logger.info("Selection mode disabled")

        return self.state.mode

    def pointer_move(self, x: float, y: float) -> Optional[int]:
        """
        Update the hovered curve. Never changes the mode.

        Returns:
            Hovered curve_id, or None (always None while IDLE)
        """
        if self.state.mode == SelectionMode.IDLE:
            return None

        self.state.hovered_curve_id = find_nearest_curve(
            (x, y), self._curves, self.threshold, self.transform
        )
        return self.state.hovered_curve_id

    def click(self, x: float, y: float) -> Optional[SelectionResult]:
        """
        Select the curve under the pointer.

        Returns:
            SelectionResult, or None when idle or nothing is within reach
        """
        curve_id = self.pointer_move(x, y)
        if curve_id is None:
            return None
        return self._route(self.curve_by_id(curve_id))

    def select_curve(self, curve_id: int) -> Optional[SelectionResult]:
        """
        Select a curve by id (e.g. from a curve list) exactly as a click would.

        Returns:
            SelectionResult, or None when idle

        Raises:
            ValueError: If no curve has that id
        """
        if self.state.mode == SelectionMode.IDLE:
            return None

        curve = self.curve_by_id(curve_id)
        if curve is None:
            raise ValueError(f"No curve with id {curve_id} on this page")
        return self._route(curve)

    def _route(self, curve: Curve) -> SelectionResult:
        self.state.selected_curve_id = curve.curve_id

        if self.state.mode == SelectionMode.AWAITING_AXIS:
            axis = self.state.pending_axis
            failure = self.session.set_reference_curve(axis, curve)
            self._leave_calibration()
            result = SelectionResult(
                mode=SelectionMode.AWAITING_AXIS,
                curve=curve,
                axis=axis,
                failure=failure,
            )
        else:
            if self.labeler is not None:
                self.labeler.curve_selected(curve)
            result = SelectionResult(mode=SelectionMode.FREE_SELECTING, curve=curve)

        for observer in list(self._observers):
            observer(result)
        return result

    def _leave_calibration(self) -> None:
        self.state.mode = self._return_mode
        self.state.pending_axis = None
        self._return_mode = SelectionMode.IDLE
        self.session.cancel_calibration()
