#!/usr/bin/env python
"""
Selection Tests

Tests for:
- Selection mode transitions (idle, awaiting axis, free selecting)
- Routing selected curves to calibration or labeling
- Observer notification
- Labeled curve store
"""

import sys
from pathlib import Path

# Add project root to path so we can import unplotter modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from unplotter.calibration import Axis, CalibrationSession
from unplotter.errors import ErrorKind
from unplotter.geometry import Curve
from unplotter.selection import (
    LabelError,
    LabeledCurveStore,
    SelectionMode,
    SelectionStateMachine,
)


def create_test_curves():
    """Axis lines plus one data curve and a stray single point."""
    return [
        Curve(0, [(100.0, 100.0), (400.0, 100.0)]),   # x-axis
        Curve(1, [(100.0, 100.0), (100.0, 400.0)]),   # y-axis
        Curve(2, [(150.0, 150.0), (250.0, 300.0), (350.0, 250.0)]),
        Curve(3, [(300.0, 350.0)]),
    ]


def create_machine():
    session = CalibrationSession()
    store = LabeledCurveStore()
    machine = SelectionStateMachine(session, labeler=store, threshold=25.0)
    machine.set_curves(create_test_curves())
    return machine, session, store


class TestModeTransitions:
    """Tests for mode changes."""

    def test_starts_idle(self):
        """Test a new machine is idle and ignores the pointer."""
        machine, _, _ = create_machine()
        assert machine.mode == SelectionMode.IDLE
        assert machine.pointer_move(250.0, 101.0) is None
        assert machine.click(250.0, 101.0) is None
        assert machine.state.hovered_curve_id is None
        print("  [PASS] idle ignores pointer")

    def test_toggle_free_selection(self):
        """Test IDLE <-> FREE_SELECTING."""
        machine, _, _ = create_machine()
        assert machine.toggle_free_selection() == SelectionMode.FREE_SELECTING
        assert machine.toggle_free_selection() == SelectionMode.IDLE
        print("  [PASS] toggle")

    def test_calibration_from_idle_returns_to_idle(self):
        """Test an axis click from idle goes back to idle."""
        machine, session, _ = create_machine()
        prompt = machine.begin_calibration("x")
        assert machine.mode == SelectionMode.AWAITING_AXIS
        assert machine.state.pending_axis == Axis.X
        assert "X-axis" in prompt

        result = machine.click(250.0, 102.0)
        assert result is not None and result.ok
        assert result.axis == Axis.X
        assert result.curve.curve_id == 0
        assert machine.mode == SelectionMode.IDLE
        assert machine.state.pending_axis is None
        assert session.x.curve_id == 0
        assert session.pending_axis is None
        print("  [PASS] calibration returns to idle")

    def test_calibration_from_free_selection_returns_there(self):
        """Test an axis click while free selecting goes back to free selecting."""
        machine, session, _ = create_machine()
        machine.toggle_free_selection()
        machine.begin_calibration("y")

        result = machine.click(103.0, 250.0)
        assert result.axis == Axis.Y
        assert session.y.curve_id == 1
        assert machine.mode == SelectionMode.FREE_SELECTING
        print("  [PASS] calibration returns to free selection")

    def test_toggle_while_awaiting_axis(self):
        """Test toggling during calibration changes where it returns to."""
        machine, _, _ = create_machine()
        machine.begin_calibration("x")
        assert machine.toggle_free_selection() == SelectionMode.AWAITING_AXIS

        machine.click(250.0, 100.0)
        assert machine.mode == SelectionMode.FREE_SELECTING
        print("  [PASS] toggle during calibration")

    def test_miss_keeps_waiting(self):
        """Test a click on empty space does not consume the pending axis."""
        machine, session, _ = create_machine()
        machine.begin_calibration("x")
        assert machine.click(700.0, 700.0) is None
        assert machine.mode == SelectionMode.AWAITING_AXIS
        assert session.x.curve_id is None
        print("  [PASS] miss keeps waiting")

    def test_failed_calibration_still_reverts(self):
        """Test a rejected reference curve still leaves calibration mode."""
        machine, session, _ = create_machine()
        machine.set_curves([Curve(0, [(100.0, 100.0)])])
        machine.begin_calibration("x")

        result = machine.select_curve(0)
        assert not result.ok
        assert result.failure.kind == ErrorKind.INSUFFICIENT_POINTS
        assert machine.mode == SelectionMode.IDLE
        assert session.x.extent is None
        print("  [PASS] failed calibration reverts mode")

    def test_cancel_calibration(self):
        """Test cancelling restores the previous mode."""
        machine, session, _ = create_machine()
        machine.toggle_free_selection()
        machine.begin_calibration("x")
        machine.cancel_calibration()
        assert machine.mode == SelectionMode.FREE_SELECTING
        assert session.pending_axis is None
        print("  [PASS] cancel calibration")


class TestRouting:
    """Tests for hover, click and observers."""

    def test_hover_does_not_change_mode(self):
        """Test pointer_move only updates the hovered curve."""
        machine, _, _ = create_machine()
        machine.toggle_free_selection()
        assert machine.pointer_move(250.0, 98.0) == 0
        assert machine.state.hovered_curve_id == 0
        assert machine.mode == SelectionMode.FREE_SELECTING

        assert machine.pointer_move(700.0, 700.0) is None
        assert machine.state.hovered_curve_id is None
        print("  [PASS] hover")

    def test_free_selection_routes_to_labeler(self):
        """Test a free-selection click hands the curve to the labeler."""
        machine, session, store = create_machine()
        machine.toggle_free_selection()

        result = machine.click(250.0, 298.0)
        assert result.mode == SelectionMode.FREE_SELECTING
        assert result.axis is None
        assert result.curve.curve_id == 2
        assert machine.state.selected_curve_id == 2
        assert store.pending is not None and store.pending.curve_id == 2
        assert session.x.curve_id is None, "Free selection must not calibrate"
        print("  [PASS] labeler routing")

    def test_observers_notified(self):
        """Test every result reaches observers, in order."""
        machine, _, _ = create_machine()
        received = []
        machine.add_observer(received.append)

        machine.begin_calibration("x")
        first = machine.click(250.0, 100.0)
        machine.toggle_free_selection()
        second = machine.click(250.0, 298.0)
        machine.click(700.0, 700.0)

        assert received == [first, second]

        machine.remove_observer(received.append)
        machine.click(250.0, 298.0)
        assert len(received) == 2
        print("  [PASS] observers")

    def test_select_curve_by_id(self):
        """Test selection by id behaves like a click."""
        machine, session, _ = create_machine()
        assert machine.select_curve(1) is None, "Idle ignores selection"

        machine.begin_calibration("y")
        result = machine.select_curve(1)
        assert result.axis == Axis.Y
        assert session.y.curve_id == 1

        machine.toggle_free_selection()
        with pytest.raises(ValueError):
            machine.select_curve(99)
        print("  [PASS] select by id")

    def test_transform_sets_pointer_space(self):
        """Test the threshold applies after the raw -> pointer transform."""
        session = CalibrationSession()
        machine = SelectionStateMachine(
            session, threshold=25.0, transform=lambda x, y: (x * 4, y * 4)
        )
        machine.set_curves([Curve(0, [(0.0, 0.0), (100.0, 0.0)])])
        machine.toggle_free_selection()

        # 10 raw units away is 40 pointer units away
        assert machine.pointer_move(200.0, 40.0) is None
        assert machine.pointer_move(200.0, 20.0) == 0
        print("  [PASS] transform")


class TestLabeledCurveStore:
    """Tests for the labeling collaborator."""

    def test_save_label(self):
        """Test labeling the pending curve."""
        store = LabeledCurveStore()
        store.curve_selected(Curve(2, [(0.0, 0.0), (1.0, 1.0)]))
        entry = store.save_label("  Sample A  ")

        assert entry.label == "Sample A"
        assert entry.curve_id == 2
        assert store.pending is None
        assert len(store) == 1
        print("  [PASS] save label")

    def test_relabel_updates(self):
        """Test labeling the same curve twice updates the entry."""
        store = LabeledCurveStore()
        curve = Curve(2, [(0.0, 0.0), (1.0, 1.0)])
        store.curve_selected(curve)
        store.save_label("first")
        store.curve_selected(curve)
        store.save_label("second")

        assert len(store) == 1
        assert [e.label for e in store] == ["second"]
        print("  [PASS] relabel updates")

    def test_label_errors(self):
        """Test labeling without a curve or with an empty label."""
        store = LabeledCurveStore()
        with pytest.raises(LabelError):
            store.save_label("orphan")

        store.curve_selected(Curve(1, [(0.0, 0.0), (1.0, 1.0)]))
        with pytest.raises(LabelError):
            store.save_label("   ")
        assert store.pending is not None, "Failed save keeps the pending curve"
        print("  [PASS] label errors")

    def test_delete_and_clear(self):
        """Test removing entries."""
        store = LabeledCurveStore()
        for i in range(3):
            store.curve_selected(Curve(i, [(0.0, 0.0), (1.0, i)]))
            store.save_label(f"c{i}")

        removed = store.delete(1)
        assert removed.label == "c1"
        assert [e.curve_id for e in store.labeled_curves] == [0, 2]

        store.clear()
        assert len(store) == 0
        print("  [PASS] delete and clear")
