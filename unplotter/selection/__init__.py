# Curve selection and labeling module

from .state_machine import (
    SelectionMode,
    SelectionState,
    SelectionResult,
    SelectionStateMachine,
)

from .labels import (
    LabelError,
    LabeledCurve,
    LabeledCurveStore,
)

__all__ = [
    # State machine
    "SelectionMode",
    "SelectionState",
    "SelectionResult",
    "SelectionStateMachine",
    # Labels
    "LabelError",
    "LabeledCurve",
    "LabeledCurveStore",
]
