from .step import Step
from .workflow import (
    StepBody,
    StepObserver,
    WorkflowError,
    WorkflowAlreadyStarted,
    MissingStepBody,
    UnknownStep,
    Workflow,
)
from .setup_assistant import SetupFlowError, SETUP_STEPS, build_setup_workflow

__all__ = [
    "Step",
    "StepBody",
    "StepObserver",
    "WorkflowError",
    "WorkflowAlreadyStarted",
    "MissingStepBody",
    "UnknownStep",
    "Workflow",
    "SetupFlowError",
    "SETUP_STEPS",
    "build_setup_workflow",
]
