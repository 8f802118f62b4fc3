from backend.engine.forgesolver.assembler import assemble
from backend.engine.forgesolver.endings import enumerate_endings
from backend.engine.forgesolver.planner import Planner
from backend.engine.forgesolver.reachability import solve, stays_in_range
from backend.engine.forgesolver.summary import StepGroup, format_steps, summarize
from backend.engine.forgesolver.validator import SlotReport, ValidationReport, validate

__all__ = [
    "Planner",
    "SlotReport",
    "StepGroup",
    "ValidationReport",
    "assemble",
    "enumerate_endings",
    "format_steps",
    "solve",
    "stays_in_range",
    "summarize",
    "validate",
]
