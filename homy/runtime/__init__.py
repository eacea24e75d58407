"""Runtime for homy programs: values, scope chain and the evaluator."""

from .environment import Binding, BindingKind, Environment, Frame, ScopeArena
from .evaluator import Completion, CompletionType, EvaluationState, Evaluator
from .values import AppDescription, BodySection, BuiltinFunction, FunctionValue

__all__ = [
    "AppDescription",
    "BodySection",
    "Binding",
    "BindingKind",
    "BuiltinFunction",
    "Completion",
    "CompletionType",
    "Environment",
    "EvaluationState",
    "Evaluator",
    "Frame",
    "FunctionValue",
    "ScopeArena",
]
