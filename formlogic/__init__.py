"""formlogic: Conditional visibility and requirement engine for questionnaires."""

__version__ = "0.1.0"

# Import callable protocol - these imports must come after __version__ to avoid circular import
from formlogic.callable import CallableResult, execute
from formlogic.logic import ConditionalLogicEngine, QuestionState

__all__ = [
    "__version__",
    "CallableResult",
    "ConditionalLogicEngine",
    "QuestionState",
    "execute",
]
