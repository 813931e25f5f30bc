"""Dependency graph between questions.

An edge runs from a referenced question to every question whose conditions
reference it. The dependents of a question are the questions whose derived
state may change when its answer changes.
"""

import logging
from collections.abc import Iterable

from formlogic.registry.models import Question

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Reverse index of condition references with bounded closure walks.

    The graph is built once from the question set. Cyclic configurations
    are tolerated: walks track visited nodes and never revisit one, and a
    question is never reported as its own dependent.
    """

    def __init__(self, questions: Iterable[Question]) -> None:
        """Build the reverse index.

        Args:
            questions: Questions in declaration order. Later duplicates
                replace earlier ones.
        """
        by_id: dict[str, Question] = {}
        for question in questions:
            by_id[question.id] = question

        self._direct: dict[str, list[str]] = {}
        for question in by_id.values():
            for condition in question.conditions:
                dependents = self._direct.setdefault(condition.question_id, [])
                if question.id not in dependents:
                    dependents.append(question.id)

    def get_direct_dependents(self, question_id: str) -> list[str]:
        """Questions with at least one condition referencing question_id."""
        return list(self._direct.get(question_id, []))

    def get_dependents(self, question_id: str) -> set[str]:
        """Transitive closure of dependents, excluding question_id itself.

        Iterative depth-first walk over a visited set, so cycles terminate.
        """
        dependents: set[str] = set()
        stack = list(reversed(self._direct.get(question_id, [])))
        while stack:
            current = stack.pop()
            if current == question_id:
                logger.debug("Dependency cycle back to %s truncated", question_id)
                continue
            if current in dependents:
                continue
            dependents.add(current)
            stack.extend(reversed(self._direct.get(current, [])))
        return dependents

    def is_cyclic(self, question_id: str) -> bool:
        """Whether question_id can reach itself through dependents."""
        visited: set[str] = set()
        stack = list(self._direct.get(question_id, []))
        while stack:
            current = stack.pop()
            if current == question_id:
                return True
            if current in visited:
                continue
            visited.add(current)
            stack.extend(self._direct.get(current, []))
        return False

    def cyclic_questions(self) -> list[str]:
        """Every question that lies on a dependency cycle, sorted by id."""
        return sorted(qid for qid in self._direct if self.is_cyclic(qid))

    @property
    def referenced_ids(self) -> set[str]:
        """Every question id referenced by at least one condition."""
        return set(self._direct)
