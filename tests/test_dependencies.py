"""Tests for the dependency graph."""

from formlogic.dependencies import DependencyGraph
from formlogic.logic import ConditionalLogicEngine
from formlogic.registry import Condition, Question


def depends_on(question_id: str, *references: str) -> Question:
    return Question(
        id=question_id,
        conditions=[
            Condition(question_id=ref, operator="is-not-empty", action="show")
            for ref in references
        ],
    )


class TestDependencyGraph:
    """Tests for DependencyGraph."""

    def test_direct_dependents(self) -> None:
        graph = DependencyGraph([
            Question(id="q1"),
            depends_on("q5", "q1"),
            depends_on("q6", "q1"),
        ])
        assert graph.get_direct_dependents("q1") == ["q5", "q6"]
        assert graph.get_direct_dependents("q5") == []

    def test_chain_closure(self) -> None:
        graph = DependencyGraph([
            Question(id="q1"),
            depends_on("q5", "q1"),
            depends_on("q6", "q5"),
            depends_on("q7", "q6"),
        ])
        assert graph.get_dependents("q1") == {"q5", "q6", "q7"}
        assert graph.get_dependents("q6") == {"q7"}
        assert graph.get_dependents("q7") == set()

    def test_diamond(self) -> None:
        graph = DependencyGraph([
            Question(id="root"),
            depends_on("left", "root"),
            depends_on("right", "root"),
            depends_on("bottom", "left", "right"),
        ])
        assert graph.get_dependents("root") == {"left", "right", "bottom"}

    def test_multiple_conditions_on_same_reference(self) -> None:
        graph = DependencyGraph([Question(id="a"), depends_on("b", "a", "a")])
        assert graph.get_direct_dependents("a") == ["b"]

    def test_three_question_cycle_terminates(self) -> None:
        graph = DependencyGraph([
            depends_on("A", "B"),
            depends_on("B", "C"),
            depends_on("C", "A"),
        ])
        assert graph.get_dependents("A") == {"B", "C"}
        assert graph.get_dependents("B") == {"A", "C"}
        assert graph.get_dependents("C") == {"A", "B"}

    def test_self_reference_excluded(self) -> None:
        graph = DependencyGraph([depends_on("loop", "loop")])
        assert graph.get_dependents("loop") == set()
        assert graph.is_cyclic("loop") is True

    def test_cyclic_questions(self) -> None:
        graph = DependencyGraph([
            Question(id="start"),
            depends_on("A", "B"),
            depends_on("B", "A"),
            depends_on("tail", "A"),
        ])
        assert graph.cyclic_questions() == ["A", "B"]
        assert graph.is_cyclic("tail") is False

    def test_unknown_reference_is_indexed(self) -> None:
        graph = DependencyGraph([depends_on("q1", "ghost")])
        assert graph.get_dependents("ghost") == {"q1"}
        assert graph.referenced_ids == {"ghost"}


class TestEngineDependents:
    """Tests for dependency queries through the engine."""

    def test_engine_delegates_to_graph(self) -> None:
        engine = ConditionalLogicEngine([
            Question(id="q1"),
            depends_on("q5", "q1"),
            depends_on("q6", "q5"),
        ])
        assert engine.get_dependent_questions("q1") == {"q5", "q6"}
        assert engine.get_dependent_questions("unknown") == set()

    def test_cycle_recorded_in_diagnostics(self) -> None:
        engine = ConditionalLogicEngine([
            depends_on("A", "B"),
            depends_on("B", "C"),
            depends_on("C", "A"),
        ])
        cycle_warnings = [w for w in engine.diagnostics.warnings if w.code == "DEPENDENCY_CYCLE"]
        assert sorted(w.question_id for w in cycle_warnings) == ["A", "B", "C"]

    def test_cycle_states_still_resolve(self) -> None:
        engine = ConditionalLogicEngine([
            depends_on("A", "B"),
            depends_on("B", "C"),
            depends_on("C", "A"),
        ])
        assert engine.get_visible_questions() == set()

        engine.update_response("A", {"value": "x"})
        assert engine.get_visible_questions() == {"C"}
