"""
Tests unitarios para la deduplicación de dependientes.
"""
from sync_middleware.domain.services.deduplication import deduplicate_dependents


def test_last_occurrence_wins() -> None:
    dependents = [
        {"memberDependencyId": "D1", "v": 1},
        {"memberDependencyId": "D1", "v": 2},
    ]

    assert deduplicate_dependents(dependents) == [{"memberDependencyId": "D1", "v": 2}]


def test_keeps_first_seen_position_with_last_content() -> None:
    dependents = [
        {"memberDependencyId": "D1", "v": 1},
        {"memberDependencyId": "D2", "v": 1},
        {"memberDependencyId": "D1", "v": 3},
    ]

    result = deduplicate_dependents(dependents)

    assert result == [
        {"memberDependencyId": "D1", "v": 3},
        {"memberDependencyId": "D2", "v": 1},
    ]


def test_entries_without_id_pass_through_untouched() -> None:
    anonymous = {"relationship": "Spouse"}
    dependents = [
        anonymous,
        {"memberDependencyId": "D1", "v": 1},
        {"relationship": "Spouse"},
        {"memberDependencyId": "D1", "v": 2},
        "raw-entry",
    ]

    result = deduplicate_dependents(dependents)

    assert result == [
        {"relationship": "Spouse"},
        {"memberDependencyId": "D1", "v": 2},
        {"relationship": "Spouse"},
        "raw-entry",
    ]
    assert result[0] is anonymous


def test_nested_structure_is_not_deduplicated() -> None:
    dependent = {
        "memberDependencyId": "D1",
        "children": [{"memberDependencyId": "X"}, {"memberDependencyId": "X"}],
    }

    assert deduplicate_dependents([dependent]) == [dependent]


def test_non_list_input_becomes_empty() -> None:
    assert deduplicate_dependents(None) == []
    assert deduplicate_dependents({"memberDependencyId": "D1"}) == []
    assert deduplicate_dependents("D1") == []


def test_does_not_mutate_input() -> None:
    dependents = [{"memberDependencyId": "D1", "v": 1}, {"memberDependencyId": "D1", "v": 2}]

    deduplicate_dependents(dependents)

    assert len(dependents) == 2
