"""Tests for lexical relevance ranking."""

import pytest

from legalmind.memory.collections import InMemoryCollectionStore
from legalmind.memory.ranker import query_terms, rank, rank_documents
from legalmind.models.memory import Document


def _docs(*contents: str) -> list[Document]:
    return [Document(id=f"doc-{i}", content=content) for i, content in enumerate(contents)]


def test_ranks_by_matching_term_count() -> None:
    """Test the reference ordering and scores."""
    documents = _docs("alpha beta", "alpha", "gamma")

    ranked = rank_documents(documents, "alpha beta", top_n=5)

    assert [r.document.content for r in ranked] == ["alpha beta", "alpha", "gamma"]
    assert [r.score for r in ranked] == [2, 1, 0]


def test_equal_scores_keep_insertion_order() -> None:
    """Test that ties retain collection order."""
    documents = _docs("gamma first", "alpha one", "gamma second", "alpha two")

    ranked = rank_documents(documents, "alpha", top_n=4)

    assert [r.document.id for r in ranked] == ["doc-1", "doc-3", "doc-0", "doc-2"]


def test_matching_is_case_insensitive_substring() -> None:
    """Test that terms match inside longer words regardless of case."""
    documents = _docs("The CONTRACT was breached", "unrelated text")

    ranked = rank_documents(documents, "Contract breach", top_n=2)

    assert ranked[0].document.id == "doc-0"
    assert ranked[0].score == 2


def test_repeated_query_terms_count_once() -> None:
    """Test that repeating a term does not raise the score."""
    documents = _docs("alpha")

    ranked = rank_documents(documents, "alpha alpha ALPHA", top_n=1)

    assert query_terms("alpha alpha ALPHA") == ["alpha"]
    assert ranked[0].score == 1
    assert ranked[0].distance == 0.0


def test_distance_is_complement_of_match_ratio() -> None:
    """Test distance = 1 - score / term_count."""
    documents = _docs("alpha", "nothing")

    ranked = rank_documents(documents, "alpha beta", top_n=2)

    assert ranked[0].distance == pytest.approx(0.5)
    assert ranked[1].distance == pytest.approx(1.0)


def test_whitespace_query_returns_first_documents_in_order() -> None:
    """Test that a query with no terms is not an error."""
    documents = _docs("one", "two", "three")

    ranked = rank_documents(documents, "   \t ", top_n=2)

    assert [r.document.id for r in ranked] == ["doc-0", "doc-1"]
    assert all(r.score == 0 for r in ranked)
    assert all(r.distance == 1.0 for r in ranked)


@pytest.mark.parametrize("top_n", [0, -1])
def test_non_positive_top_n_returns_empty(top_n: int) -> None:
    """Test that top_n <= 0 yields nothing."""
    assert rank_documents(_docs("alpha"), "alpha", top_n=top_n) == []


def test_top_n_limits_results() -> None:
    """Test that at most top_n documents are returned."""
    documents = _docs(*[f"alpha {i}" for i in range(10)])

    assert len(rank_documents(documents, "alpha", top_n=3)) == 3


def test_unknown_collection_returns_empty() -> None:
    """Test that ranking a never-written collection is safe."""
    store = InMemoryCollectionStore()

    assert rank(store, "plaintiff_missing", "x", 5) == []


def test_rank_reads_from_store() -> None:
    """Test that rank loads the named collection only."""
    store = InMemoryCollectionStore()
    store.append("plaintiff_case-1", Document(id="a", content="lease agreement"))
    store.append("opposition_case-1", Document(id="b", content="lease dispute"))

    ranked = rank(store, "plaintiff_case-1", "lease", 3)

    assert [r.document.id for r in ranked] == ["a"]
