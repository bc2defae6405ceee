"""Relevance ranker - lexical overlap scoring over a collection."""

from legalmind.memory.collections import CollectionStore
from legalmind.models.memory import Document, RankedDocument


def query_terms(query: str) -> list[str]:
    """Tokenize a query into distinct lowercase terms, first occurrence order.

    Repeated terms are kept once: a term either appears in a document or it
    does not, so repeating it cannot raise a score.
    """
    terms: list[str] = []
    for token in query.lower().split():
        if token not in terms:
            terms.append(token)
    return terms


def score_document(document: Document, terms: list[str]) -> int:
    """Count how many terms appear as substrings of the document content."""
    content_lower = document.content.lower()
    return sum(1 for term in terms if term in content_lower)


def rank_documents(documents: list[Document], query: str, top_n: int) -> list[RankedDocument]:
    """Rank documents against a query.

    Pure function with no I/O.

    Scoring strategy:
    - Tokenize query on whitespace (lowercase, distinct terms)
    - For each document, count how many terms appear as substrings
    - Sort by score descending; Python's sort is stable, so ties keep
      insertion order
    - Zero-score documents are kept (an empty query still returns the
      first ``top_n`` documents)
    - Distance is ``1 - score / term_count``, or 1.0 when there are no terms

    Args:
        documents: Collection contents in insertion order
        query: Free-text query
        top_n: Maximum number of results

    Returns:
        Up to ``top_n`` ranked documents, best first
    """
    if top_n <= 0 or not documents:
        return []

    terms = query_terms(query)
    term_count = len(terms)

    scored = [(doc, score_document(doc, terms)) for doc in documents]
    scored.sort(key=lambda item: -item[1])

    return [
        RankedDocument(
            document=doc,
            score=score,
            distance=1.0 - score / term_count if term_count else 1.0,
        )
        for doc, score in scored[:top_n]
    ]


def rank(store: CollectionStore, key: str, query: str, top_n: int) -> list[RankedDocument]:
    """Load a collection and rank its documents against a query.

    Unknown collections yield an empty result, never an error.
    """
    if top_n <= 0:
        return []
    return rank_documents(store.load_all(key), query, top_n)
