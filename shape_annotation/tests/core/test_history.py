"""
Tests for HistoryManager.
"""

import pytest

from shape_annotation.core.annotation import Document, HistoryManager, TextObject


def doc_with_texts(n):
    return Document(texts=[TextObject(i, i, f"t{i}") for i in range(n)])


@pytest.fixture
def history():
    return HistoryManager(max_history=100)


class TestHistoryManager:
    def test_empty(self, history):
        assert not history.can_undo
        assert not history.can_redo
        assert history.undo(Document()) is None
        assert history.redo(Document()) is None

    @pytest.mark.parametrize("steps", [1, 5, 20])
    def test_undo_redo_round_trip(self, history, steps):
        states = []
        live = Document()
        for i in range(steps):
            history.commit(live)
            states.append(live.clone())
            live = doc_with_texts(i + 1)
        final = live.clone()

        for _ in range(steps):
            live = history.undo(live)
        assert live == Document()
        assert not history.can_undo

        for _ in range(steps):
            live = history.redo(live)
        assert live == final
        assert not history.can_redo

    def test_undo_returns_committed_state(self, history):
        before = doc_with_texts(1)
        history.commit(before)
        after = doc_with_texts(2)

        restored = history.undo(after)

        assert restored == before
        assert history.redo_depth == 1

    def test_commit_clears_redo(self, history):
        history.commit(doc_with_texts(1))
        history.undo(doc_with_texts(2))
        assert history.can_redo

        history.commit(doc_with_texts(3))
        assert not history.can_redo

    def test_snapshots_are_independent(self, history):
        live = doc_with_texts(1)
        history.commit(live)
        live.texts[0].content = "mutated"

        restored = history.undo(live)
        assert restored.texts[0].content == "t0"

        # The returned document is not the stored snapshot itself
        restored.texts[0].content = "again"
        assert history.redo(restored).texts[0].content == "mutated"

    def test_limit_drops_oldest(self):
        history = HistoryManager(max_history=3)
        for i in range(5):
            history.commit(doc_with_texts(i))

        assert history.undo_depth == 3
        live = doc_with_texts(5)
        for _ in range(3):
            live = history.undo(live)
        assert len(live.texts) == 2
        assert history.undo(live) is None

    def test_clear(self, history):
        history.commit(Document())
        history.undo(Document())
        history.commit(Document())
        history.clear()
        assert history.undo_depth == history.redo_depth == 0
