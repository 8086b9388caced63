"""
Tests for the per-session conversation logs.
"""

from restaurant_finder.utils.logger import ConversationLogger


def test_log_and_summarize_session(tmp_path):
    conversation_logger = ConversationLogger(tmp_path / "logs")

    conversation_logger.log_interaction("s1", "restaurants in Ohio?", "Found 2", place_ids=["a", "b"])
    conversation_logger.log_interaction("s1", "and Texas?", "Found 1", place_ids=["c"], metadata={"model": "m"})

    logs = conversation_logger.get_session_logs("s1")
    assert [log["user_input"] for log in logs] == ["restaurants in Ohio?", "and Texas?"]
    assert logs[1]["metadata"] == {"model": "m"}

    summary = conversation_logger.get_session_summary("s1")
    assert summary["total_interactions"] == 2
    assert summary["total_place_ids"] == 3
    assert summary["duration_seconds"] >= 0

    assert conversation_logger.get_all_sessions() == ["s1"]


def test_unknown_session(tmp_path):
    conversation_logger = ConversationLogger(tmp_path)

    assert conversation_logger.get_session_logs("missing") == []
    assert conversation_logger.get_session_summary("missing") is None
