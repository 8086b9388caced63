import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional


class ConversationLogger:
    def __init__(self, log_dir="logs"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def log_interaction(
        self,
        session_id: str,
        user_input: str,
        agent_output: str,
        place_ids: Optional[List[str]] = None,
        metadata: dict = None
    ) -> Path:
        """
        Log a single agent run.

        Args:
            session_id: Unique identifier for the run's session
            user_input: The question sent to the agent
            agent_output: The agent's final answer
            place_ids: Place ids returned by the tool during the run (optional)
            metadata: Additional metadata about the run (optional)

        Returns:
            Path of the written log file
        """
        session_dir = self.log_dir / session_id
        session_dir.mkdir(exist_ok=True)

        now = datetime.now(timezone.utc)
        log_entry = {
            "timestamp": now.isoformat(),
            "user_input": user_input,
            "agent_output": agent_output,
            "place_ids": place_ids or [],
            "metadata": metadata or {}
        }

        # Microseconds keep files from the same second apart
        filename = f"interaction_{now.strftime('%Y%m%d_%H%M%S_%f')}.json"

        log_file = session_dir / filename
        with open(log_file, 'w', encoding='utf-8') as f:
            json.dump(log_entry, f, indent=2, ensure_ascii=False)
        return log_file

    def get_session_logs(self, session_id: str):
        """
        Retrieve all logs for a specific session.

        Returns:
            List of log entries sorted by timestamp
        """
        session_dir = self.log_dir / session_id
        if not session_dir.exists():
            return []

        logs = []
        for log_file in session_dir.glob("interaction_*.json"):
            with open(log_file, 'r', encoding='utf-8') as f:
                logs.append(json.load(f))

        return sorted(logs, key=lambda x: x["timestamp"])

    def get_all_sessions(self):
        return [d.name for d in self.log_dir.iterdir() if d.is_dir()]

    def get_session_summary(self, session_id: str):
        """
        Get a summary of a session's runs.

        Returns:
            Dictionary containing session summary statistics, or None for an unknown session
        """
        logs = self.get_session_logs(session_id)
        if not logs:
            return None

        return {
            "session_id": session_id,
            "total_interactions": len(logs),
            "total_place_ids": sum(len(log["place_ids"]) for log in logs),
            "start_time": logs[0]["timestamp"],
            "end_time": logs[-1]["timestamp"],
            "duration_seconds": (datetime.fromisoformat(logs[-1]["timestamp"]) -
                               datetime.fromisoformat(logs[0]["timestamp"])).total_seconds()
        }
