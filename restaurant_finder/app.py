import os
import sys
import uuid
import asyncio
import logging
import argparse
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from restaurant_finder.agent import (
    create_restaurant_agent,
    place_ids_from_event,
    stream_agent_events,
    text_from_event,
    to_jsonable,
)
from restaurant_finder.config import APP_CONFIG, AppConfig
from restaurant_finder.finder import RestaurantFinder
from restaurant_finder.tools import create_bounding_boxes_tool
from restaurant_finder.utils.logger import ConversationLogger

logger = logging.getLogger(__name__)

console = Console()


def configure_logging(log_file: str = "restaurant_finder.log"):
    """Send log records to the console and to a log file."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            RichHandler(rich_tracebacks=True, console=Console(stderr=True)),
            logging.FileHandler(log_file)
        ]
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def consume_events(
    events: AsyncIterator[Dict[str, Any]],
    output: Optional[Console] = None,
    json_events: bool = False
) -> Tuple[str, List[str]]:
    """
    Render agent stream events and collect the run's results.

    Args:
        events: The agent's v2 stream events
        output: Console to render to
        json_events: Print every event as JSON instead of the streamed answer

    Returns:
        The final answer and the place ids returned by the tool
    """
    output = output or console
    answer = ""
    place_ids: List[str] = []
    async for event in events:
        kind = event["event"]
        if kind == "on_chat_model_start":
            # Only the last model turn is the answer
            answer = ""
        elif kind == "on_tool_end":
            place_ids.extend(place_ids_from_event(event))
        answer += text_from_event(event)

        if json_events:
            output.print_json(data=to_jsonable(event))
        elif kind == "on_tool_start":
            output.print(f"[cyan]Calling {event['name']} with {event['data'].get('input')}[/cyan]")
        elif kind == "on_tool_end":
            output.print(f"[cyan]{event['name']} returned {len(place_ids_from_event(event))} place ids[/cyan]")
        elif text_from_event(event):
            output.print(text_from_event(event), end="")

    if not json_events:
        output.print()
    return answer, place_ids


async def run_agent(
    user_input: str,
    config: Optional[AppConfig] = None,
    session_id: Optional[str] = None,
    json_events: bool = False
) -> str:
    """
    Answer one question with the restaurant agent, streaming its output to the console.

    Returns:
        The agent's final answer
    """
    config = config or APP_CONFIG
    session_id = session_id or str(uuid.uuid4())

    finder = RestaurantFinder.from_config(config)
    agent = create_restaurant_agent([create_bounding_boxes_tool(finder)], config.llm)
    conversation_logger = ConversationLogger(config.log_dir)

    try:
        answer, place_ids = await consume_events(
            stream_agent_events(agent, user_input), json_events=json_events
        )
    finally:
        await finder.close()

    conversation_logger.log_interaction(
        session_id=session_id,
        user_input=user_input,
        agent_output=answer,
        place_ids=place_ids,
        metadata={"model": config.llm.model_name}
    )
    return answer


def show_sessions(conversation_logger: ConversationLogger, output: Optional[Console] = None):
    """Print a table summarizing every logged session."""
    output = output or console
    table = Table(title="Conversation sessions")
    for column in ("Session", "Runs", "Place ids", "Started", "Duration (s)"):
        table.add_column(column)

    for session_id in sorted(conversation_logger.get_all_sessions()):
        summary = conversation_logger.get_session_summary(session_id)
        if summary is None:
            continue
        table.add_row(
            session_id,
            str(summary["total_interactions"]),
            str(summary["total_place_ids"]),
            summary["start_time"],
            f"{summary['duration_seconds']:.1f}",
        )
    output.print(table)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Ask the restaurant finder agent a question")
    parser.add_argument("question", nargs="*", help="Question for the agent, e.g. 'Find restaurants in California'")
    parser.add_argument("--session-id", default=None, help="Session id used to group conversation logs")
    parser.add_argument("--json", dest="json_events", action="store_true", help="Print every agent event as JSON")
    parser.add_argument("--sessions", action="store_true", help="List logged conversation sessions and exit")
    args = parser.parse_args(argv)

    if args.sessions:
        show_sessions(ConversationLogger(APP_CONFIG.log_dir))
        return
    if not args.question:
        parser.error("a question is required unless --sessions is given")

    configure_logging()
    try:
        APP_CONFIG.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    asyncio.run(run_agent(
        " ".join(args.question),
        session_id=args.session_id,
        json_events=args.json_events
    ))


if __name__ == "__main__":
    main()
