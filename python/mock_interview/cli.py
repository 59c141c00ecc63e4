"""
Terminal mock interview.

Runs a typed interview against any catalog model, streaming the
interviewer's reply as it is generated.

Usage:
    # Behavioral interview on Gemini Flash
    mock-interview --model gemini-2.5-flash --style BEHAVIORAL \
        --role "Backend Engineer" --topic "Distributed systems"

    # List models
    mock-interview --list-models

Type your answer and press Enter. ``/end`` (or Ctrl-D) ends the interview
and prints the feedback.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Final, Optional, Sequence

from .config import AVAILABLE_MODELS, load_settings
from .conversation import ConversationSession
from .errors import InterviewRuntimeError, ProviderNotConfigured, UnknownModel
from .models import ModelId, PromptStyle, SessionConfig
from .orchestrator import InterviewOrchestrator, format_elapsed


logger: logging.Logger = logging.getLogger(__name__)


# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS: Final[int] = 0
EXIT_CONFIG_ERROR: Final[int] = 2
EXIT_INTERRUPTED: Final[int] = 130  # Standard SIGINT exit code


END_COMMAND: Final[str] = "/end"


class StreamPrinter:
    """Prints only the new suffix of each cumulative snapshot."""

    def __init__(self, out=None) -> None:
        self._out = out or sys.stdout
        self._printed = 0

    def reset(self) -> None:
        self._printed = 0

    def __call__(self, snapshot: str) -> None:
        if len(snapshot) < self._printed:
            self._printed = 0
        self._out.write(snapshot[self._printed:])
        self._out.flush()
        self._printed = len(snapshot)


async def run_interview(config: SessionConfig) -> int:
    """Run one typed interview until ``/end`` or EOF."""
    settings = load_settings()
    printer = StreamPrinter()

    def on_update() -> None:
        if (
            orchestrator.is_processing
            and orchestrator.messages
            and orchestrator.messages[-1].role == "model"
        ):
            printer(orchestrator.messages[-1].text)

    orchestrator = InterviewOrchestrator(
        config,
        ConversationSession(settings),
        on_update=on_update,
    )

    print("Interviewer: ", end="", flush=True)
    try:
        await orchestrator.begin()
    except (UnknownModel, ProviderNotConfigured) as exc:
        print()
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR
    print()
    if orchestrator.last_error is not None:
        print(f"[error] {orchestrator.last_error}")

    while True:
        try:
            prompt = f"\n[{format_elapsed(orchestrator.elapsed_seconds)}] You: "
            line = await asyncio.to_thread(input, prompt)
        except EOFError:
            print()
            break
        if line.strip() == END_COMMAND:
            break
        if not line.strip():
            continue

        orchestrator.input_text = line
        printer.reset()
        print("Interviewer: ", end="", flush=True)
        await orchestrator.send()
        print()
        if orchestrator.last_error is not None:
            print(f"[error] {orchestrator.last_error} (you can retry the same answer)")

    feedback = orchestrator.end_interview()
    print()
    print(feedback)
    return EXIT_SUCCESS


def main(
    model: str,
    style: str,
    role: str,
    topic: str,
    candidate_name: str = "",
) -> int:
    """
    Build the session config and run the interview.

    Returns:
        Process exit code.
    """
    try:
        config = SessionConfig(
            model=model,
            style=PromptStyle(style.strip().upper()),
            role=role,
            topic=topic,
            candidate_name=candidate_name,
        )
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    try:
        return asyncio.run(run_interview(config))
    except KeyboardInterrupt:
        logger.info("Interview interrupted")
        return EXIT_INTERRUPTED
    except InterviewRuntimeError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR


def _print_models() -> None:
    for info in AVAILABLE_MODELS:
        print(f"{info.id.value:<28} {info.provider.value:<10} {info.name} - {info.description}")


def cli(argv: Optional[Sequence[str]] = None) -> None:
    """
    Command-line interface entry point with argument parsing.
    """
    parser = argparse.ArgumentParser(
        description="Rehearse a mock interview against a conversational AI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
    GOOGLE_API_KEY      Gemini models (GEMINI_API_KEY also accepted)
    OPENAI_API_KEY      GPT models and audio transcription
    ANTHROPIC_API_KEY   Claude models
        """,
    )
    parser.add_argument(
        "--model",
        type=str,
        default=ModelId.FLASH.value,
        help=f"Model id (default: {ModelId.FLASH.value}); see --list-models",
    )
    parser.add_argument(
        "--style",
        type=str.upper,
        default=PromptStyle.BEHAVIORAL.value,
        choices=[s.value for s in PromptStyle],
        help="Interview style (default: BEHAVIORAL)",
    )
    parser.add_argument("--role", type=str, default="Software Engineer", help="Target role")
    parser.add_argument("--topic", type=str, default="General", help="Focus topic")
    parser.add_argument(
        "--candidate",
        type=str,
        default="",
        dest="candidate_name",
        help="Candidate name (display only)",
    )
    parser.add_argument(
        "--list-models",
        action="store_true",
        help="Print the model catalog and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.list_models:
        _print_models()
        sys.exit(EXIT_SUCCESS)

    exit_code = main(
        model=args.model,
        style=args.style,
        role=args.role,
        topic=args.topic,
        candidate_name=args.candidate_name,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
