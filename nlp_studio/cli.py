"""Command-line front end.

Commands:
    tasks                 list the registered tasks
    detect TEXT           suggest a task for TEXT (smart detect)
    run --task T [TEXT]   run a task through the background worker
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from typing import TextIO

from nlp_studio.client import WorkerClient
from nlp_studio.config import WORKER_RESULT_TIMEOUT_S
from nlp_studio.entities import reconcile_entities
from nlp_studio.logging import configure_logging
from nlp_studio.state import (
    AIState,
    EntityFragment,
    EntityList,
    ResultEvent,
    SentimentOutput,
    SummaryOutput,
    TaskOutput,
)
from nlp_studio.tasks import TASK_REGISTRY, get_task_profile, suggest_task, task_ids
from nlp_studio.views import format_metrics, sentiment_view, summary_view, trigger_words


# ============================================================================
# Rendering
# ============================================================================

def render_entities(text: str, output: EntityList) -> str:
    if not output.entities:
        return "No named entities detected."
    parts: list[str] = []
    for fragment in reconcile_entities(text, output.entities).fragments:
        if isinstance(fragment, EntityFragment):
            parts.append(f"[{fragment.text}|{fragment.label} {fragment.entity.score * 100:.1f}%]")
        else:
            parts.append(fragment.text)
    return "".join(parts)


def render_sentiment(text: str, output: SentimentOutput) -> str:
    view = sentiment_view(output)
    lines = [f"{label:<10} {percent:>3}%" for label, percent in view.bars]
    marked = []
    for token in trigger_words(text):
        if token.polarity == "positive":
            marked.append(f"[+{token.text}]")
        elif token.polarity == "negative":
            marked.append(f"[-{token.text}]")
        else:
            marked.append(token.text)
    lines.append(f"confidence: {view.bars[0][1]}%")
    lines.append("".join(marked))
    return "\n".join(lines)


def render_summary(text: str, output: SummaryOutput) -> str:
    view = summary_view(output, text)
    return f"{view.text}\nreduction: {view.reduction_percent}% ({view.char_count} chars)"


def render_output(text: str, output: TaskOutput) -> str:
    if isinstance(output, EntityList):
        return render_entities(text, output)
    if isinstance(output, SentimentOutput):
        return render_sentiment(text, output)
    return render_summary(text, output)


# ============================================================================
# Commands
# ============================================================================

def _run_tasks(args: argparse.Namespace, out: TextIO) -> int:
    for profile in TASK_REGISTRY:
        print(f"{profile.id:<14} {profile.label:<20} {profile.estimated_size:>7}  {profile.model_ref}", file=out)
    return 0


def _run_detect(args: argparse.Namespace, out: TextIO) -> int:
    if not args.text.strip():
        print("[detect] Please enter some text to analyze first.", file=sys.stderr)
        return 1
    suggestion = suggest_task(args.text, args.task)
    if suggestion.switched:
        print(f"{suggestion.task_id}: {suggestion.reason}", file=out)
    else:
        print(
            f"{suggestion.task_id}: Current model is already optimal for this context. ({suggestion.reason})",
            file=out,
        )
    return 0


def _progress_printer(err: TextIO):
    last: list[tuple[str, float]] = []

    def listener(state: AIState) -> None:
        progress = state.progress
        if progress is None:
            return
        key = (progress.file, progress.percentage)
        if last and last[-1] == key:
            return
        last.append(key)
        print(f"[load] {progress.file} {progress.percentage:.0f}%", file=err)

    return listener


def _run_task(args: argparse.Namespace, out: TextIO) -> int:
    profile = get_task_profile(args.task)
    if profile is None:
        print(f"[run] Unknown task {args.task!r}", file=sys.stderr)
        return 2
    text = args.text if args.text is not None else profile.sample_text

    with WorkerClient() as client:
        client.subscribe(_progress_printer(sys.stderr))
        run_id = client.run_task(profile.id, text)
        if run_id is None:
            print("[run] Nothing to analyze: input text is empty.", file=sys.stderr)
            return 1
        try:
            state = client.wait(timeout=args.timeout)
        except TimeoutError as exc:
            print(f"[run] {exc}", file=sys.stderr)
            return 1

    if state.status == "error" or state.result is None or state.metrics is None:
        print(f"[run] Error: {state.error}", file=sys.stderr)
        return 1

    if args.json:
        event = ResultEvent(
            run_id=run_id,
            data=state.result,
            inference_time_ms=state.metrics.inference_time_ms,
            load_time_ms=state.metrics.load_time_ms,
        )
        print(json.dumps(event.as_dict(), indent=2), file=out)
    else:
        print(render_output(text, state.result), file=out)
        print(f"[{profile.id}] {format_metrics(state.metrics)} ({profile.model_ref})", file=out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nlp-studio", description="Run sentiment, NER and summarization models")
    parser.add_argument("--log-level", default=None, help="Override APP_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("tasks", help="List available tasks")

    detect_parser = subparsers.add_parser("detect", help="Suggest the best task for a text")
    detect_parser.add_argument("text", help="Text to analyze")
    detect_parser.add_argument("--task", default="sentiment", choices=task_ids(), help="Currently selected task")

    run_parser = subparsers.add_parser("run", help="Run a task on a text")
    run_parser.add_argument("--task", required=True, choices=task_ids(), help="Task to run")
    run_parser.add_argument("text", nargs="?", default=None, help="Input text (defaults to the task's sample)")
    run_parser.add_argument("--timeout", type=float, default=WORKER_RESULT_TIMEOUT_S, help="Seconds to wait")
    run_parser.add_argument("--json", action="store_true", help="Print the raw result message")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "tasks":
        return _run_tasks(args, sys.stdout)
    if args.command == "detect":
        return _run_detect(args, sys.stdout)
    if args.command == "run":
        return _run_task(args, sys.stdout)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
