from __future__ import annotations
import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from task_helper.config.settings import Settings
from task_helper.infrastructure.io.read_upload.base import read_upload
from task_helper.infrastructure.llm.exceptions import (
    ConfigurationError,
    DocumentReadError,
    ModelError,
    TransportError,
    ValidationError,
)
from task_helper.infrastructure.llm.openai_provider import OpenAIResponsesProvider
from task_helper.services.connection_service import ConnectionService
from task_helper.services.task_service import TaskService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="task-helper",
        description="Run a task against uploaded files through a remote model.",
    )
    ap.add_argument("files", nargs="*", help="Files to attach (any type)")
    ap.add_argument("--task", default="", help="Free-text task / question")
    ap.add_argument("--model", default=None, help="Primary model (default: $OPENAI_MODEL or gpt-4.1)")
    ap.add_argument("--fallback-model", default=None)
    ap.add_argument("--base-url", default=None)
    ap.add_argument("--api-key", default=None, help="Defaults to $OPENAI_API_KEY")
    ap.add_argument("--input-format", choices=["text", "messages"], default=None)
    ap.add_argument("--check-connection", action="store_true", help="Send a probe prompt and exit")
    ap.add_argument("--show-prompt", action="store_true", help="Print the assembled prompt to stderr")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    overrides = {
        "primary_model": args.model,
        "fallback_model": args.fallback_model,
        "base_url": args.base_url,
        "input_format": args.input_format,
    }
    return replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def _print_failure(err: ModelError) -> None:
    print(f"Model error: HTTP {err.status} ({err.model})", file=sys.stderr)
    print(json.dumps(err.payload, ensure_ascii=False, indent=2), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = settings_from_args(args)
    try:
        provider = OpenAIResponsesProvider(
            api_key=args.api_key, base_url=settings.base_url, timeout_sec=settings.timeout_sec
        )
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 2

    try:
        if args.check_connection:
            model, text = ConnectionService(provider, settings).test()
            print(f"connected: {model} -> {text!r}")
            return 0

        svc = TaskService(provider, settings)
        res = svc.run_sync(args.task, [read_upload(path) for path in args.files])
    except ValidationError as e:
        print(str(e), file=sys.stderr)
        return 2
    except DocumentReadError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ModelError as e:
        _print_failure(e)
        return 1
    except TransportError as e:
        print(f"Transport error ({e.model}): {e}", file=sys.stderr)
        return 1

    if args.show_prompt:
        print(res.prompt.rendered, file=sys.stderr)
    logger.info("Answer produced by %s", res.model)
    print(res.answer.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
