"""
Command line interface for WeblookAI.

Usage: weblook What is the capital of France?
The arguments are joined into one question; the final answer goes to stdout.
"""

import asyncio
import logging
import sys

from weblook.agent.graph import run_pipeline
from weblook.core.config import LOG_LEVEL
from weblook.core.errors import UsageError, WeblookError

logger = logging.getLogger(__name__)

USAGE = "Example Usage: weblook What is the capital of France?"


def main(argv: list[str] | None = None) -> int:
    """Run one question end to end. Returns the process exit code."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    args = sys.argv[1:] if argv is None else argv
    question = " ".join(args).strip()

    if not question:
        print("ERROR: Please provide a question to investigate!", file=sys.stderr)
        print(USAGE)
        return 0

    logger.info("Starting WeblookAI v4.0 (Fully Autonomous Mode)...")
    logger.info('Investigating question: "%s"', question)

    try:
        result = asyncio.run(run_pipeline(question))
    except UsageError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        print(USAGE)
        return 0
    except WeblookError as e:
        logger.error("An error occurred during the process: %s", e.message)
        return 1
    except Exception as e:
        logger.exception("An unexpected error occurred during the process: %s", e)
        return 1

    print("=======================================")
    print("FINAL ANSWER:")
    print("=======================================")
    print(result.answer)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
