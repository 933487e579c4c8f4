import asyncio
import json
from typing import Optional

import structlog

from clabot.config import BotConfig, build_config
from clabot.dispatch import handle_event
from clabot.errors import ClaBotError, ConfigurationError
from clabot.events import load_event
from clabot.logging_setup import configure_logging
from clabot.models import Verdict
from clabot.services.github import GitHubClient
from clabot.services.sheets import SheetClient
from clabot.settings import load_settings

logger = structlog.get_logger(__name__)

STATUS_FILE = ".cla_verdict"
REPORT_FILE = ".cla_report.json"


def _write_event(event: str):
    try:
        with open(STATUS_FILE, "w", encoding="utf-8") as f:
            f.write(event)
    except OSError as e:
        logger.warning("Could not write verdict file", path=STATUS_FILE, error=str(e))


def _write_report(report: dict):
    try:
        with open(REPORT_FILE, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
    except OSError as e:
        logger.warning("Could not write report", path=REPORT_FILE, error=str(e))


async def run(
    config: BotConfig,
    gh: Optional[GitHubClient] = None,
    sheets: Optional[SheetClient] = None,
) -> Optional[Verdict]:
    """Check the event described by `config`; None means nothing was reported."""
    event = load_event(config.event_name, config.event_path)
    if event is None:
        logger.info("Ignored event", event_name=config.event_name)
        return None

    gh = gh or GitHubClient(token=config.token, base_url=config.api_url)
    sheets = sheets or SheetClient()
    return await handle_event(config, event, gh, sheets)


async def main() -> int:
    configure_logging()
    try:
        config = build_config(load_settings())
    except ConfigurationError as e:
        logger.error("Missing required configuration", error=str(e))
        return 2
    if config.debug:
        configure_logging(debug=True)

    report = {"repository": config.repository, "event": config.event_name}
    try:
        verdict = await run(config)
    except ClaBotError as e:
        logger.error(
            "clabot error",
            error=str(e),
            repository=config.repository,
            event_name=config.event_name,
        )
        _write_event("error")
        _write_report({**report, "outcome": "error", "error": str(e)})
        return 1

    if verdict is None:
        _write_event("ignored")
        _write_report({**report, "outcome": "ignored"})
        return 0

    _write_event(verdict.state)
    _write_report(
        {
            **report,
            "outcome": verdict.kind.value,
            "state": verdict.state,
            "author": verdict.author,
            "sha": verdict.sha,
            "pr_number": verdict.pr_number,
        }
    )
    return 0


def run_cli() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run_cli()
