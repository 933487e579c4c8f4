"""Signer sources and their aggregation.

Two sources are supported:

- a published spreadsheet exported as CSV (header row first, login in the second column)
- a plain-text file in the repository, one login per line, read at the PR's base branch

Every login is normalized with :func:`clabot.models.normalize_login`.
"""

import csv
import io
from functools import partial
from typing import Iterable, Set

import structlog

from clabot.config import BotConfig
from clabot.errors import FetchError, FormatError, SourceNotConfigured
from clabot.models import normalize_login
from clabot.services.github import GitHubClient
from clabot.services.sheets import SheetClient

logger = structlog.get_logger(__name__)

SOURCE_SHEET = "sheet"
SOURCE_REPO_FILE = "repo_file"

# Position of the login in each CSV row
SHEET_LOGIN_COLUMN = 1


def parse_signers_csv(text: str) -> Set[str]:
    signers: Set[str] = set()
    try:
        rows = list(csv.reader(io.StringIO(text), strict=True))
    except csv.Error as e:
        raise FormatError(f"signer sheet is not valid CSV: {e}") from e

    for row in rows[1:]:  # first row is the header
        if len(row) <= SHEET_LOGIN_COLUMN:
            continue
        login = normalize_login(row[SHEET_LOGIN_COLUMN])
        if login:
            signers.add(login)
    return signers


def parse_signers_text(text: str) -> Set[str]:
    """
    Parse a signer file: one login per line.
    Lines starting with '#' or blank lines are ignored.
    """
    signers: Set[str] = set()
    for line in text.split("\n"):
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        signers.add(normalize_login(s))
    return signers


def _log_signers(signers: Iterable[str], source: str) -> None:
    for login in sorted(signers):
        logger.info("CLA signer", signer=login, source=source)


async def read_sheet_signers(sheets: SheetClient, url: str) -> Set[str]:
    if not url:
        raise SourceNotConfigured("no signer sheet URL configured")
    signers = parse_signers_csv(await sheets.fetch_csv(url))
    _log_signers(signers, SOURCE_SHEET)
    return signers


async def read_repo_signers(gh: GitHubClient, repo: str, path: str, ref: str) -> Set[str]:
    if not path:
        raise SourceNotConfigured("no signer file path configured")
    signers = parse_signers_text(await gh.get_file_contents(repo, path, ref))
    _log_signers(signers, SOURCE_REPO_FILE)
    return signers


def merge_signers(*signer_sets: Set[str]) -> Set[str]:
    merged: Set[str] = set()
    for signers in signer_sets:
        merged |= signers
    return merged


async def load_signers(
    config: BotConfig, gh: GitHubClient, sheets: SheetClient, ref: str
) -> Set[str]:
    """
    Union the signers of every configured source.
    Any configured source that fails aborts the whole load: a partial list
    would turn an outage into "CLA not signed".
    """
    readers = [
        (SOURCE_SHEET, partial(read_sheet_signers, sheets, config.google_sheet_url)),
        (
            SOURCE_REPO_FILE,
            partial(read_repo_signers, gh, config.repository, config.signers_path, ref),
        ),
    ]

    collected = []
    for source, read in readers:
        try:
            collected.append(await read())
        except SourceNotConfigured:
            logger.debug("Signer source skipped", source=source)
        except (FetchError, FormatError) as e:
            raise type(e)(f"{source}: {e}") from e

    if not collected:
        logger.warning("No signer source configured; nobody can pass the check")
    return merge_signers(*collected)
