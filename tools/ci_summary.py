# tools/ci_summary.py
import json
import os
from pathlib import Path
from typing import Dict, List

from clabot.settings import load_settings

REPORT = Path(".cla_report.json")

OUTCOME_LINES = {
    "compliant": "✅ CLA signed",
    "non_compliant": "❌ CLA not signed",
    "ignored": "➖ Event ignored, no check ran",
    "error": "⚠️ Check failed, no status was posted",
}


def render_summary(data: Dict, title: str) -> str:
    outcome = data.get("outcome", "ignored")

    lines: List[str] = []
    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"**Outcome:** {OUTCOME_LINES.get(outcome, outcome)} (`{outcome}`)")
    lines.append("")
    lines.append("| Repository | Event | Pull request | Author | Commit |")
    lines.append("|------------|-------|-------------:|--------|--------|")
    pr = data.get("pr_number")
    sha = (data.get("sha") or "")[:7]
    lines.append(
        f"| {data.get('repository', '—')} | {data.get('event') or '—'} "
        f"| {'#' + str(pr) if pr else '—'} | {data.get('author') or '—'} "
        f"| {'`' + sha + '`' if sha else '—'} |"
    )
    if data.get("error"):
        lines.append("")
        lines.append("> " + str(data["error"]).replace("\n", "\n> "))
    lines.append("")
    lines.append("_Tip: comment `@cla-bot check` on the PR to re-run the check after signing._")
    return "\n".join(lines)


def main() -> int:
    settings = load_settings()
    if not settings.enable_job_summary:
        print("Job summary disabled via ENABLE_JOB_SUMMARY.")
        return 0

    if not REPORT.exists():
        print("No .cla_report.json found; nothing to summarize.")
        return 0

    try:
        data = json.loads(REPORT.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as e:
        print(f"Could not read/parse .cla_report.json: {e}")
        return 0

    md = render_summary(data, settings.summary_title or "CLA Check")
    summary_path = os.environ.get("GITHUB_STEP_SUMMARY")
    if summary_path:
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(md + "\n")
    else:
        # Fallback to stdout if not running in Actions
        print(md)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
