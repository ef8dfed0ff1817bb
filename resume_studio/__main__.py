"""
CLI entry point for resume generation and CV scoring.
"""

import argparse
import asyncio
import json
import mimetypes
import re
import sys
from pathlib import Path

from .config import StudioConfig
from .exceptions import ResumeStudioError
from .logging_config import configure_logging
from .models import GenerationDebug, Provider, RenderStyle
from .pipeline import ResumeGenerator, ResumeScorer, load_resume


def safe_filename(first_name: str, last_name: str, suffix: str = "resume.pdf") -> str:
    """``<first>-<last>-resume.pdf`` with anything but [a-z0-9] collapsed to dashes."""
    slug = "-".join(
        part
        for part in (re.sub(r"[^a-z0-9]+", "-", n.lower()).strip("-") for n in (first_name, last_name))
        if part
    )
    return f"{slug}-{suffix}" if slug else suffix


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume_studio",
        description="AI resume generation and CV scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate profile.json
  %(prog)s generate profile.json --style modern --provider groq
  %(prog)s generate profile.json --debug
  %(prog)s score resume.pdf --job job.txt --skills "python,sql"
  %(prog)s score --text "$(cat resume.txt)" --job job.txt
        """,
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Polish a profile and render it to PDF")
    gen.add_argument("profile", help="Path to resume profile JSON file")
    gen.add_argument(
        "--style",
        choices=[s.value for s in RenderStyle],
        help="Layout (default: profile templateStyle or DEFAULT_TEMPLATE_STYLE)",
    )
    gen.add_argument(
        "--provider",
        choices=[p.value for p in Provider],
        help="AI provider (default: AI_PROVIDER)",
    )
    gen.add_argument("--model", help="Model override for the provider")
    gen.add_argument("--output", help="Output PDF path (default: <first>-<last>-resume.pdf)")
    gen.add_argument(
        "--debug",
        action="store_true",
        help="Print the polished resume and timings as JSON instead of rendering a PDF",
    )

    score = sub.add_parser("score", help="Score a CV against a job description")
    score.add_argument("file", nargs="?", help="Resume file (PDF, DOCX or text)")
    score.add_argument("--text", help="Resume text instead of a file")
    score.add_argument("--job", required=True, help="Path to job description text file")
    score.add_argument("--skills", help="Comma-separated user skills")
    score.add_argument("--output", help="Write the JSON report here instead of stdout")
    return parser


async def _generate(args: argparse.Namespace, config: StudioConfig) -> None:
    data = json.loads(Path(args.profile).read_text(encoding="utf-8"))
    resume = load_resume(data)
    generator = ResumeGenerator(config)
    result = await generator.generate(
        resume,
        provider=Provider(args.provider) if args.provider else None,
        model=args.model,
        style=args.style,
        debug=args.debug,
    )
    if isinstance(result, GenerationDebug):
        print(result.model_dump_json(by_alias=True, indent=2))
        return

    info = resume.personal_info
    output = Path(args.output or safe_filename(info.first_name, info.last_name))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result)
    print(f"✓ PDF written to {output}")


async def _score(args: argparse.Namespace, config: StudioConfig) -> None:
    if not args.file and not args.text:
        raise SystemExit("score: provide a resume FILE or --text")
    job_description = Path(args.job).read_text(encoding="utf-8")

    content = file_name = content_type = None
    if args.file:
        path = Path(args.file)
        content = path.read_bytes()
        file_name = path.name
        content_type, _ = mimetypes.guess_type(path.name)

    report = await ResumeScorer(config).score(
        job_description=job_description,
        content=content,
        file_name=file_name,
        content_type=content_type,
        text=args.text,
        user_skills=args.skills,
    )
    payload = report.model_dump_json(by_alias=True, indent=2)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"✓ Report written to {args.output} (total {report.total})")
    else:
        print(payload)


def main(argv=None) -> int:
    """Run the command line interface."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level, json_output=args.json_logs)

    try:
        config = StudioConfig.from_env()
        if args.command == "generate":
            asyncio.run(_generate(args, config))
        else:
            asyncio.run(_score(args, config))
    except ResumeStudioError as e:
        print(f"✗ {e.error_code}: {e.message}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
