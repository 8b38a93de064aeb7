"""
Job Scorer CLI - Command line interface for the job scoring application.

Usage:
    python -m job_scorer [command] [options]

Commands:
    match       Score how well a profile fits one job
    rank        Rank several jobs against a profile
    import      Import a job posting from a URL
    interview   Predict interview success from preparation data
    profile     Build a profile from a resume
    config      Manage configuration

Examples:
    python -m job_scorer match --profile profile.json --job job.json
    python -m job_scorer rank --profile resume.pdf --jobs jobs.json --top 5
    python -m job_scorer import https://boards.greenhouse.io/acme/jobs/123 -o job.json
    python -m job_scorer interview --checklist-total 10 --checklist-done 6 --days 4
"""

import argparse
import json
import logging
import sys
from typing import Optional

from job_scorer.core import JobMatcher, JobPosting, MatchResult, ProfileParser
from job_scorer.exceptions import JobScorerError
from job_scorer.importers import import_job
from job_scorer.interviews import InterviewReadiness, predict_success
from job_scorer.utils import Config


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Job Scorer - score how well your profile fits job postings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Match command
    match_parser = subparsers.add_parser("match", help="Score one job")
    match_parser.add_argument("--profile", "-p", required=True, help="Path to profile or resume file")
    match_parser.add_argument("--job", "-j", required=True, help="Path to job file (JSON)")
    match_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # Rank command
    rank_parser = subparsers.add_parser("rank", help="Rank jobs against a profile")
    rank_parser.add_argument("--profile", "-p", required=True, help="Path to profile or resume file")
    rank_parser.add_argument("--jobs", "-j", required=True, help="Path to jobs file (JSON list)")
    rank_parser.add_argument("--top", "-t", type=int, help="Show top N matches")
    rank_parser.add_argument(
        "--sort", choices=["overall", "skills", "experience", "education", "location"],
        default="overall",
    )

    # Import command
    import_parser = subparsers.add_parser("import", help="Import a job posting")
    import_parser.add_argument("url", help="Job posting URL")
    import_parser.add_argument("--output", "-o", help="Output file (JSON)")
    import_parser.add_argument("--no-ai", action="store_true", help="Disable AI extraction")

    # Interview command
    interview_parser = subparsers.add_parser("interview", help="Predict interview success")
    interview_parser.add_argument("--checklist-total", type=int, default=0)
    interview_parser.add_argument("--checklist-done", type=int, default=0)
    interview_parser.add_argument("--practice", type=int, default=0, help="Practice answers submitted")
    interview_parser.add_argument("--mocks", type=int, default=0, help="Mock sessions completed")
    interview_parser.add_argument("--days", type=int, help="Days until the interview")
    interview_parser.add_argument("--past-interviews", type=int, default=0)
    interview_parser.add_argument("--past-offers", type=int, default=0)
    interview_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # Profile command
    profile_parser = subparsers.add_parser("profile", help="Build or inspect a candidate profile")
    profile_parser.add_argument("--parse", metavar="FILE", help="Resume (PDF, DOCX, TXT) or profile JSON to read")
    profile_parser.add_argument("--create-sample", action="store_true", help="Write an example profile JSON")
    profile_parser.add_argument("--output", "-o", help="Where to save the profile JSON")

    # Config command
    config_parser = subparsers.add_parser("config", help="View or change settings")
    config_parser.add_argument("--show", action="store_true", help="Print settings with secrets masked")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a dotted key, e.g. output.top 5")
    config_parser.add_argument("--set-api-key", nargs=2, metavar=("PROVIDER", "KEY"), help="Store an API key (env vars still win)")
    config_parser.add_argument("--init", action="store_true", help="Write the default settings file")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "match": cmd_match,
        "rank": cmd_rank,
        "import": cmd_import,
        "interview": cmd_interview,
        "profile": cmd_profile,
        "config": cmd_config,
    }

    try:
        config = Config(args.config)
        setup_logging("DEBUG" if args.verbose else config.get_log_level())
        commands[args.command](args, config)

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except (JobScorerError, OSError, ValueError) as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(f"\nError: {e}")
        sys.exit(1)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_job(path: str) -> JobPosting:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    # Accept the import command's output as well as a bare posting
    if isinstance(data, dict) and isinstance(data.get("job"), dict):
        data = data["job"]
    return JobPosting.from_dict(data)


def load_jobs(path: str) -> list[JobPosting]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Jobs file must contain a JSON list: {path}")
    return [JobPosting.from_dict(item.get("job", item) if isinstance(item, dict) else item) for item in data]


def print_match(job: JobPosting, result: MatchResult) -> None:
    print(f"\n{job.job_title} @ {job.company_name}")
    print(f"   Location: {job.location or '(not listed)'}")
    print(f"   Overall Match: {result.overall_score}%")
    print(
        f"   Skills {result.skills_score} | Experience {result.experience_score} | "
        f"Education {result.education_score} | Location {result.location_score}"
    )
    if result.strengths:
        print(f"   Strengths: {', '.join(result.strengths)}")
    if result.gaps:
        print(f"   Gaps: {', '.join(g.skill for g in result.gaps)}")
    for rec in result.recommendations:
        print(f"   - {rec}")


def cmd_match(args, config: Config):
    """Execute match command."""
    profile = ProfileParser().parse_file(args.profile)
    job = load_job(args.job)

    result = JobMatcher(profile).match_job(job)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_match(job, result)


def cmd_rank(args, config: Config):
    """Execute rank command."""
    profile = ProfileParser().parse_file(args.profile)
    jobs = load_jobs(args.jobs)
    top = args.top if args.top is not None else config.get("output.top", 10)
    try:
        top = max(int(top), 0)
    except (TypeError, ValueError):
        raise ValueError(f"output.top must be an integer, got {top!r}") from None

    ranked = JobMatcher(profile).rank_jobs(jobs, sort_by=args.sort)

    print(f"\nTop {min(top, len(ranked))} of {len(ranked)} jobs (sorted by {args.sort}):")
    print("-" * 80)

    for i, (job, result) in enumerate(ranked[:top], 1):
        print(f"\n{i}. {job.job_title} @ {job.company_name}")
        print(f"   Overall Match: {result.overall_score}%")
        if result.gaps:
            print(f"   Missing Skills: {', '.join(g.skill for g in result.gaps[:3])}")


def cmd_import(args, config: Config):
    """Execute import command."""
    if args.no_ai:
        config.set("importer.use_ai", False)

    result = import_job(args.url, config)
    job = result.job

    print(f"Imported ({result.status}) via {result.importer}")
    print(f"   {job.job_title or '(no title)'} @ {job.company_name or '(no company)'}")
    print(f"   Location: {job.location or '(not listed)'}")

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"Saved posting to {args.output}")


def cmd_interview(args, config: Config):
    """Execute interview command."""
    readiness = InterviewReadiness(
        checklist_total=args.checklist_total,
        checklist_completed=args.checklist_done,
        practice_count=args.practice,
        mock_session_count=args.mocks,
        days_until_interview=args.days,
        past_interviews=args.past_interviews,
        past_offers=args.past_offers,
    )
    prediction = predict_success(readiness)

    if args.json:
        print(json.dumps(prediction.to_dict(), indent=2))
        return

    print(f"\nInterview Success Score: {prediction.predicted_score}%")
    print(f"   Confidence: {prediction.confidence_band}")
    if prediction.top_actions:
        print("   Top actions:")
        for action in prediction.top_actions:
            print(f"   - {action}")


def cmd_profile(args, config: Config):
    """Execute profile command."""
    parser = ProfileParser()

    if args.create_sample:
        profile = parser.create_sample_profile()
        output = args.output or "sample_profile.json"
        with open(output, 'w', encoding='utf-8') as f:
            json.dump(profile.to_dict(), f, indent=2)
        print(f"Created sample profile: {output}")

    elif args.parse:
        profile = parser.parse_file(args.parse)
        print("\nParsed Profile\n")
        print(f"Name: {profile.full_name}")
        print(f"Location: {profile.location}")
        level = profile.experience_level.value if profile.experience_level else "unknown"
        print(f"Experience level: {level}")
        print(f"\nSkills ({len(profile.skills)}):")
        for skill in profile.skills[:10]:
            print(f"  - {skill.name} ({skill.level.name.lower()})")

        print(f"\nExperience ({len(profile.employment_history)} positions):")
        for entry in profile.employment_history[:3]:
            print(f"  - {entry.title} @ {entry.company}")

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(profile.to_dict(), f, indent=2)
            print(f"\nSaved profile to: {args.output}")

    else:
        print("Use --parse or --create-sample")


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"Created config at: {config.config_path}")

    elif args.show:
        config.print_config()

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for numbers and booleans
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"Set {key} = {value}")

    elif args.set_api_key:
        provider, key = args.set_api_key
        config.set_api_key(provider, key)
        print(f"Set API key for {provider}")

    else:
        print("Use --show, --set, --set-api-key, or --init")


if __name__ == "__main__":
    main()
