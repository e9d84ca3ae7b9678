"""CLI entry point for the gig match client."""

import argparse
import asyncio
import logging
import sys

from src.api.candidates import CandidateService
from src.api.jobs import JobService
from src.api.transport import ApiClient, TokenStore
from src.core.config import Settings
from src.core.errors import ApiError, ErrorKind
from src.core.schemas import (
    Availability,
    CandidateResult,
    JobListing,
    JobRecommendation,
    JobType,
    LocationFilter,
    Proficiency,
    SkillRef,
    SortKey,
)
from src.search.controller import SessionController, SessionStatus
from src.search.presentation import format_distance, format_salary_range, match_tier
from src.search.request_builder import SearchInput, build_search_payload


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def _coordinates(value: str) -> tuple[float, float]:
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError:
        msg = f"expected LAT,LON, got '{value}'"
        raise argparse.ArgumentTypeError(msg) from None
    return lat, lon


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Gig match client - search candidates and jobs on the marketplace backend",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- candidates ---
    cand = subparsers.add_parser("candidates", help="Search candidates (employers)")
    _add_common(cand)
    cand.add_argument("--skills", default="", help="Comma-separated skill names, e.g. 'React, Node'")
    cand.add_argument("--skill-id", type=int, action="append", default=[], help="Skill id (repeatable)")
    cand.add_argument("--availability", choices=[a.value for a in Availability])
    cand.add_argument("--min-proficiency", choices=[p.value for p in Proficiency])
    cand.add_argument("--sort", choices=[s.value for s in SortKey], default=None)
    cand.add_argument("--near", type=_coordinates, help="Search centre as LAT,LON")
    cand.add_argument("--radius", type=float, default=50.0, help="Radius in km (default: 50)")
    cand.add_argument("--pages", type=int, default=1, help="Pages to fetch (default: 1)")
    cand.add_argument("--dry-run", action="store_true", help="Print the request payload and exit")

    # --- jobs ---
    jobs = subparsers.add_parser("jobs", help="Search jobs (seekers)")
    _add_common(jobs)
    jobs.add_argument("--query", default="", help="Free-text query")
    jobs.add_argument("--job-type", choices=[t.value for t in JobType])
    jobs.add_argument("--near", type=_coordinates, help="Search centre as LAT,LON")
    jobs.add_argument("--near-me", action="store_true", help="Search around the configured default location")
    jobs.add_argument("--radius", type=float, default=50.0, help="Radius in km (default: 50)")
    jobs.add_argument("--pages", type=int, default=1, help="Pages to fetch (default: 1)")
    jobs.add_argument("--dry-run", action="store_true", help="Print the request payload and exit")

    # --- recommendations ---
    recs = subparsers.add_parser("recommendations", help="Show AI job recommendations")
    _add_common(recs)
    recs.add_argument("--count", type=int, default=20, help="Recommendations to show (default: 20)")
    recs.add_argument("--pool-size", type=int, default=20, help="Jobs scored before ranking (default: 20)")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_input(args: argparse.Namespace, settings: Settings) -> SearchInput:
    """Translate CLI flags into the same UI state a search screen would hold."""
    location = None
    if getattr(args, "near", None):
        lat, lon = args.near
        location = LocationFilter(latitude=lat, longitude=lon, radius_km=args.radius)

    fields: dict[str, object] = {
        "location": location,
        "near_me": getattr(args, "near_me", False),
        "radius_km": args.radius,
        "sort_by": SortKey(args.sort) if getattr(args, "sort", None) else settings.search.default_sort,
        "page_size": settings.search.page_size,
    }
    if args.command == "candidates":
        fields.update(
            query=args.skills,
            selected_skills=[SkillRef(id=i, name=f"#{i}") for i in args.skill_id],
            availability=Availability(args.availability) if args.availability else None,
            min_proficiency=Proficiency(args.min_proficiency) if args.min_proficiency else None,
        )
    else:
        fields.update(
            query=args.query,
            job_type=JobType(args.job_type) if args.job_type else None,
        )
    return SearchInput(**fields)  # type: ignore[arg-type]


def dry_run(args: argparse.Namespace, ui_state: SearchInput, settings: Settings) -> None:
    """Print the request that would be sent without touching the network."""
    if ui_state.near_me and ui_state.location is None:
        point = settings.location
        ui_state = ui_state.model_copy(update={"location": LocationFilter(
            latitude=point.latitude, longitude=point.longitude, radius_km=ui_state.radius_km,
        )})
    filters = build_search_payload(ui_state, require_query=args.command == "candidates")
    if filters is None:
        print("[DRY RUN] No query: enter skills or text to search")
        return
    print(f"[DRY RUN] {args.command} search against {settings.api.base_url}")
    print(f"  Payload: {filters.to_payload()}")
    print(f"  Pages: {args.pages}")


def describe_candidate(c: CandidateResult) -> str:
    tier = match_tier(c.match_score)
    rate = format_salary_range(c.hourly_rate_min, c.hourly_rate_max, c.currency, "hourly")
    where = c.location_label or "-"
    return f"  [{c.match_score:5.1f}% {tier.label}] {c.name} ({where}) {rate}"


def describe_job(j: JobListing, currency: str) -> str:
    salary = format_salary_range(j.salary_min, j.salary_max, j.salary_currency or currency, j.salary_period)
    distance = format_distance(j.distance_km)
    suffix = f" - {distance}" if distance else ""
    return f"  {j.title} @ {j.company_name or '-'}: {salary}{suffix}"


def describe_recommendation(r: JobRecommendation, currency: str) -> str:
    tier = match_tier(r.match_score)
    line = f"  [{r.match_score:5.1f}% {tier.label}] {describe_job(r.job, currency).strip()}"
    if r.matched_skills:
        line += f"\n      matched: {', '.join(r.matched_skills)}"
    if r.missing_skills:
        line += f"\n      missing: {', '.join(r.missing_skills)}"
    return line


async def run_search(args: argparse.Namespace, settings: Settings, ui_state: SearchInput) -> int:
    """Run a search session, loading up to ``args.pages`` pages."""
    async with ApiClient(settings.api, TokenStore.from_env(settings.api)) as api:
        if args.command == "candidates":
            controller = SessionController(
                CandidateService(api), default_location=settings.location.to_point(),
            )
        else:
            controller = SessionController(
                JobService(api, demo_mode=settings.api.demo_mode),
                default_location=settings.location.to_point(),
                require_query=False,
            )

        await controller.submit(ui_state)
        while controller.state.current_page < args.pages and controller.can_load_more:
            await controller.load_more()

    if controller.notice is ErrorKind.NO_QUERY:
        print("Nothing to search: enter skills or text.")
        return 0

    state = controller.state
    demo = " (demo data)" if state.is_demo else ""
    print(f"\n{state.total} results, showing {len(state.results)} "
          f"(page {state.current_page}/{state.total_pages}){demo}")
    for entry in state.results:
        if isinstance(entry, CandidateResult):
            print(describe_candidate(entry))
        else:
            print(describe_job(entry, settings.currency.default))

    if controller.status is SessionStatus.FAILED and controller.error is not None:
        print(f"Error ({controller.error.kind.value}): {controller.error.message}", file=sys.stderr)
        for field, message in controller.error.fields.items():
            print(f"  {field}: {message}", file=sys.stderr)
        return 1
    return 0


async def run_recommendations(args: argparse.Namespace, settings: Settings) -> int:
    async with ApiClient(settings.api, TokenStore.from_env(settings.api)) as api:
        recommendations = await JobService(api).get_recommendations(args.count, args.pool_size)

    print(f"\n{len(recommendations)} jobs match your profile")
    for rec in recommendations:
        print(describe_recommendation(rec, settings.currency.default))
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "recommendations":
            code = asyncio.run(run_recommendations(args, settings))
        else:
            ui_state = build_input(args, settings)
            if args.dry_run:
                dry_run(args, ui_state, settings)
                code = 0
            else:
                code = asyncio.run(run_search(args, settings, ui_state))
    except (ApiError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
