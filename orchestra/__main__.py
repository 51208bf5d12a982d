#!/usr/bin/env python3
"""CLI entry point for the orchestration engine.

Usage:
    python -m orchestra "Write an essay on servant leadership"
    python -m orchestra --type sermon "A sermon on hope for youth group"
    python -m orchestra --agent research-agent "Summarize recent work on X"
    python -m orchestra --dry-run "Create a presentation about grace"
    python -m orchestra --check "What is grace?"
    python -m orchestra --server  # Start the API server
"""

import argparse
import asyncio
import json
import sys

from orchestra.core.logging import configure_logging
from orchestra.core.schemas import DeliverableType, OrchestrationRequest, Preferences, QualityLevel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orchestra",
        description="Multi-agent orchestration - describe the deliverable, agents build it",
    )
    parser.add_argument("task", nargs="?", help="Free-text description of the deliverable")
    parser.add_argument(
        "--type", "-t",
        choices=[t.value for t in DeliverableType],
        help="Deliverable type hint",
    )
    parser.add_argument("--agent", "-a", help="Invoke a single agent directly by id")
    parser.add_argument(
        "--quality", "-q",
        choices=[q.value for q in QualityLevel],
        help="Quality preference",
    )
    parser.add_argument("--audience", help="Target audience")
    parser.add_argument("--user", default="cli", help="User id recorded on the session")
    parser.add_argument("--no-grounding", action="store_true", help="Disable web-search grounding")
    parser.add_argument("--dry-run", action="store_true", help="Analyze and plan without executing")
    parser.add_argument("--check", action="store_true", help="Only report whether the task would be orchestrated")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("--server", "-s", action="store_true", help="Start the API server instead")
    parser.add_argument("--port", "-p", type=int, default=8000, help="Port for API server (default: 8000)")
    return parser


def build_request(args: argparse.Namespace) -> OrchestrationRequest:
    context = {"force_agent": args.agent} if args.agent else {}
    return OrchestrationRequest(
        user_id=args.user,
        task=args.task,
        deliverable_type=DeliverableType(args.type) if args.type else None,
        context=context,
        preferences=Preferences(
            quality_level=QualityLevel(args.quality) if args.quality else None,
            target_audience=args.audience,
            disable_grounding=args.no_grounding,
        ),
    )


def cmd_check(args: argparse.Namespace) -> int:
    from orchestra.routing import detect_deliverable_type, should_orchestrate

    decision = should_orchestrate(args.task, args.agent)
    deliverable_type = detect_deliverable_type(args.task)
    if args.json:
        print(json.dumps({"orchestrate": decision, "deliverable_type": deliverable_type.value}))
    else:
        print(f"Orchestrate: {'yes' if decision else 'no'}")
        print(f"Deliverable type: {deliverable_type.value}")
    return 0


async def run_orchestration(args: argparse.Namespace) -> int:
    """Run (or preview) one orchestration from the command line."""
    from orchestra.agents.orchestrator import create_orchestrator
    from orchestra.core.errors import OrchestrationError
    from orchestra.core.sessions import InMemorySessionStore

    orchestrator = create_orchestrator(session_store=InMemorySessionStore())
    request = build_request(args)

    if args.dry_run:
        analysis, plan = await orchestrator.preview(request)
        if args.json:
            print(json.dumps({"analysis": analysis.to_dict(), "plan": plan.to_dict()}, indent=2))
            return 0
        print("DRY RUN - Planning only, no execution\n")
        print(f"Deliverable: {analysis.deliverable_type.value} ({analysis.estimated_complexity.value})")
        for phase in plan.phases:
            mode = "parallel" if phase.parallel else "sequential"
            print(f"  {phase.phase_id} {phase.name} [{mode}]")
            for task in phase.tasks:
                print(f"    - {task.agent_id} on {task.model}")
        print(f"\nAgents: {plan.total_agents}")
        print(f"Estimated duration: {plan.estimated_duration_ms / 1000:.0f}s")
        print(f"Estimated cost: ${plan.estimated_cost:.4f}")
        return 0

    try:
        result = await orchestrator.orchestrate(request)
    except OrchestrationError as e:
        print(f"\nError: {e}", file=sys.stderr)
        print("\nMake sure ANTHROPIC_API_KEY (and OPENAI_API_KEY for images) are set.", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return 0

    deliverable = result.deliverable
    print(f"\n{'=' * 60}")
    print(f"{result.deliverable_type.value.title()} complete")
    print(f"{'=' * 60}\n")
    if deliverable.get("title"):
        print(f"# {deliverable['title']}\n")
    if "content" in deliverable:
        print(deliverable["content"])
    for item in deliverable.get("results", []):
        print(f"### {item['agent_name']}\n\n{item['output']}\n")

    failed = [e for e in result.agent_trace if not e.success]
    print(f"\n{'=' * 60}")
    print(f"Agents: {len(result.agent_trace)} ({len(failed)} failed)")
    print(f"Cost: ${result.cost.total:.4f}  Duration: {result.duration_ms / 1000:.1f}s")
    for execution in failed:
        print(f"  ! {execution.agent_id}: {execution.error}")
    return 0


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.server:
        import uvicorn
        print(f"Starting orchestra API on http://localhost:{args.port}")
        uvicorn.run("orchestra.api.main:app", host="0.0.0.0", port=args.port)
        return

    if not args.task:
        parser.print_help()
        sys.exit(1)

    configure_logging()

    if args.check:
        sys.exit(cmd_check(args))
    sys.exit(asyncio.run(run_orchestration(args)))


if __name__ == "__main__":
    main()
