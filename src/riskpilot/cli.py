"""
RiskPilot CLI

Usage:
    riskpilot analyze request.json [--kb DIR] [--pretty]
    riskpilot validate [--kb DIR]
    riskpilot serve [--host HOST] [--port PORT] [--kb DIR]

Exit Codes:
    0   OK
    1   Knowledge base failed to load or validate, or the input is unreadable
    2   Analysis failed
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from riskpilot import __version__
from riskpilot.engine import RiskAnalysisEngine
from riskpilot.exceptions import AnalysisError, RiskPilotError
from riskpilot.packs import KnowledgeBase, KnowledgeBaseLoader, DEFAULT_KNOWLEDGE_BASE_DIR


def _load(args: argparse.Namespace) -> KnowledgeBase:
    loader = KnowledgeBaseLoader(strict_weights=not args.lenient_weights)
    return loader.load_directory(args.kb or DEFAULT_KNOWLEDGE_BASE_DIR)


def _error(text: str) -> None:
    print(f"[ERROR] {text}", file=sys.stderr)


def cmd_analyze(args: argparse.Namespace) -> int:
    """Analyze a request file ("-" reads stdin) and print the result as JSON."""
    try:
        if args.request == "-":
            payload = json.load(sys.stdin)
        else:
            payload = json.loads(Path(args.request).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _error(f"Cannot read request {args.request}: {e}")
        return 1

    try:
        kb = _load(args)
    except RiskPilotError as e:
        _error(str(e))
        return 1

    engine = RiskAnalysisEngine.from_knowledge_base(kb)
    try:
        result = engine.analyze(payload)
    except AnalysisError as e:
        _error(f"{e.message}: {e.details.get('error', '')}")
        return 2

    print(json.dumps(result.to_dict(), indent=2 if args.pretty else None, ensure_ascii=False))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Load and validate a knowledge base directory."""
    try:
        kb = _load(args)
    except RiskPilotError as e:
        print("VALIDATION FAILED")
        print("-" * 40)
        print(f"  - {e}")
        for key, value in e.details.items():
            print(f"    {key}: {value}")
        return 1

    print("VALIDATION PASSED")
    print("-" * 40)
    print(f"  Source:               {kb.source}")
    print(f"  Jurisdictions:        {len(kb.catalog.regions)}")
    print(f"  Regulations:          {kb.catalog.regulation_count}")
    print(f"  Compliance programs:  {len(kb.framework.compliance_programs)}")
    print(f"  Compliance rules:     {len(kb.rulebook.compliance_rules)}")
    print(f"  Recommendation rules: {len(kb.rulebook.recommendation_rules)}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    # Fail fast before uvicorn starts
    try:
        _load(args)
    except RiskPilotError as e:
        _error(str(e))
        return 1

    if args.kb:
        os.environ["RP_KNOWLEDGE_BASE_DIR"] = str(args.kb)
    if args.lenient_weights:
        os.environ["RP_STRICT_WEIGHTS"] = "false"

    import uvicorn
    uvicorn.run("riskpilot.api.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="RiskPilot AI Regulatory Risk Analysis",
        prog="riskpilot",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--kb",
        default=os.getenv("RP_KNOWLEDGE_BASE_DIR") or None,
        help="Knowledge base directory (default: bundled)",
    )
    common.add_argument(
        "--lenient-weights",
        action="store_true",
        help="Accept frameworks whose weights do not sum to 100",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", parents=[common], help="Analyze a request JSON file"
    )
    analyze_parser.add_argument("request", help="Request JSON file, or - for stdin")
    analyze_parser.add_argument("--pretty", action="store_true", help="Indent the output")
    analyze_parser.set_defaults(func=cmd_analyze)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Validate a knowledge base"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Serve command
    serve_parser = subparsers.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve_parser.add_argument("--host", default=os.getenv("RP_HOST", "0.0.0.0"))
    serve_parser.add_argument("--port", type=int, default=int(os.getenv("RP_PORT", "3001")))
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
