"""poi-extract CLI: pull POIs out of an itinerary JSON file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from poi_extractor.domain.exceptions import ConfigValidationError
from poi_extractor.services.extractor_service import POIExtractorService


def _load_payload(path: Path) -> tuple[Any, dict[str, Any]]:
    """Accept a bare activity list or {"activities": [...], "trip_context": {...}}."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        return payload, {}
    if isinstance(payload, dict):
        context = payload.get("trip_context") or payload.get("tripContext") or {}
        return payload.get("activities") or [], dict(context) if isinstance(context, dict) else {}
    raise ValueError("itinerary file must hold a JSON list or object")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract points of interest from itinerary activities")
    parser.add_argument("path", nargs="?", default="", help="JSON file with activities")
    parser.add_argument("--destination", default="")
    parser.add_argument("--city", default="")
    parser.add_argument("--country", default="")
    parser.add_argument("--threshold", type=float, default=None, help="Override the confidence threshold")
    parser.add_argument("--exclude", action="append", default=[], help="Extra word that disqualifies a name")
    parser.add_argument("--stats", action="store_true", help="Print service stats instead of extracting")
    parser.add_argument("--output", default="")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    service = POIExtractorService()

    partial: dict[str, Any] = {}
    if args.threshold is not None:
        partial["confidence_threshold"] = args.threshold
    if args.exclude:
        partial["exclude_words"] = list(args.exclude)
    if partial:
        try:
            service.update_config(partial)
        except ConfigValidationError as exc:
            print(f"invalid option: {exc}", file=sys.stderr)
            return 2

    if args.stats:
        result: Any = service.get_service_stats().model_dump(by_alias=True)
    else:
        if not str(args.path).strip():
            print("an itinerary JSON file is required unless --stats is given", file=sys.stderr)
            return 2
        try:
            activities, context = _load_payload(Path(args.path))
        except (OSError, ValueError) as exc:
            print(f"cannot read itinerary: {exc}", file=sys.stderr)
            return 2
        for key in ("destination", "city", "country"):
            value = str(getattr(args, key) or "").strip()
            if value:
                context[key] = value
        pois = service.extract_pois(activities, context)
        result = [poi.model_dump(mode="json") for poi in pois]

    text = json.dumps(result, ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
