from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import MAX_FILE_SIZE_BYTES
from .ingest import ingest_file
from .records import parse_number
from .scale import grade_point_for, letter_for
from .stats import average_percentage, overall_gpa, project_what_if, term_gpas
from .storage import save_snapshot


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="western-gpa",
        description="Parse a transcript (.pdf, .txt, .csv, .xlsx) and report its GPA.",
    )
    parser.add_argument(
        "transcript",
        type=Path,
        help="Path to the transcript file.",
    )
    parser.add_argument(
        "--media-type",
        help="Media type of the transcript, overriding the file extension.",
    )
    parser.add_argument(
        "--save",
        type=Path,
        help="Write the parsed courses and GPAs to this JSON snapshot.",
    )
    parser.add_argument(
        "--target-gpa",
        type=float,
        help="Cumulative GPA to aim for in the what-if projection.",
    )
    parser.add_argument(
        "--additional-credits",
        type=float,
        default=2.0,
        help="Credits still to be taken for the what-if projection.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log skipped rows and detected terms.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    transcript_path = args.transcript.resolve()
    if not transcript_path.exists():
        print(f"Transcript not found: {transcript_path}")
        return 1
    if transcript_path.stat().st_size > MAX_FILE_SIZE_BYTES:
        print(f"File is too large (max {MAX_FILE_SIZE_BYTES // (1024 * 1024)}MB).")
        return 1

    result = ingest_file(
        transcript_path.read_bytes(), transcript_path.name, media_type=args.media_type
    )
    print(result.message)
    if not result.ok:
        return 1

    for record in result.records:
        percentage = parse_number(record.percentage)
        print(
            f"  {record.term:<12} {record.name:<24} {record.percentage:>5}% "
            f"x{record.credits:<4} -> {grade_point_for(percentage):.1f} ({letter_for(percentage)})"
        )

    gpa = overall_gpa(result.records)
    if gpa is not None:
        print(f"Cumulative GPA: {gpa:.2f}")
        print(f"Average grade: {average_percentage(result.records):.1f}%")
        for term, term_gpa in term_gpas(result.records).items():
            print(f"  {term}: {term_gpa:.2f}")

    if args.target_gpa is not None:
        try:
            projection = project_what_if(
                result.records, args.target_gpa, args.additional_credits
            )
        except ValueError as exc:
            print(exc)
            return 1
        print(
            f"To reach {projection.target_gpa:.2f} over {projection.additional_credits:g} "
            f"more credits you need {projection.required_gpa:.2f}"
            + ("" if projection.achievable else " (not achievable)")
        )
        if projection.required_percentage is not None:
            print(f"  That is at least {projection.required_percentage}% per course.")

    if args.save:
        save_snapshot(args.save, result.records)
        print(f"Wrote snapshot to {args.save}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
