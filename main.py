"""Command line entry point for the FyningTime import."""

import argparse
import logging
import sys

from config import DB_PATH, LOG_LEVEL, PREVIEW_LIMIT, SCRIPT_FILENAME
from errors import MigrationError
from migrate import MigrationSession, migrate
from reporting import export_preview_to_csv, export_preview_to_xlsx, generate_pdf_report

logger = logging.getLogger(__name__)


def print_preview(preview, limit=PREVIEW_LIMIT):
    print(f"Workdays: {len(preview.workdays)}")
    for w in preview.workdays[:limit]:
        print(f"  {w.date}  target {w.target_hours:g}h  break {w.break_minutes}m")
    print(f"Work times: {len(preview.worktimes)}")
    for i in preview.worktimes[:limit]:
        print(f"  {i.workday_date}  {i.start_time:%H:%M}-{i.end_time:%H:%M}  break {i.break_minutes}m")
    print(f"Vacations: {len(preview.vacations)}")
    for v in preview.vacations[:limit]:
        print(f"  {v.start_date} -> {v.end_date or '?'}  {v.type.value}")
    if any(len(seq) > limit for seq in (preview.workdays, preview.worktimes, preview.vacations)):
        print(f"... and more (showing only first {limit} items of each type)")
    if preview.failed:
        print(f"Skipped rows: {len(preview.failed)}")
        for f in preview.failed:
            print(f"  {f.table} #{f.legacy_id}: {f.reason}")


def cmd_preview(args):
    with MigrationSession() as session:
        session.select_file(args.legacy_db)
        preview = session.analyze()
    print_preview(preview)
    if args.csv:
        export_preview_to_csv(args.csv, preview)
        print(f"CSV exported to {args.csv}")
    if args.xlsx:
        export_preview_to_xlsx(args.xlsx, preview)
        print(f"XLSX report saved to {args.xlsx}")
    if args.pdf:
        generate_pdf_report(args.pdf, preview)
        print(f"PDF report saved to {args.pdf}")


def cmd_generate(args):
    preview, path = migrate(args.legacy_db, args.output, apply=args.apply, db_path=args.db)
    print(f"Migration SQL generated and saved to {path}.")
    if args.apply:
        print(f"Migration complete: {len(preview.workdays)} days, {len(preview.worktimes)} work times "
              f"and {len(preview.vacations)} vacations applied to {args.db}.")
    else:
        print("You can execute this SQL file manually.")


def build_parser():
    parser = argparse.ArgumentParser(prog="ktime-migrate", description="Migrate a FyningTime database to KTime")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("preview", help="Show what would be migrated")
    p.add_argument("legacy_db", help="Path to the FyningTime SQLite file")
    p.add_argument("--csv", help="Export the preview as CSV")
    p.add_argument("--xlsx", help="Export the preview as an Excel workbook")
    p.add_argument("--pdf", help="Write a PDF chart of migrated hours")
    p.set_defaults(func=cmd_preview)

    g = sub.add_parser("generate", help="Write the migration SQL script")
    g.add_argument("legacy_db", help="Path to the FyningTime SQLite file")
    g.add_argument("--output", default=SCRIPT_FILENAME, help="Script file to write")
    g.add_argument("--apply", action="store_true", help="Also run the script against the KTime database")
    g.add_argument("--db", default=DB_PATH, help="KTime database used with --apply")
    g.set_defaults(func=cmd_generate)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except MigrationError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
