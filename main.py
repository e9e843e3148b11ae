#!/usr/bin/env python3
"""
Yard Paperwork - CLI Entry Point

Turns recycling-yard paperwork into structured records:
Comex price sheets into spreadsheet cell updates, and delivery CSV exports
into contract document plans.

Usage:
    # Price sheet (PDF or extracted text)
    python main.py comex ./inbox/comex.pdf

    # Delivery export
    python main.py delivery ./inbox/deliveries.csv --email office@example.com

    # Price sheet email saved from the inbox (subject must mention "comex")
    python main.py comex ./inbox/comex_prices.eml

    # Machine-readable output
    python main.py comex ./inbox/comex.txt --json

    # Show workflow visualization
    python main.py --show-graph
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from version import __version__, APP_NAME
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{APP_NAME} - Extract prices and delivery contracts from yard paperwork",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s comex ./inbox/comex.pdf --tab Calculator
  %(prog)s delivery ./inbox/deliveries.csv --email office@example.com
  %(prog)s --show-graph
        """
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML config (default: ./config/yard_config.yaml if present)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of a summary"
    )
    parser.add_argument(
        "--show-graph",
        action="store_true",
        help="Show workflow graph visualization and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")

    comex = subparsers.add_parser("comex", help="Extract material prices from a Comex price sheet")
    comex.add_argument("document", help="Price sheet PDF, text file, or saved .eml with the PDF attached")
    comex.add_argument("--tab", "-t", default=None, help="Spreadsheet tab (default: from config)")
    comex.add_argument("--catalog", default=None, help="Material catalog CSV (Material,Cell columns)")

    delivery = subparsers.add_parser("delivery", help="Plan contract documents from a delivery CSV")
    delivery.add_argument("csv", help="Delivery CSV export")
    delivery.add_argument("--email", "-e", default=None, help="Recipient email (default: from config)")
    delivery.add_argument("--date", "-d", default=None, help="ISO-8601 run date (default: now)")

    return parser


def print_comex_summary(result: dict, sheet_id: str = ""):
    entries = result.get("price_entries") or []
    updates = result.get("cell_updates") or []

    print("\n" + "=" * 60)
    print("  COMEX PRICE SHEET")
    print("=" * 60)
    for entry in entries:
        print(f"  {entry.cell_reference:<5} {entry.material:<42} ${entry.price}")
    print("-" * 60)
    print(f"  Materials found: {len(entries)}")
    print(f"  Cell updates:    {len(updates)}")
    print(f"  Skipped lines:   {len(result.get('skipped_lines') or [])}")
    print(f"  Spreadsheet:     {sheet_id or '(not configured)'}")
    print(f"  Recipient:       {result.get('recipient_email') or '(none)'}")
    print("=" * 60 + "\n")


def print_delivery_summary(result: dict):
    batch = result["batch"]
    document_set = result["document_set"]

    print("\n" + "=" * 60)
    print("  DELIVERY CONTRACTS")
    print("=" * 60)
    for row in batch.rows:
        stamp = "stamp" if row.coordinate else "-"
        print(f"  {row.sequence_id:<8} {row.fob:<4} {row.contract:<12} {row.file_name:<30} {stamp}")
    print("-" * 60)
    print(f"  Rows:      {len(batch.rows)} ({len(batch.fob_sequence_ids)} FOB, "
          f"{len(batch.non_fob_sequence_ids)} non-FOB)")
    print(f"  Skipped:   {len(batch.skipped)}")
    for bundle in document_set.bundles:
        print(f"  Bundle:    {bundle.name} ({len(bundle.documents)} documents)")
    print(f"  Recipient: {batch.recipient_email or '(none)'}")
    print("=" * 60 + "\n")


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Show graph visualization
    if args.show_graph:
        from workflow import get_workflow_visualization
        print(get_workflow_visualization())
        return 0

    if not args.command:
        parser.error("a command is required (comex or delivery), unless using --show-graph")

    from settings import load_config

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    try:
        if args.command == "comex":
            from workflow import run_comex_workflow

            document = Path(args.document).resolve()
            if not document.exists():
                logger.error(f"Input path does not exist: {document}")
                return 1

            result = run_comex_workflow(
                document_path=str(document),
                sheet_tab=args.tab or config.sheets.tab,
                similarity_threshold=config.matching.similarity_threshold,
                catalog_path=args.catalog or config.matching.catalog_path,
                recipient_email=config.comex.recipient_email or None,
                subject_query=config.comex.subject_query,
            )
            if result.get("status") != "completed":
                return 1

            if args.json:
                from parsers.sheet_updates import build_batch_update_body
                print(json.dumps({
                    "spreadsheet_id": config.sheets.sheet_id,
                    "recipient_email": result.get("recipient_email") or "",
                    "entries": [e.to_dict() for e in result["price_entries"]],
                    "request": build_batch_update_body(result["cell_updates"]),
                }, indent=2))
            else:
                print_comex_summary(result, config.sheets.sheet_id)
            return 0

        if args.command == "delivery":
            from parsers.contract_documents import TemplateLayout
            from workflow import run_delivery_workflow

            csv_path = Path(args.csv).resolve()
            if not csv_path.exists():
                logger.error(f"Input path does not exist: {csv_path}")
                return 1

            layout = TemplateLayout(
                fob_template_path=config.delivery.fob_template,
                non_fob_template_path=config.delivery.non_fob_template,
                stamp_image_path=config.delivery.stamp_image,
                stamp_scale=config.delivery.stamp_scale,
                fob_bundle_name=config.delivery.fob_bundle_name,
                non_fob_bundle_name=config.delivery.non_fob_bundle_name,
            )
            result = run_delivery_workflow(
                csv_path=str(csv_path),
                current_date=args.date,
                recipient_email=args.email or config.delivery.recipient_email,
                layout=layout,
            )
            if result.get("status") != "completed":
                return 1

            if args.json:
                print(json.dumps(result["batch"].to_dict(), indent=2))
            else:
                print_delivery_summary(result)
            return 0

    except ImportError as e:
        logger.error(f"Missing dependency: {e}")
        logger.error("Run: pip install -e .")
        return 1
    except Exception as e:
        logger.exception(f"Workflow failed: {e}")
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
