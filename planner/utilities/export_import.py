"""
Export and Import functionality for the plan document (all plans, version 3).
"""
import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from planner.domain.Plan import Plan
from planner.domain.PlanBook import PlanBook
from planner.logic.reporting.allocation import compute_allocation_summary
from planner.utilities.validators import DocumentValidationError, validate_document

logger = logging.getLogger(__name__)


class DataExporter:
    """Export the plan book as JSON, or one plan's allocation as CSV."""

    def __init__(self, book: PlanBook):
        self.book = book

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.book.to_dict(), indent=indent, ensure_ascii=False)

    def export_document(self, output_path: Path = None) -> Path:
        """Write the whole document to a JSON file."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"week_planner_export_{timestamp}.json")
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info(f"Exported {len(self.book)} plans to {output_path}")
        return output_path

    def allocation_csv(self, plan: Optional[Plan] = None) -> str:
        """Allocation summary of one plan (default: active) as CSV text."""
        plan = plan or self.book.active_plan
        summary = compute_allocation_summary(plan)
        buf = io.StringIO()
        fieldnames = ['id', 'name', 'colour', 'minutes', 'duration']
        writer = csv.DictWriter(buf, fieldnames=fieldnames)
        writer.writeheader()
        for row in summary['activities']:
            writer.writerow({
                'id': row['id'],
                'name': row['name'],
                'colour': row['colour'],
                'minutes': row['minutes'],
                'duration': row['label'],
            })
        writer.writerow({'id': '', 'name': 'Free', 'colour': '',
                         'minutes': summary['free_minutes'], 'duration': summary['free_label']})
        return buf.getvalue()

    def export_to_csv(self, output_path: Path = None, plan: Optional[Plan] = None) -> Path:
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"allocation_export_{timestamp}.csv")
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            csvfile.write(self.allocation_csv(plan))
        logger.info(f"Exported allocation to CSV: {output_path}")
        return output_path


class DataImporter:
    """Parse and validate an exchanged document. Nothing is adopted on failure."""

    def parse_text(self, text: str) -> PlanBook:
        """
        Decode and validate a JSON document.

        Raises:
            DocumentValidationError: malformed JSON or a document violating the shape rules
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentValidationError(f"Invalid JSON: {e}") from e
        return self.parse_data(raw)

    def parse_data(self, raw) -> PlanBook:
        book = PlanBook.from_dict(validate_document(raw))
        logger.info(f"Validated document with {len(book)} plans")
        return book

    def import_file(self, input_path: Path) -> PlanBook:
        with open(input_path, 'r', encoding='utf-8') as f:
            return self.parse_text(f.read())


# CLI interface
if __name__ == "__main__":
    import argparse
    from planner.infra.Plan_Repository import PlanRepository

    parser = argparse.ArgumentParser(description='Export/Import Week Planner data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Export format')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()
    repo = PlanRepository()

    if args.action == 'export':
        exporter = DataExporter(repo.load())
        if args.format == 'csv':
            result = exporter.export_to_csv(Path(args.file) if args.file else None)
        else:
            result = exporter.export_document(Path(args.file) if args.file else None)
        print(f"✓ Exported to: {result}")

    elif args.action == 'import':
        if not args.file:
            print("Error: --file is required for import")
            raise SystemExit(1)
        try:
            book = DataImporter().import_file(Path(args.file))
        except DocumentValidationError as e:
            print(f"✗ Import failed: {e.reason}")
            raise SystemExit(1)
        repo.save(book)
        print(f"✓ Successfully imported {len(book)} plans from: {args.file}")
