"""
Export and Import functionality for the food catalog and order plans.
"""
import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from foodorder.domain.Errors import ValidationError
from foodorder.logic.catalog.manager import FoodCatalogManager
from foodorder.logic.reporting.plans import OrderPlanReporter

logger = logging.getLogger(__name__)


def _default_path(prefix: str, suffix: str) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(f"{prefix}_export_{timestamp}{suffix}")


class DataExporter:
    """Export catalog and order plan data as JSON or CSV."""

    def __init__(self, catalog: FoodCatalogManager, reporter: OrderPlanReporter):
        self.catalog = catalog
        self.reporter = reporter

    def export_catalog(self, output_path: Optional[Path] = None) -> Path:
        """Export all food items to a JSON file."""
        output_path = Path(output_path or _default_path("catalog", ".json"))
        items = [item.to_row() for item in self.catalog.list_all()]
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(items, f, indent=2, ensure_ascii=False)
        logger.info(f"Exported {len(items)} food items to {output_path}")
        return output_path

    def export_catalog_csv(self, output_path: Optional[Path] = None) -> Path:
        """Export food items to CSV for spreadsheet tools."""
        output_path = Path(output_path or _default_path("catalog", ".csv"))
        items = self.catalog.list_all()
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=['id', 'name', 'cost'])
            writer.writeheader()
            for item in items:
                writer.writerow(item.to_row())
        logger.info(f"Exported {len(items)} food items to CSV: {output_path}")
        return output_path

    def export_plans(self, output_path: Optional[Path] = None) -> Path:
        """Export every order plan, with entries and totals, to a JSON file."""
        output_path = Path(output_path or _default_path("plans", ".json"))
        plans = [plan.to_dict() for plan in self.reporter.all_plans()]
        payload = {
            'export_date': datetime.now().isoformat(),
            'plans': plans,
        }
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.info(f"Exported {len(plans)} order plans to {output_path}")
        return output_path


class DataImporter:
    """Import catalog data from JSON."""

    def __init__(self, catalog: FoodCatalogManager):
        self.catalog = catalog

    def import_catalog(self, input_path: Path, merge: bool = True) -> int:
        """
        Import food items from a JSON list of {name, cost} objects.

        Args:
            input_path: Path to the JSON file
            merge: If True, skip names already in the catalog (case-insensitive);
                   if False, every row is added
        Returns:
            int: number of items added
        """
        with open(input_path, 'r', encoding='utf-8') as f:
            rows = json.load(f)
        if not isinstance(rows, list):
            raise ValidationError('file', 'Expected a JSON list of food items')

        existing = {item.name.lower() for item in self.catalog.list_all()} if merge else set()
        added = 0
        # one transaction: a bad row leaves the catalog untouched
        with self.catalog.gateway.transaction():
            for row in rows:
                if not isinstance(row, dict):
                    raise ValidationError('file', f'Not a food item object: {row!r}')
                name = str(row.get('name') or '').strip()
                if merge and name.lower() in existing:
                    continue
                item = self.catalog.add(name, row.get('cost'))
                existing.add(item.name.lower())
                added += 1
        logger.info(f"Imported {added} food items from {input_path}")
        return added
