"""
Export Service

Renders item and movement listings as CSV downloads: UTF-8 with a leading
byte-order mark, CRLF line endings and RFC-4180 quoting.
"""

import io
import csv
from typing import Any, Dict, Iterable, List, Optional
import logging

logger = logging.getLogger("stockroom.business")

BOM = "\ufeff"

ITEM_COLUMNS = ["Name", "Category", "Unit", "Quantity", "Min", "Max", "Supplier", "Expiry"]
MOVEMENT_COLUMNS = ["Date", "Item", "Unit", "Type", "Quantity", "Reason"]


def format_number(value: Optional[float]) -> str:
    """Whole quantities render without a trailing .0"""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def render_csv(headers: List[str], rows: Iterable[List[Any]]) -> str:
    """Header row plus data rows as CSV text"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(headers)
    writer.writerows(rows)
    return BOM + buffer.getvalue()


class ExportService:
    """Service for exporting listings as CSV"""

    def export_items(self, items: List[Dict[str, Any]]) -> str:
        """
        Export item rows as produced by ItemService.list_items

        Args:
            items: Item dicts with the joined category

        Returns:
            CSV document text
        """
        rows = []
        for item in items:
            category = item.get("category") or {}
            expiry = item.get("expiry_date")
            rows.append([
                item["name"],
                category.get("name", ""),
                item["unit"],
                format_number(item["quantity"]),
                format_number(item["min_quantity"]),
                format_number(item.get("max_quantity")),
                item.get("supplier") or "",
                expiry.isoformat() if expiry else "",
            ])

        logger.info(f"Exported {len(rows)} items to CSV")
        return render_csv(ITEM_COLUMNS, rows)

    def export_movements(self, movements: List[Dict[str, Any]]) -> str:
        """
        Export ledger rows as produced by StockMovementsService.get_movements

        Args:
            movements: Movement dicts with the joined item summary

        Returns:
            CSV document text
        """
        rows = []
        for movement in movements:
            item = movement.get("item") or {}
            rows.append([
                movement["created_at"].isoformat(timespec="milliseconds") + "Z",
                item.get("name", ""),
                item.get("unit", ""),
                movement["type"],
                format_number(movement["quantity"]),
                movement.get("reason") or "",
            ])

        logger.info(f"Exported {len(rows)} movements to CSV")
        return render_csv(MOVEMENT_COLUMNS, rows)
