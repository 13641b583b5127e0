"""
CSV export — spreadsheet-friendly dump of the product grid.

Semicolon-delimited with a UTF-8 BOM so Excel in pt-BR locales opens it
with the right columns and accents.
"""
import csv
import io
from typing import Iterable

from precifica.schemas.products import Product

CSV_BOM = "\ufeff"

CSV_COLUMNS = (
    "SKU",
    "Name",
    "Provider",
    "Plating Provider",
    "Raw Cost",
    "Weight (g)",
    "Thickness (mil)",
    "Plating Cost",
    "Total Cost",
    "Markup (%)",
    "Sale Price",
)


def _money(value: float) -> str:
    return f"{value:.2f}"


def export_products_csv(products: Iterable[Product]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\r\n")
    writer.writerow(CSV_COLUMNS)
    for p in products:
        writer.writerow([
            p.sku,
            p.name,
            p.provider,
            p.plating_provider,
            _money(p.raw_cost),
            f"{p.weight:g}",
            f"{p.thickness:g}",
            _money(p.plating_cost),
            _money(p.total_cost),
            f"{p.markup_percent:g}",
            _money(p.sale_price),
        ])
    return CSV_BOM + buffer.getvalue()
