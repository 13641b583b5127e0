"""
Pricing engine — plating, total cost and sale price derivation.

Formulas:
    plating = weight (g) * thickness (mil) * gold price per gram * plating factor
    total   = raw cost + plating
    sale    = total * (1 + markup / 100)

The pricing context is always passed in explicitly; nothing here reads
global state, so every function is deterministic for a given input.
"""
from typing import Iterable, List

from precifica.schemas.pricing import PricingContext
from precifica.schemas.products import Product
from precifica.utils.type_converters import to_float


def compute_plating_cost(weight: float, thickness: float, context: PricingContext) -> float:
    return (
        to_float(weight)
        * to_float(thickness)
        * to_float(context.gold_price_per_gram)
        * to_float(context.plating_factor)
    )


def compute_sale_price(total_cost: float, markup_percent: float) -> float:
    total = to_float(total_cost)
    return total + total * (to_float(markup_percent) / 100)


def recompute(product: Product, context: PricingContext) -> Product:
    """
    Refresh the derived fields of a product in place and return it.

    A manually fixed plating cost is left untouched; total cost and sale
    price are always rebuilt from the inputs.
    """
    if not product.manual_plating:
        product.plating_cost = compute_plating_cost(product.weight, product.thickness, context)

    plating = to_float(product.plating_cost)
    product.plating_cost = plating
    product.total_cost = to_float(product.raw_cost) + plating
    product.sale_price = compute_sale_price(product.total_cost, product.markup_percent)
    return product


def recompute_all(products: Iterable[Product], context: PricingContext) -> List[Product]:
    return [recompute(product, context) for product in products]


def average_plating_cost(context: PricingContext) -> float:
    """Plating cost of a reference 1 g piece with a 1 mil layer."""
    return compute_plating_cost(1.0, 1.0, context)
