"""
Pricing constants — plating formula inputs and product defaults.

Every pricing rule lives here. When a default changes, update ONE file.
"""

# Grams in one troy ounce; the gold feed quotes per troy ounce
TROY_OUNCE_GRAMS: float = 31.1035

# Plating = weight (g) * thickness (mil) * gold price per gram * PLATING_FACTOR
DEFAULT_PLATING_FACTOR: float = 0.02

# Sale price = total cost * (1 + markup / 100); 300 means price = cost * 4
DEFAULT_MARKUP_PERCENT: float = 300.0

# Wire names of the user-editable fields
NUMERIC_FIELDS: tuple = ("rawCost", "weight", "thickness", "markupPercent")
TEXT_FIELDS: tuple = ("sku", "name", "provider", "platingProvider")
PLATING_COST_FIELD: str = "platingCost"
EDITABLE_FIELDS: tuple = NUMERIC_FIELDS + TEXT_FIELDS + (PLATING_COST_FIELD,)

# Fields matched by the grid search box
SEARCH_FIELDS: tuple = ("sku", "name", "provider")
