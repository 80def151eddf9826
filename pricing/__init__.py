from .interface import DiscountTier, TaxBracket, QuantityQuote, SimplesTaxResult, ITaxCalculator
from .discount import QuantityDiscountCalculator, DEFAULT_DISCOUNT_TIERS, clamp_quantity
from .factory import TaxCalculatorFactory, calculate_simples_tax

__all__ = [
    "DiscountTier",
    "TaxBracket",
    "QuantityQuote",
    "SimplesTaxResult",
    "ITaxCalculator",
    "QuantityDiscountCalculator",
    "DEFAULT_DISCOUNT_TIERS",
    "clamp_quantity",
    "TaxCalculatorFactory",
    "calculate_simples_tax",
]
