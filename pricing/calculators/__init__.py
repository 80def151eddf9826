from .base import BaseSimplesCalculator
from .anexo_ii import AnexoIICalculator
from .anexo_iii import AnexoIIICalculator

__all__ = [
    "BaseSimplesCalculator",
    "AnexoIICalculator",
    "AnexoIIICalculator",
]
