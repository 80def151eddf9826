from pricing.interface import TaxBracket
from .base import BaseSimplesCalculator


class AnexoIICalculator(BaseSimplesCalculator):
    """
    Simples Nacional - Anexo II (Indústria).

    Mais comum para fabricação de letreiros e comunicação visual.
    Tabela da LC 123/2006 atualizada.
    """

    ANEXO = "II"
    DESCRIPTION = "Indústria"
    BRACKETS = (
        TaxBracket(bracket_number=1, revenue_ceiling=180000, nominal_rate=4.5, deduction=0),
        TaxBracket(bracket_number=2, revenue_ceiling=360000, nominal_rate=7.8, deduction=5940),
        TaxBracket(bracket_number=3, revenue_ceiling=720000, nominal_rate=10.0, deduction=13860),
        TaxBracket(bracket_number=4, revenue_ceiling=1800000, nominal_rate=11.2, deduction=22500),
        TaxBracket(bracket_number=5, revenue_ceiling=3600000, nominal_rate=14.7, deduction=85500),
        TaxBracket(bracket_number=6, revenue_ceiling=4800000, nominal_rate=30.0, deduction=720000),
    )
