from pricing.interface import TaxBracket
from .base import BaseSimplesCalculator


class AnexoIIICalculator(BaseSimplesCalculator):
    """
    Simples Nacional - Anexo III (Serviços).

    Anexo padrão quando a empresa não informa outro.
    """

    ANEXO = "III"
    DESCRIPTION = "Serviços"
    BRACKETS = (
        TaxBracket(bracket_number=1, revenue_ceiling=180000, nominal_rate=6.0, deduction=0),
        TaxBracket(bracket_number=2, revenue_ceiling=360000, nominal_rate=11.2, deduction=9360),
        TaxBracket(bracket_number=3, revenue_ceiling=720000, nominal_rate=13.5, deduction=17640),
        TaxBracket(bracket_number=4, revenue_ceiling=1800000, nominal_rate=16.0, deduction=35640),
        TaxBracket(bracket_number=5, revenue_ceiling=3600000, nominal_rate=21.0, deduction=125640),
        TaxBracket(bracket_number=6, revenue_ceiling=4800000, nominal_rate=33.0, deduction=648000),
    )
