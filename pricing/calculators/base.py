import logging
from typing import Optional, Tuple

from pricing.interface import ITaxCalculator, TaxBracket, SimplesTaxResult, PriceBreakdown

logger = logging.getLogger(__name__)


class BaseSimplesCalculator(ITaxCalculator):
    """
    Classe base com o cálculo da alíquota efetiva do Simples Nacional.
    Os anexos só declaram a tabela de faixas.

    Alíquota efetiva = (RBT12 x Aliq - PD) / RBT12
    """

    # Configurações padrão (sobrescritas por anexo)
    ANEXO = ""
    DESCRIPTION = ""
    BRACKETS: Tuple[TaxBracket, ...] = ()

    def __init__(self, brackets: Optional[Tuple[TaxBracket, ...]] = None):
        super().__init__(anexo=self.ANEXO, brackets=tuple(brackets) if brackets else self.BRACKETS)

    def find_bracket(self, gross_revenue_12m: float) -> TaxBracket:
        # Teto inclusivo; acima do último teto fica na última faixa
        for bracket in self.brackets:
            if gross_revenue_12m <= bracket.revenue_ceiling:
                return bracket
        return self.brackets[-1]

    def calculate_effective_rate(self, gross_revenue_12m: float, bracket: TaxBracket) -> float:
        """Alíquota efetiva em %, nunca negativa. Com receita zero vale a nominal."""
        if gross_revenue_12m > 0:
            rate = ((gross_revenue_12m * (bracket.nominal_rate / 100)) - bracket.deduction) / gross_revenue_12m * 100
        else:
            rate = bracket.nominal_rate
        return max(rate, 0.0)

    def calculate(self, gross_revenue_12m: float) -> SimplesTaxResult:
        bracket = self.find_bracket(gross_revenue_12m)
        effective_rate = self.calculate_effective_rate(gross_revenue_12m, bracket)
        tax_amount = (gross_revenue_12m * effective_rate) / 100

        logger.debug(
            f"Simples Anexo {self.anexo}: RBT12={gross_revenue_12m:.2f}, faixa={bracket.bracket_number}, "
            f"aliquota efetiva={effective_rate:.4f}%"
        )

        return SimplesTaxResult(
            anexo=self.anexo,
            bracket_number=bracket.bracket_number,
            nominal_rate=bracket.nominal_rate,
            deduction=bracket.deduction,
            effective_rate=effective_rate,
            tax_amount=tax_amount,
        )

    def get_breakdown(self, gross_revenue_12m: float) -> PriceBreakdown:
        result = self.calculate(gross_revenue_12m)
        gross_tax = gross_revenue_12m * (result.nominal_rate / 100)

        steps = [
            {"label": "Receita bruta 12 meses (RBT12)", "value": gross_revenue_12m},
            {"label": f"Faixa {result.bracket_number}", "value": result.bracket_number},
            {"label": f"RBT12 x alíquota nominal ({result.nominal_rate:.2f}%)", "value": round(gross_tax, 2)},
            {"label": "Parcela a deduzir", "value": result.deduction},
            {"label": "Alíquota efetiva (%)", "value": round(result.effective_rate, 4)},
            {"label": "Imposto estimado", "value": round(result.tax_amount, 2)},
        ]

        notes = [
            f"Anexo {self.anexo} ({self.DESCRIPTION})",
            "Alíquota efetiva = (RBT12 x Aliq - PD) / RBT12",
        ]
        if gross_revenue_12m > self.brackets[-1].revenue_ceiling:
            notes.append("Receita acima do teto da última faixa: aplicada a última faixa")

        return PriceBreakdown(steps=steps, notes=notes)
