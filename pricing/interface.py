from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class DiscountTier(BaseModel):
    """Faixa de desconto progressivo por quantidade"""
    model_config = ConfigDict(frozen=True)

    quantity_threshold: int = Field(..., gt=0)  # quantidade mínima para ganhar o desconto
    discount_percent: float = Field(..., ge=0, le=100)  # % de desconto


class TaxBracket(BaseModel):
    """Faixa da tabela do Simples Nacional"""
    model_config = ConfigDict(frozen=True)

    bracket_number: int = Field(..., ge=1, le=6)
    revenue_ceiling: float  # teto da receita bruta dos últimos 12 meses (RBT12) em R$
    nominal_rate: float     # alíquota nominal em %
    deduction: float        # parcela a deduzir em R$


class QuantityQuote(BaseModel):
    """Cotação de um item com desconto por quantidade"""
    quantity: int
    unit_price: float
    discount_percent: float
    discounted_unit_price: float
    total_price: float
    savings: float
    next_tier: Optional[DiscountTier] = None
    units_to_next_tier: Optional[int] = None


class SimplesTaxResult(BaseModel):
    """Resultado do cálculo do Simples Nacional"""
    anexo: str
    bracket_number: int
    nominal_rate: float
    deduction: float
    effective_rate: float  # alíquota efetiva em %
    tax_amount: float      # imposto em R$


class PriceBreakdown(BaseModel):
    """Breakdown detalhado de um cálculo"""
    steps: List[Dict[str, Any]]
    notes: Optional[List[str]] = None


class ITaxCalculator(ABC):
    """
    Interface para calculadoras do Simples Nacional por anexo.

    Todos os métodos recebem a receita bruta dos últimos 12 meses (RBT12)
    em R$. Valores negativos devem ser rejeitados por quem chama.
    """

    def __init__(self, anexo: str, brackets: Tuple[TaxBracket, ...]):
        self.anexo = anexo
        self.brackets = brackets

    @abstractmethod
    def find_bracket(self, gross_revenue_12m: float) -> TaxBracket:
        """
        Encontra a faixa aplicável para a receita informada.
        
        Args:
            gross_revenue_12m: Receita bruta dos últimos 12 meses
        
        Returns:
            TaxBracket da faixa (a última faixa quando a receita passa de todos os tetos)
        """
        pass

    @abstractmethod
    def calculate(self, gross_revenue_12m: float) -> SimplesTaxResult:
        """
        Calcula alíquota efetiva e valor do imposto.
        
        Args:
            gross_revenue_12m: Receita bruta dos últimos 12 meses
        
        Returns:
            SimplesTaxResult com faixa, alíquota efetiva e imposto
        """
        pass

    @abstractmethod
    def get_breakdown(self, gross_revenue_12m: float) -> PriceBreakdown:
        """
        Retorna o passo a passo do cálculo.
        
        Args:
            gross_revenue_12m: Receita bruta dos últimos 12 meses
        
        Returns:
            PriceBreakdown com steps e notes
        """
        pass

    def get_brackets(self) -> List[TaxBracket]:
        """Retorna a tabela de faixas do anexo"""
        return list(self.brackets)
