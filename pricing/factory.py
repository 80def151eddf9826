from typing import Dict, Optional
from pricing.interface import ITaxCalculator, SimplesTaxResult
from pricing.calculators import (
    AnexoIICalculator,
    AnexoIIICalculator,
)

DEFAULT_ANEXO = "III"


class TaxCalculatorFactory:
    """
    Factory para instanciar calculadoras do Simples Nacional por anexo.

    Usa mapeamento centralizado anexo -> classe para garantir
    consistência e facilitar manutenção.
    """

    # Mapeamento canônico: anexo -> Calculator class
    _CALCULATORS: Dict[str, type] = {
        "II": AnexoIICalculator,
        "III": AnexoIIICalculator,
    }

    @staticmethod
    def normalize(anexo: Optional[str]) -> str:
        """
        Normaliza o anexo informado ('iii', ' Anexo II ' -> 'III', 'II').
        Anexo vazio ou ausente vira o padrão (III).
        """
        if anexo is None:
            return DEFAULT_ANEXO
        value = anexo.strip().upper()
        if value.startswith("ANEXO"):
            value = value[len("ANEXO"):].strip()
        return value or DEFAULT_ANEXO

    @classmethod
    def get(cls, anexo: Optional[str] = None) -> ITaxCalculator:
        """
        Retorna a calculadora apropriada para o anexo especificado.
        
        Args:
            anexo: 'II' ou 'III' (case-insensitive). None usa o padrão 'III'
        
        Returns:
            Instância de ITaxCalculator
        
        Raises:
            ValueError: Se o anexo não for suportado
        """
        calculator_class = cls._CALCULATORS.get(cls.normalize(anexo))
        
        if not calculator_class:
            supported = ", ".join(cls._CALCULATORS.keys())
            raise ValueError(
                f"Anexo '{anexo}' não suportado. "
                f"Anexos disponíveis: {supported}"
            )
        
        return calculator_class()

    @classmethod
    def get_supported_anexos(cls) -> list:
        """Retorna lista de anexos suportados"""
        return list(cls._CALCULATORS.keys())

    @classmethod
    def is_supported(cls, anexo: Optional[str]) -> bool:
        """Verifica se um anexo é suportado"""
        return cls.normalize(anexo) in cls._CALCULATORS


def calculate_simples_tax(gross_revenue_12m: float, anexo: Optional[str] = DEFAULT_ANEXO) -> SimplesTaxResult:
    """Atalho: calcula o Simples Nacional para a RBT12 no anexo informado"""
    return TaxCalculatorFactory.get(anexo).calculate(gross_revenue_12m)
