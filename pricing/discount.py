"""
Desconto progressivo por quantidade.

A tabela de faixas é injetada no construtor; a padrão é a da loja.
"""
import logging
from typing import Any, Iterable, Optional, Tuple

from pricing.interface import DiscountTier, QuantityQuote

logger = logging.getLogger(__name__)


DEFAULT_DISCOUNT_TIERS: Tuple[DiscountTier, ...] = (
    DiscountTier(quantity_threshold=10, discount_percent=5),
    DiscountTier(quantity_threshold=20, discount_percent=10),
    DiscountTier(quantity_threshold=50, discount_percent=15),
    DiscountTier(quantity_threshold=100, discount_percent=20),
)

# Teto da quantidade por pedido; mantém preço x quantidade representável em float
MAX_QUANTITY = 1_000_000


def clamp_quantity(value: Any, min_quantity: int = 1, max_quantity: int = MAX_QUANTITY) -> int:
    """
    Sanitiza a quantidade digitada antes de chamar a calculadora.
    
    Valores não numéricos ou infinitos viram min_quantity; valores abaixo
    do mínimo são elevados ao mínimo e acima do máximo são reduzidos ao máximo.
    """
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return min_quantity
    return min(max_quantity, max(min_quantity, quantity))


class QuantityDiscountCalculator:
    """
    Calculadora de desconto por quantidade.

    Não valida entradas: quantidade e preço devem chegar sanitizados
    (ver clamp_quantity).
    """

    def __init__(self, tiers: Iterable[DiscountTier] = DEFAULT_DISCOUNT_TIERS):
        self.tiers: Tuple[DiscountTier, ...] = tuple(tiers)

    def get_discount_percent(self, quantity: int) -> float:
        """Retorna o % da maior faixa atingida (0 abaixo da primeira faixa)"""
        discount = 0.0
        for tier in self.tiers:
            if quantity >= tier.quantity_threshold:
                discount = tier.discount_percent
        return discount

    def get_next_tier(self, quantity: int) -> Optional[DiscountTier]:
        """Próxima faixa ainda não atingida, ou None se já está na última"""
        for tier in self.tiers:
            if tier.quantity_threshold > quantity:
                return tier
        return None

    def units_to_next_tier(self, quantity: int) -> Optional[int]:
        next_tier = self.get_next_tier(quantity)
        if next_tier is None:
            return None
        return next_tier.quantity_threshold - quantity

    def quote(self, unit_price: float, quantity: int) -> QuantityQuote:
        """
        Calcula preço unitário com desconto, total e economia.

        Args:
            unit_price: Preço unitário cheio
            quantity: Quantidade já sanitizada

        Returns:
            QuantityQuote com todos os valores derivados
        """
        discount_percent = self.get_discount_percent(quantity)
        discounted_unit_price = unit_price * (1 - discount_percent / 100)
        total_price = discounted_unit_price * quantity
        savings = (unit_price * quantity) - total_price

        logger.debug(
            f"Cotação por quantidade: qtd={quantity}, desconto={discount_percent}%, total={total_price:.2f}"
        )

        return QuantityQuote(
            quantity=quantity,
            unit_price=unit_price,
            discount_percent=discount_percent,
            discounted_unit_price=discounted_unit_price,
            total_price=total_price,
            savings=savings,
            next_tier=self.get_next_tier(quantity),
            units_to_next_tier=self.units_to_next_tier(quantity),
        )
