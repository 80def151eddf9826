# -*- coding: utf-8 -*-
"""
Cupons de desconto do checkout.
Validação de vigência, limite de uso e valor mínimo do pedido.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class CouponError(ValueError):
    """Base exception para cupons recusados"""
    pass


class CouponNotFoundError(CouponError):
    """Cupom inexistente ou inativo"""
    pass


class CouponNotStartedError(CouponError):
    """Cupom ainda fora da vigência"""
    pass


class CouponExpiredError(CouponError):
    """Cupom vencido"""
    pass


class CouponExhaustedError(CouponError):
    """Limite de uso atingido"""
    pass


class CouponMinimumOrderError(CouponError):
    """Pedido abaixo do valor mínimo"""
    pass


class Coupon(BaseModel):
    code: str
    description: Optional[str] = None
    type: Literal["percentage", "fixed"] = "percentage"
    value: float = Field(..., ge=0)
    min_order_value: Optional[float] = None
    max_discount: Optional[float] = None
    usage_limit: Optional[int] = None
    usage_count: int = 0
    is_active: bool = True
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class CouponDiscount(BaseModel):
    code: str
    discount: float


def _as_utc(value: datetime) -> datetime:
    # Datas sem timezone são tratadas como UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def find_coupon(coupons: Iterable[Coupon], code: str) -> Coupon:
    """Busca cupom ativo pelo código (case-insensitive)"""
    wanted = code.strip().upper()
    for coupon in coupons:
        if coupon.code.upper() == wanted and coupon.is_active:
            return coupon
    raise CouponNotFoundError("Cupom inválido ou expirado")


def apply_coupon(coupon: Coupon, order_value: float, now: Optional[datetime] = None) -> CouponDiscount:
    """
    Valida o cupom e calcula o desconto para o valor do pedido.

    Args:
        coupon: Cupom cadastrado
        order_value: Valor do pedido em R$
        now: Momento da validação (padrão: agora, UTC)

    Returns:
        CouponDiscount com o valor do desconto em R$

    Raises:
        CouponError: subclasse indicando o motivo da recusa
    """
    now = _as_utc(now or datetime.now(timezone.utc))

    if not coupon.is_active:
        raise CouponNotFoundError("Cupom inválido ou expirado")

    if coupon.start_date and _as_utc(coupon.start_date) > now:
        raise CouponNotStartedError("Cupom ainda não está ativo")
    if coupon.end_date and _as_utc(coupon.end_date) < now:
        raise CouponExpiredError("Cupom expirado")

    if coupon.usage_limit and coupon.usage_count >= coupon.usage_limit:
        raise CouponExhaustedError("Cupom esgotado")

    if coupon.min_order_value and order_value < coupon.min_order_value:
        raise CouponMinimumOrderError(f"Valor mínimo: R$ {coupon.min_order_value:.2f}")

    if coupon.type == "percentage":
        discount = (order_value * coupon.value) / 100
        if coupon.max_discount and discount > coupon.max_discount:
            discount = coupon.max_discount
    else:
        # Desconto fixo nunca maior que o pedido
        discount = min(coupon.value, order_value)

    logger.info(f"Cupom {coupon.code.upper()} aplicado: desconto R$ {discount:.2f}")
    return CouponDiscount(code=coupon.code.upper(), discount=discount)
