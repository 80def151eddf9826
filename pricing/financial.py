# -*- coding: utf-8 -*-
"""
Indicadores do painel financeiro administrativo.

Receita bruta dos últimos 12 meses (RBT12), imposto estimado do Simples
Nacional, receita e margem líquidas, margem por produto, ranking de
vendas e alerta de estoque baixo. Tudo calculado sobre dados já
carregados; nenhuma consulta ao banco é feita aqui.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel

from pricing.factory import DEFAULT_ANEXO, calculate_simples_tax

logger = logging.getLogger(__name__)

# Status de pedido que contam como receita realizada
REVENUE_STATUSES = ("completed", "delivered")


class Order(BaseModel):
    id: str
    order_number: str = ""
    total: float = 0.0
    order_status: str
    created_at: datetime


class OrderItem(BaseModel):
    product_id: Optional[str] = None
    product_name: str
    quantity: int = 0
    unit_price: float = 0.0
    total_price: float = 0.0
    cost_material: float = 0.0
    cost_labor: float = 0.0
    cost_shipping: float = 0.0

    @property
    def total_cost(self) -> float:
        return (self.cost_material or 0) + (self.cost_labor or 0) + (self.cost_shipping or 0)


class ProductCost(BaseModel):
    id: str
    name: str
    price: float = 0.0
    promotional_price: Optional[float] = None
    stock: int = 0
    min_stock: Optional[int] = None
    cost_material: float = 0.0
    cost_labor: float = 0.0
    cost_shipping: float = 0.0
    status: str = "active"


class ProductMargin(BaseModel):
    id: str
    name: str
    sell_price: float
    total_cost: float
    margin: float
    margin_percent: float


class ProductRanking(BaseModel):
    product_id: str
    product_name: str
    total_quantity: int
    total_revenue: float
    total_cost: float
    total_profit: float


class FinancialSummary(BaseModel):
    gross_revenue: float
    total_cost: float
    taxes: float
    effective_rate: float
    simples_anexo: str
    simples_bracket: int
    net_revenue: float
    net_margin: float
    total_orders: int


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def trailing_window_start(now: datetime) -> datetime:
    """Primeiro dia do mês, 12 meses atrás"""
    return now.replace(year=now.year - 1, day=1, hour=0, minute=0, second=0, microsecond=0)


def gross_revenue_12_months(orders: List[Order], now: Optional[datetime] = None) -> float:
    """Soma dos pedidos concluídos/entregues dentro da janela de 12 meses"""
    now = _as_utc(now or datetime.now(timezone.utc))
    window_start = trailing_window_start(now)

    return sum(
        order.total or 0
        for order in orders
        if _as_utc(order.created_at) >= window_start and order.order_status in REVENUE_STATUSES
    )


def financial_summary(orders: List[Order], order_items: List[OrderItem],
                      anexo: Optional[str] = DEFAULT_ANEXO, now: Optional[datetime] = None) -> FinancialSummary:
    """
    Consolida o resumo financeiro do painel.

    Receita líquida = Receita bruta - Custos - Impostos

    Raises:
        ValueError: Se o anexo não for suportado
    """
    gross_revenue = gross_revenue_12_months(orders, now)
    total_cost = sum(item.total_cost for item in order_items)

    tax = calculate_simples_tax(gross_revenue, anexo or DEFAULT_ANEXO)
    net_revenue = gross_revenue - total_cost - tax.tax_amount
    net_margin = (net_revenue / gross_revenue) * 100 if gross_revenue > 0 else 0.0

    logger.info(
        f"Resumo financeiro: RBT12={gross_revenue:.2f}, custos={total_cost:.2f}, "
        f"impostos={tax.tax_amount:.2f} (Anexo {tax.anexo}, faixa {tax.bracket_number})"
    )

    return FinancialSummary(
        gross_revenue=gross_revenue,
        total_cost=total_cost,
        taxes=tax.tax_amount,
        effective_rate=tax.effective_rate,
        simples_anexo=tax.anexo,
        simples_bracket=tax.bracket_number,
        net_revenue=net_revenue,
        net_margin=net_margin,
        total_orders=len(orders),
    )


def product_margins(products: List[ProductCost]) -> List[ProductMargin]:
    """
    Margem dos produtos ativos sobre o preço de venda (promocional quando houver),
    em ordem alfabética de nome.
    """
    result = []
    active = [p for p in products if p.status == "active"]
    for p in sorted(active, key=lambda p: p.name):
        sell_price = p.promotional_price or p.price
        total_cost = (p.cost_material or 0) + (p.cost_labor or 0) + (p.cost_shipping or 0)
        margin = sell_price - total_cost
        margin_percent = (margin / sell_price) * 100 if sell_price > 0 else 0.0
        result.append(ProductMargin(
            id=p.id,
            name=p.name,
            sell_price=sell_price,
            total_cost=total_cost,
            margin=margin,
            margin_percent=margin_percent,
        ))
    return result


def product_ranking(order_items: List[OrderItem], limit: int = 10) -> List[ProductRanking]:
    """Agrupa itens vendidos por produto e ordena por quantidade vendida"""
    ranking: Dict[str, ProductRanking] = {}

    for item in order_items:
        key = item.product_id or item.product_name
        revenue = item.total_price or 0
        cost = item.total_cost
        existing = ranking.get(key)

        if existing:
            existing.total_quantity += item.quantity or 0
            existing.total_revenue += revenue
            existing.total_cost += cost
            existing.total_profit += revenue - cost
        else:
            ranking[key] = ProductRanking(
                product_id=item.product_id or "",
                product_name=item.product_name,
                total_quantity=item.quantity or 0,
                total_revenue=revenue,
                total_cost=cost,
                total_profit=revenue - cost,
            )

    ordered = sorted(ranking.values(), key=lambda r: r.total_quantity, reverse=True)
    return ordered[:limit]


def low_stock_products(products: List[ProductCost], limit: int = 10,
                       default_min_stock: int = 5) -> List[ProductCost]:
    """
    Produtos ativos com estoque abaixo do mínimo.

    Pega os `limit` produtos de menor estoque e filtra os que estão
    no mínimo ou abaixo (min_stock ausente usa default_min_stock).
    """
    active = [p for p in products if p.status == "active"]
    lowest = sorted(active, key=lambda p: p.stock or 0)[:limit]
    return [p for p in lowest if (p.stock or 0) <= (p.min_stock or default_min_stock)]
