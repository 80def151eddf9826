from datetime import datetime, timezone

import pytest
from pricing.financial import (
    Order,
    OrderItem,
    ProductCost,
    financial_summary,
    gross_revenue_12_months,
    low_stock_products,
    product_margins,
    product_ranking,
    trailing_window_start,
)

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


def _orders():
    return [
        Order(id="1", order_number="P-1", total=1000.0, order_status="completed",
              created_at=datetime(2026, 1, 10, tzinfo=timezone.utc)),
        Order(id="2", order_number="P-2", total=500.0, order_status="delivered",
              created_at=datetime(2025, 10, 1, tzinfo=timezone.utc)),
        Order(id="3", order_number="P-3", total=2000.0, order_status="pending",
              created_at=datetime(2026, 5, 2, tzinfo=timezone.utc)),
        Order(id="4", order_number="P-4", total=300.0, order_status="completed",
              created_at=datetime(2025, 9, 30, tzinfo=timezone.utc)),
    ]


def _items():
    return [
        OrderItem(product_id="a", product_name="Placa ACM", quantity=3, unit_price=200.0, total_price=600.0,
                  cost_material=100.0, cost_labor=50.0),
        OrderItem(product_id="b", product_name="Adesivo", quantity=10, unit_price=20.0, total_price=200.0,
                  cost_material=60.0, cost_shipping=40.0),
        OrderItem(product_id="a", product_name="Placa ACM", quantity=2, unit_price=200.0, total_price=400.0,
                  cost_material=80.0),
        OrderItem(product_id=None, product_name="Banner avulso", quantity=1, total_price=90.0),
    ]


def test_trailing_window_starts_on_first_day_twelve_months_back():
    """Testa início da janela RBT12"""
    assert trailing_window_start(NOW) == datetime(2025, 10, 1, tzinfo=timezone.utc)


def test_gross_revenue_only_counts_finished_orders_in_window():
    """Testa se só pedidos concluídos/entregues dentro da janela entram na receita"""
    assert gross_revenue_12_months(_orders(), now=NOW) == pytest.approx(1500.0)


def test_financial_summary():
    """Testa resumo financeiro com Simples Anexo III"""
    items = _items()[:2]

    summary = financial_summary(_orders(), items, "III", now=NOW)

    assert summary.gross_revenue == pytest.approx(1500.0)
    assert summary.total_cost == pytest.approx(250.0)
    assert summary.simples_bracket == 1
    assert summary.effective_rate == pytest.approx(6.0)
    assert summary.taxes == pytest.approx(90.0)
    assert summary.net_revenue == pytest.approx(1160.0)
    assert summary.net_margin == pytest.approx(1160.0 / 1500.0 * 100)
    assert summary.total_orders == 4


def test_financial_summary_without_revenue():
    """Testa resumo sem receita: margem zero e imposto zero"""
    summary = financial_summary([], [], None, now=NOW)

    assert summary.gross_revenue == 0
    assert summary.taxes == 0
    assert summary.net_margin == 0
    assert summary.simples_anexo == "III"


def test_financial_summary_rejects_unknown_anexo():
    """Testa anexo inválido"""
    with pytest.raises(ValueError):
        financial_summary(_orders(), [], "VII", now=NOW)


def test_product_margins_prefer_promotional_price():
    """Testa margem calculada sobre o preço promocional"""
    products = [
        ProductCost(id="a", name="Placa", price=100.0, promotional_price=80.0,
                    cost_material=30.0, cost_labor=10.0),
        ProductCost(id="b", name="Brinde", price=0.0),
    ]

    margins = product_margins(products)

    assert margins[1].sell_price == 80.0
    assert margins[1].total_cost == pytest.approx(40.0)
    assert margins[1].margin == pytest.approx(40.0)
    assert margins[1].margin_percent == pytest.approx(50.0)
    assert margins[0].margin_percent == 0


def test_product_margins_only_active_sorted_by_name():
    """Testa se margens consideram só produtos ativos, em ordem de nome"""
    products = [
        ProductCost(id="c", name="Letreiro", price=300.0),
        ProductCost(id="d", name="Antigo", price=50.0, status="inactive"),
        ProductCost(id="e", name="Adesivo", price=20.0),
    ]

    margins = product_margins(products)

    assert [m.id for m in margins] == ["e", "c"]


def test_product_ranking_groups_by_product():
    """Testa ranking agrupado e ordenado por quantidade"""
    ranking = product_ranking(_items())

    assert [r.product_name for r in ranking] == ["Adesivo", "Placa ACM", "Banner avulso"]
    placa = ranking[1]
    assert placa.total_quantity == 5
    assert placa.total_revenue == pytest.approx(1000.0)
    assert placa.total_cost == pytest.approx(230.0)
    assert placa.total_profit == pytest.approx(770.0)
    assert ranking[2].product_id == ""


def test_product_ranking_limit():
    """Testa limite do ranking"""
    assert len(product_ranking(_items(), limit=1)) == 1


def test_low_stock_products():
    """Testa alerta de estoque baixo"""
    products = [
        ProductCost(id="a", name="Placa", stock=2, min_stock=3),
        ProductCost(id="b", name="Adesivo", stock=4),
        ProductCost(id="c", name="Banner", stock=50, min_stock=10),
        ProductCost(id="d", name="Antigo", stock=0, status="inactive"),
        ProductCost(id="e", name="Letreiro", stock=6, min_stock=5),
    ]

    low = low_stock_products(products)

    assert [p.id for p in low] == ["a", "b"]
