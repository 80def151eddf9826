from datetime import datetime, timezone

import pytest
from pricing.coupons import (
    Coupon,
    CouponError,
    CouponExhaustedError,
    CouponExpiredError,
    CouponMinimumOrderError,
    CouponNotFoundError,
    CouponNotStartedError,
    apply_coupon,
    find_coupon,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_percentage_coupon():
    """Testa cupom percentual simples"""
    coupon = Coupon(code="promo10", type="percentage", value=10)

    result = apply_coupon(coupon, 250.0, now=NOW)

    assert result.code == "PROMO10"
    assert result.discount == pytest.approx(25.0)


def test_percentage_coupon_respects_max_discount():
    """Testa se desconto percentual é limitado pelo teto"""
    coupon = Coupon(code="BIG", type="percentage", value=50, max_discount=30)

    assert apply_coupon(coupon, 200.0, now=NOW).discount == 30


def test_fixed_coupon_is_capped_by_order_value():
    """Testa se desconto fixo nunca passa do valor do pedido"""
    coupon = Coupon(code="FIXO", type="fixed", value=40)

    assert apply_coupon(coupon, 100.0, now=NOW).discount == 40
    assert apply_coupon(coupon, 25.0, now=NOW).discount == 25


def test_inactive_coupon_is_rejected():
    """Testa cupom inativo"""
    coupon = Coupon(code="OFF", value=10, is_active=False)

    with pytest.raises(CouponNotFoundError):
        apply_coupon(coupon, 100.0, now=NOW)


def test_coupon_validity_window():
    """Testa cupom antes e depois da vigência"""
    future = Coupon(code="FUTURO", value=10, start_date=datetime(2026, 11, 1, tzinfo=timezone.utc))
    past = Coupon(code="VELHO", value=10, end_date=datetime(2026, 10, 1))

    with pytest.raises(CouponNotStartedError):
        apply_coupon(future, 100.0, now=NOW)
    with pytest.raises(CouponExpiredError) as exc_info:
        apply_coupon(past, 100.0, now=NOW)

    assert "expirado" in str(exc_info.value)


def test_exhausted_coupon_is_rejected():
    """Testa limite de uso atingido"""
    coupon = Coupon(code="LIMITE", value=10, usage_limit=5, usage_count=5)

    with pytest.raises(CouponExhaustedError):
        apply_coupon(coupon, 100.0, now=NOW)


def test_minimum_order_value():
    """Testa valor mínimo do pedido"""
    coupon = Coupon(code="MIN", value=10, min_order_value=150)

    with pytest.raises(CouponMinimumOrderError) as exc_info:
        apply_coupon(coupon, 100.0, now=NOW)

    assert "150.00" in str(exc_info.value)
    assert apply_coupon(coupon, 150.0, now=NOW).discount == pytest.approx(15.0)


def test_coupon_errors_are_value_errors():
    """Testa hierarquia de exceções"""
    assert issubclass(CouponError, ValueError)
    assert issubclass(CouponExpiredError, CouponError)


def test_find_coupon_by_code():
    """Testa busca case-insensitive de cupom ativo"""
    coupons = [
        Coupon(code="A10", value=10, is_active=False),
        Coupon(code="B20", value=20),
    ]

    assert find_coupon(coupons, " b20 ").code == "B20"
    with pytest.raises(CouponNotFoundError):
        find_coupon(coupons, "a10")
