# -*- coding: utf-8 -*-
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import settings
from pricing import (
    QuantityDiscountCalculator,
    QuantityQuote,
    SimplesTaxResult,
    TaxCalculatorFactory,
    clamp_quantity,
)
from pricing.cart import CartItem, CartSummary, summarize_cart
from pricing.coupons import Coupon, CouponDiscount, CouponError, apply_coupon, find_coupon
from pricing.financial import (
    FinancialSummary,
    Order,
    OrderItem,
    ProductCost,
    ProductMargin,
    ProductRanking,
    financial_summary,
    low_stock_products,
    product_margins,
    product_ranking,
)

# Configuração de logging estruturado
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Storefront Pricing API", version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_discount_calculator() -> QuantityDiscountCalculator:
    return QuantityDiscountCalculator(settings.discount_tiers)


def _unsupported_anexo(e: ValueError) -> HTTPException:
    logger.warning(f"Anexo recusado: {e}")
    return HTTPException(
        status_code=422,
        detail={
            "message": str(e),
            "supported_anexos": TaxCalculatorFactory.get_supported_anexos()
        }
    )


# ============================================================================
# PRICING ENDPOINTS
# ============================================================================

class QuantityQuoteRequest(BaseModel):
    """Request para cotação com desconto por quantidade"""
    unit_price: float = Field(..., ge=0, allow_inf_nan=False, description="Preço unitário cheio em R$")
    quantity: Any = Field(None, description="Quantidade desejada (ajustada para o mínimo configurado)")


class CouponRequest(BaseModel):
    coupon: Coupon
    order_value: float = Field(..., ge=0, description="Valor do pedido em R$")
    now: Optional[datetime] = Field(None, description="Momento da validação (padrão: agora)")


class CouponCodeRequest(BaseModel):
    """Request com o código digitado e os cupons cadastrados"""
    code: str = Field(..., min_length=1, description="Código do cupom (case-insensitive)")
    coupons: List[Coupon] = Field(default_factory=list)
    order_value: float = Field(..., ge=0, description="Valor do pedido em R$")
    now: Optional[datetime] = Field(None, description="Momento da validação (padrão: agora)")


class CartRequest(BaseModel):
    items: List[CartItem] = Field(default_factory=list)
    discount: float = Field(0.0, ge=0, description="Desconto já concedido (ex.: cupom) em R$")


@app.get("/pricing/discount-tiers")
async def pricing_discount_tiers(calculator: QuantityDiscountCalculator = Depends(get_discount_calculator)):
    """Lista as faixas de desconto por quantidade configuradas"""
    return {
        "min_quantity": settings.min_quantity,
        "tiers": [tier.model_dump() for tier in calculator.tiers]
    }


@app.post("/pricing/quantity-quote", response_model=QuantityQuote)
async def pricing_quantity_quote(
        request: QuantityQuoteRequest,
        calculator: QuantityDiscountCalculator = Depends(get_discount_calculator)
):
    """
    Calcula preço com desconto progressivo por quantidade.

    A quantidade é sanitizada antes do cálculo: valores inválidos ou abaixo
    do mínimo viram o mínimo configurado; acima do máximo, o máximo.
    """
    quantity = clamp_quantity(request.quantity, settings.min_quantity, settings.max_quantity)
    logger.info(f"Cotação por quantidade: unit_price={request.unit_price}, quantity={quantity}")
    return calculator.quote(request.unit_price, quantity)


@app.post("/pricing/coupon", response_model=CouponDiscount)
async def pricing_coupon(request: CouponRequest):
    """
    Valida um cupom para o valor do pedido e retorna o desconto.

    Raises:
        422: Cupom inativo, fora da vigência, esgotado ou pedido abaixo do mínimo
    """
    try:
        return apply_coupon(request.coupon, request.order_value, request.now)
    except CouponError as e:
        logger.warning(f"Cupom {request.coupon.code} recusado: {e}")
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "code": request.coupon.code}
        )


@app.post("/pricing/coupon/code", response_model=CouponDiscount)
async def pricing_coupon_code(request: CouponCodeRequest):
    """
    Busca o cupom ativo pelo código digitado no checkout e calcula o desconto.

    Raises:
        422: Código inexistente/inativo ou cupom recusado na validação
    """
    try:
        coupon = find_coupon(request.coupons, request.code)
        return apply_coupon(coupon, request.order_value, request.now)
    except CouponError as e:
        logger.warning(f"Cupom {request.code} recusado: {e}")
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "code": request.code.strip().upper()}
        )


@app.post("/pricing/cart", response_model=CartSummary)
async def pricing_cart(request: CartRequest):
    """Totais do carrinho com progresso para frete grátis"""
    return summarize_cart(request.items, request.discount, settings.free_shipping_minimum)


# ============================================================================
# TAX ENDPOINTS (Simples Nacional)
# ============================================================================

class SimplesTaxRequest(BaseModel):
    """Request para estimativa do Simples Nacional"""
    gross_revenue_12m: float = Field(..., ge=0, description="Receita bruta dos últimos 12 meses (RBT12)")
    anexo: Optional[str] = Field(None, description="Anexo (II ou III). Padrão: anexo configurado")


@app.get("/tax/anexos")
async def tax_anexos():
    """
    Lista anexos suportados e suas tabelas de faixas.
    """
    brackets = {}
    for anexo in TaxCalculatorFactory.get_supported_anexos():
        calculator = TaxCalculatorFactory.get(anexo)
        brackets[anexo] = [bracket.model_dump() for bracket in calculator.get_brackets()]

    return {
        "supported_anexos": TaxCalculatorFactory.get_supported_anexos(),
        "default_anexo": settings.default_simples_anexo,
        "brackets": brackets
    }


@app.post("/tax/simples", response_model=SimplesTaxResult)
async def tax_simples(request: SimplesTaxRequest):
    """
    Calcula faixa, alíquota efetiva e imposto do Simples Nacional.

    Raises:
        422: Anexo não suportado ou receita negativa
    """
    try:
        calculator = TaxCalculatorFactory.get(request.anexo or settings.default_simples_anexo)
    except ValueError as e:
        raise _unsupported_anexo(e)

    return calculator.calculate(request.gross_revenue_12m)


@app.post("/tax/breakdown")
async def tax_breakdown(request: SimplesTaxRequest):
    """Passo a passo do cálculo do Simples Nacional"""
    try:
        calculator = TaxCalculatorFactory.get(request.anexo or settings.default_simples_anexo)
    except ValueError as e:
        raise _unsupported_anexo(e)

    return calculator.get_breakdown(request.gross_revenue_12m).model_dump()


# ============================================================================
# FINANCE ENDPOINTS (painel administrativo)
# ============================================================================

class FinancialSummaryRequest(BaseModel):
    orders: List[Order] = Field(default_factory=list)
    order_items: List[OrderItem] = Field(default_factory=list)
    anexo: Optional[str] = None
    now: Optional[datetime] = Field(None, description="Data de referência da janela de 12 meses")


class ProductsRequest(BaseModel):
    products: List[ProductCost] = Field(default_factory=list)
    limit: int = Field(10, ge=1)


class RankingRequest(BaseModel):
    order_items: List[OrderItem] = Field(default_factory=list)
    limit: int = Field(10, ge=1)


@app.post("/finance/summary", response_model=FinancialSummary)
async def finance_summary(request: FinancialSummaryRequest):
    """
    Resumo financeiro: RBT12, custos, Simples Nacional, receita e margem líquidas.
    """
    try:
        return financial_summary(
            request.orders,
            request.order_items,
            request.anexo or settings.default_simples_anexo,
            request.now
        )
    except ValueError as e:
        raise _unsupported_anexo(e)
    except Exception as e:
        logger.exception("Erro ao calcular resumo financeiro")
        raise HTTPException(
            status_code=500,
            detail={"message": f"Erro ao calcular resumo financeiro: {str(e)}"}
        )


@app.post("/finance/product-margins", response_model=List[ProductMargin])
async def finance_product_margins(request: ProductsRequest):
    return product_margins(request.products)


@app.post("/finance/product-ranking", response_model=List[ProductRanking])
async def finance_product_ranking(request: RankingRequest):
    return product_ranking(request.order_items, request.limit)


@app.post("/finance/low-stock", response_model=List[ProductCost])
async def finance_low_stock(request: ProductsRequest):
    """Produtos ativos no estoque mínimo ou abaixo"""
    return low_stock_products(request.products, request.limit, settings.low_stock_default_min)


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "app": settings.app_slug, "version": settings.app_version}


# ========= MAIN PARA RODAR DEBUGANDO =========


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="127.0.0.1", port=5002, reload=settings.dev_mode)
