from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field


class CartItem(BaseModel):
    id: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int
    size: Optional[str] = None


class CartSummary(BaseModel):
    """Totais do carrinho e progresso para frete grátis"""
    item_count: int
    subtotal: float
    discount: float
    total: float
    free_shipping_remaining: float
    free_shipping_progress: float  # % de 0 a 100
    has_free_shipping: bool


def merge_cart_items(items: List[CartItem]) -> List[CartItem]:
    """
    Junta linhas do mesmo produto/tamanho somando quantidades.
    Linhas com quantidade <= 0 são removidas, como no carrinho da loja.
    """
    merged: Dict[Tuple[str, Optional[str]], CartItem] = {}
    for item in items:
        key = (item.id, item.size)
        existing = merged.get(key)
        if existing:
            merged[key] = existing.model_copy(update={"quantity": existing.quantity + item.quantity})
        else:
            merged[key] = item
    return [item for item in merged.values() if item.quantity > 0]


def summarize_cart(items: List[CartItem], discount: float = 0.0,
                   free_shipping_minimum: float = 199.0) -> CartSummary:
    """Calcula subtotal, total com desconto e quanto falta para o frete grátis"""
    lines = merge_cart_items(items)
    item_count = sum(item.quantity for item in lines)
    subtotal = sum(item.price * item.quantity for item in lines)

    discount = min(max(discount, 0.0), subtotal)
    total = subtotal - discount

    if free_shipping_minimum > 0:
        remaining = max(0.0, free_shipping_minimum - subtotal)
        progress = min((subtotal / free_shipping_minimum) * 100, 100.0)
    else:
        remaining = 0.0
        progress = 100.0

    return CartSummary(
        item_count=item_count,
        subtotal=subtotal,
        discount=discount,
        total=total,
        free_shipping_remaining=remaining,
        free_shipping_progress=progress,
        has_free_shipping=remaining <= 0,
    )
