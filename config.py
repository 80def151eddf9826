# config.py
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricing.discount import DEFAULT_DISCOUNT_TIERS, MAX_QUANTITY
from pricing.interface import DiscountTier


class Settings(BaseSettings):
    dev_mode: bool = False

    app_slug: str = "storefront-pricing"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Quantidade mínima aceita nos pedidos (clamp da entrada)
    min_quantity: int = Field(1, ge=1)
    max_quantity: int = Field(MAX_QUANTITY, ge=1)

    # Tabela de desconto por quantidade (JSON na variável DISCOUNT_TIERS)
    discount_tiers: List[DiscountTier] = Field(default_factory=lambda: list(DEFAULT_DISCOUNT_TIERS))

    default_simples_anexo: Literal["II", "III"] = "III"
    free_shipping_minimum: float = Field(199.0, ge=0)
    low_stock_default_min: int = Field(5, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("discount_tiers")
    @classmethod
    def _tiers_ascending(cls, tiers: List[DiscountTier]) -> List[DiscountTier]:
        thresholds = [t.quantity_threshold for t in tiers]
        if thresholds != sorted(set(thresholds)):
            raise ValueError("discount_tiers deve ter quantity_threshold estritamente crescente")
        return tiers


settings = Settings()
