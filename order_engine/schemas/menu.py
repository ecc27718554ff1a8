from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ExternalModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExternalProductTagGroup(_ExternalModel):
    group: str
    tags: List[str] = Field(default_factory=list)


class ExternalProductInfo(_ExternalModel):
    id: str
    packaging: Optional[str] = None
    sequence: Optional[int] = None
    quantity: int = 0
    unit: Optional[str] = None
    ean: Optional[str] = None


class ExternalSellingOption(_ExternalModel):
    minimum: Optional[int] = None
    incremental: Optional[int] = None
    average_unit: Optional[str] = Field(default=None, alias="averageUnit")
    available_units: List[str] = Field(default_factory=list, alias="availableUnits")


class ExternalGarnishItem(_ExternalModel):
    id: str
    code: Optional[str] = None
    description: str
    details: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    unit_price: Decimal = Field(alias="unitPrice")


class ExternalChoice(_ExternalModel):
    code: Optional[str] = None
    name: str
    min: int = 0
    max: int = 1
    garnish_items: List[ExternalGarnishItem] = Field(default_factory=list, alias="garnishItens")


class ExternalItem(_ExternalModel):
    id: str
    code: Optional[str] = None
    description: str
    details: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    need_choices: bool = Field(default=False, alias="needChoices")
    unit_price: Decimal = Field(alias="unitPrice")
    unit_min_price: Optional[Decimal] = Field(default=None, alias="unitMinPrice")
    unit_original_price: Optional[Decimal] = Field(default=None, alias="unitOriginalPrice")
    tags: List[str] = Field(default_factory=list)
    product_tags: Optional[List[ExternalProductTagGroup]] = Field(default=None, alias="productTags")
    product_info: Optional[ExternalProductInfo] = Field(default=None, alias="productInfo")
    selling_option: Optional[ExternalSellingOption] = Field(default=None, alias="sellingOption")
    choices: List[ExternalChoice] = Field(default_factory=list)


class ExternalCategory(_ExternalModel):
    code: Optional[str] = None
    name: str
    items: List[ExternalItem] = Field(default_factory=list, alias="itens")


class ExternalCatalogData(_ExternalModel):
    menu: List[ExternalCategory]


class ExternalCatalog(_ExternalModel):
    code: Optional[str] = None
    data: ExternalCatalogData


class MenuImportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    environment_id: str = Field(alias="environmentId", min_length=1)
    external_merchant_id: str = Field(alias="externalMerchantId", min_length=1)
