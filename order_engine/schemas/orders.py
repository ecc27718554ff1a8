from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from order_engine.models.enums import OrderStatus


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    whatsapp_flows_id: str = Field(alias="whatsappFlowsId", min_length=1)
    environment_id: str = Field(alias="environmentId", min_length=1)
    client_address_id: str = Field(alias="clientAddressId", min_length=1)


class ChoiceSelectionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    choice_id: str = Field(alias="choiceId", min_length=1)
    option_id: str = Field(alias="optionId", min_length=1)
    quantity: int = Field(default=1, ge=1)


class AddOrderItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId", min_length=1)
    quantity: int = Field(ge=1)
    notes: Optional[str] = None
    choices: List[ChoiceSelectionIn] = Field(default_factory=list)


class UpdateOrderStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: OrderStatus
    cancellation_reason: Optional[str] = Field(default=None, alias="cancellationReason")
