from __future__ import annotations


class OrderEngineError(Exception):
    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(OrderEngineError):
    status_code = 404
    default_detail = "Resource not found"


class ClientNotFound(NotFoundError):
    def __init__(self, client_id: str):
        super().__init__(f"Client with ID {client_id} not found")
        self.client_id = client_id


class OrderNotFound(NotFoundError):
    def __init__(self, order_id: str):
        super().__init__(f"Order with ID {order_id} not found")
        self.order_id = order_id


class ItemNotFound(NotFoundError):
    def __init__(self, item_id: str):
        super().__init__(f"Item with ID {item_id} not found")
        self.item_id = item_id


class ChoiceNotFound(NotFoundError):
    def __init__(self, choice_id: str):
        super().__init__(f"Choice with ID {choice_id} not found")
        self.choice_id = choice_id


class GarnishNotFound(NotFoundError):
    def __init__(self, garnish_id: str):
        super().__init__(f"Option with ID {garnish_id} not found")
        self.garnish_id = garnish_id


class EnvironmentNotFound(NotFoundError):
    def __init__(self, environment_id: str):
        super().__init__(f"Environment with ID {environment_id} not found")
        self.environment_id = environment_id


class ClientAddressNotFound(NotFoundError):
    def __init__(self, address_id: str):
        super().__init__(f"Client address with ID {address_id} not found")
        self.address_id = address_id


class MenuNotFound(NotFoundError):
    default_detail = "Menu not found"


class OwnershipMismatch(OrderEngineError):
    status_code = 403
    default_detail = "Resource does not belong to client"


class OrderOwnershipMismatch(OwnershipMismatch):
    def __init__(self, order_id: str, client_id: str):
        super().__init__(f"Order with ID {order_id} does not belong to client {client_id}")


class AddressOwnershipMismatch(OwnershipMismatch):
    def __init__(self, address_id: str, client_id: str):
        super().__init__(f"Client address with ID {address_id} does not belong to client {client_id}")


class OrderValidationError(OrderEngineError):
    status_code = 400
    default_detail = "Invalid order request"


class ChoiceCardinalityError(OrderValidationError):
    def __init__(self, choice_name: str, selected: int, minimum: int, maximum: int):
        super().__init__(
            f"Choice '{choice_name}' accepts between {minimum} and {maximum} options, got {selected}"
        )


class RequiredChoiceMissing(OrderValidationError):
    def __init__(self, choice_name: str):
        super().__init__(f"Choice '{choice_name}' is required for this item")


class OrderNotEditable(OrderValidationError):
    status_code = 409

    def __init__(self, order_id: str, status: str):
        super().__init__(f"Order with ID {order_id} is in status {status} and cannot receive items")


class InvalidStatusTransition(OrderValidationError):
    status_code = 409

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move order from {current} to {target}")
        self.current = current
        self.target = target


class TransactionFailure(OrderEngineError):
    status_code = 500
    default_detail = "Transaction failed"


class MenuImportError(OrderEngineError):
    status_code = 502
    default_detail = "Failed to import menu"

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code
