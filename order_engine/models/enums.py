import enum


class OrderStatus(str, enum.Enum):
    CART = "CART"
    PENDING_PAYMENT = "PENDING_PAYMENT"
    WAITING_MERCHANT_ACCEPTANCE = "WAITING_MERCHANT_ACCEPTANCE"
    IN_PREPARATION = "IN_PREPARATION"
    READY_FOR_DELIVERY = "READY_FOR_DELIVERY"
    IN_DELIVERY = "IN_DELIVERY"
    DRIVER_ON_CLIENT = "DRIVER_ON_CLIENT"
    COMPLETED = "COMPLETED"
    CANCELED_BY_MERCHANT = "CANCELED_BY_MERCHANT"
    CANCELED_BY_USER = "CANCELED_BY_USER"
    REJECTED_BY_MERCHANT = "REJECTED_BY_MERCHANT"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    EXPIRED = "EXPIRED"


class PaymentMethod(str, enum.Enum):
    PIX = "PIX"
    CREDIT_CARD_ONLINE = "CREDIT_CARD_ONLINE"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"


class MenuImportStatus(str, enum.Enum):
    NOT_IMPORTED = "NOT_IMPORTED"
    SCHEDULED = "SCHEDULED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class MenuCategoryType(str, enum.Enum):
    MAIN_ITEMS = "MAIN_ITEMS"
    PIZZA = "PIZZA"


class PortionSize(str, enum.Enum):
    SERVES_1 = "SERVES_1"
    SERVES_2 = "SERVES_2"
    SERVES_3 = "SERVES_3"
    SERVES_4 = "SERVES_4"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class DietaryRestriction(str, enum.Enum):
    GLUTEN_FREE = "GLUTEN_FREE"
    LAC_FREE = "LAC_FREE"
    ORGANIC = "ORGANIC"
    SUGAR_FREE = "SUGAR_FREE"
    VEGAN = "VEGAN"
    VEGETARIAN = "VEGETARIAN"


class DishClassification(str, enum.Enum):
    ALCOHOLIC_DRINK = "ALCOHOLIC_DRINK"
    FROSTY = "FROSTY"
