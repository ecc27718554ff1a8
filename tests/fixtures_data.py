"""Conjunto de dados reutilizável para cenários de teste backend."""
from types import SimpleNamespace

from order_engine.models.choice import Choice
from order_engine.models.client import Client
from order_engine.models.client_address import ClientAddress
from order_engine.models.environment import Environment
from order_engine.models.garnish_item import GarnishItem
from order_engine.models.menu import Menu
from order_engine.models.menu_category import MenuCategory
from order_engine.models.menu_item import MenuItem

ENVIRONMENT = {"id": "env-1", "name": "Pizzaria Central", "slug": "pizzaria-central"}

CLIENT = {"id": "client-1", "phone": "5511999990000", "name": "João"}
OTHER_CLIENT = {"id": "client-2", "phone": "5511988880000", "name": "Maria"}

CLIENT_ADDRESS = {
    "id": "address-1",
    "client_id": "client-1",
    "label": "Casa",
    "street": "Rua Principal",
    "number": "100",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01000-000",
    "is_default": True,
}

OTHER_CLIENT_ADDRESS = {
    "id": "address-2",
    "client_id": "client-2",
    "label": "Trabalho",
    "street": "Avenida Paulista",
    "number": "1000",
    "neighborhood": "Bela Vista",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01310-100",
    "is_default": True,
}

MENU = {"id": "menu-1", "environment_id": "env-1", "name": "Cardápio", "is_active": True}
CATEGORY = {"id": "cat-1", "environment_id": "env-1", "menu_id": "menu-1", "name": "Lanches"}

# item X do cenário básico: 15,00 sem complementos obrigatórios
ITEM_X = {
    "id": "item-x",
    "environment_id": "env-1",
    "menu_category_id": "cat-1",
    "description": "X-Burger",
    "details": "Carne e queijo",
    "logo_url": "burger.png",
    "unit_price": 1500,
    "unit_min_price": 1500,
    "unit_original_price": 1800,
    "promotion_tags": ["PROMO"],
    "need_choices": False,
    "dietary_restrictions": ["GLUTEN_FREE"],
    "dish_classifications": [],
}

CHOICE_SAUCE = {
    "id": "choice-sauce",
    "environment_id": "env-1",
    "item_id": "item-x",
    "name": "Escolha o molho",
    "min": 1,
    "max": 1,
    "display_order": 0,
}

GARNISH_BBQ = {
    "id": "garnish-bbq",
    "environment_id": "env-1",
    "choice_id": "choice-sauce",
    "description": "Barbecue",
    "unit_price": 200,
    "display_order": 0,
}

GARNISH_MUSTARD = {
    "id": "garnish-mustard",
    "environment_id": "env-1",
    "choice_id": "choice-sauce",
    "description": "Mostarda",
    "unit_price": 150,
    "display_order": 1,
}

CHOICE_TOPPINGS = {
    "id": "choice-toppings",
    "environment_id": "env-1",
    "item_id": "item-x",
    "name": "Escolha de 2 a 3 adicionais",
    "min": 2,
    "max": 3,
    "display_order": 1,
}

GARNISH_CHEDDAR = {
    "id": "garnish-cheddar",
    "environment_id": "env-1",
    "choice_id": "choice-toppings",
    "description": "Cheddar",
    "unit_price": 300,
    "display_order": 0,
}

GARNISH_BACON = {
    "id": "garnish-bacon",
    "environment_id": "env-1",
    "choice_id": "choice-toppings",
    "description": "Bacon",
    "unit_price": 400,
    "display_order": 1,
}

# item Y exige a escolha da bebida (needChoices)
ITEM_Y = {
    "id": "item-y",
    "environment_id": "env-1",
    "menu_category_id": "cat-1",
    "description": "Combo Família",
    "unit_price": 5990,
    "need_choices": True,
    "display_order": 1,
}

CHOICE_DRINK = {
    "id": "choice-drink",
    "environment_id": "env-1",
    "item_id": "item-y",
    "name": "Escolha o refrigerante",
    "min": 1,
    "max": 2,
    "display_order": 0,
}

GARNISH_COLA = {
    "id": "garnish-cola",
    "environment_id": "env-1",
    "choice_id": "choice-drink",
    "description": "Cola 2L",
    "unit_price": 0,
    "display_order": 0,
}

GARNISH_GUARANA = {
    "id": "garnish-guarana",
    "environment_id": "env-1",
    "choice_id": "choice-drink",
    "description": "Guaraná 2L",
    "unit_price": 500,
    "display_order": 1,
}

EXTERNAL_CATALOG_PAYLOAD = {
    "code": "00",
    "data": {
        "menu": [
            {
                "code": "CAT-1",
                "name": "Pizzas",
                "itens": [
                    {
                        "id": "ext-item-1",
                        "code": "P1",
                        "description": "Pizza Margherita",
                        "details": "Molho, mussarela e manjericão",
                        "logoUrl": "margherita.jpg",
                        "needChoices": True,
                        "unitPrice": 49.9,
                        "unitMinPrice": 39.9,
                        "tags": ["BEST_SELLER"],
                        "productTags": [
                            {"group": "DIETARY_RESTRICTIONS", "tags": ["VEGETARIAN", "UNKNOWN"]},
                            {"group": "PORTION_SIZE", "tags": ["SERVES_2"]},
                        ],
                        "productInfo": {
                            "id": "pi-1",
                            "packaging": "BOX",
                            "sequence": 1,
                            "quantity": 8,
                            "unit": "un",
                            "ean": "789000000001",
                        },
                        "sellingOption": {
                            "minimum": 1,
                            "incremental": 1,
                            "averageUnit": "UNIT",
                            "availableUnits": ["UNIT"],
                        },
                        "choices": [
                            {
                                "code": "BORDA",
                                "name": "Escolha a borda",
                                "min": 1,
                                "max": 1,
                                "garnishItens": [
                                    {
                                        "id": "ext-garnish-1",
                                        "code": "B1",
                                        "description": "Borda tradicional",
                                        "unitPrice": 0,
                                    },
                                    {
                                        "id": "ext-garnish-2",
                                        "description": "Borda de catupiry",
                                        "logoUrl": "https://cdn.example.com/catupiry.jpg",
                                        "unitPrice": 8.5,
                                    },
                                ],
                            }
                        ],
                    },
                    {
                        "id": "ext-item-2",
                        "code": "P2",
                        "description": "Cerveja Lata",
                        "unitPrice": 7.0,
                        "unitOriginalPrice": 9.99,
                        "productTags": [
                            {"group": "DISH_CLASSIFICATION", "tags": ["ALCOHOLIC_DRINK", "FROSTY"]}
                        ],
                    },
                ],
            },
            {"code": "CAT-2", "name": "Sobremesas", "itens": []},
        ]
    },
}


def seed_catalog(db) -> SimpleNamespace:
    db.add(Environment(**ENVIRONMENT))
    db.add(Client(**CLIENT))
    db.add(Client(**OTHER_CLIENT))
    db.flush()
    db.add(ClientAddress(**CLIENT_ADDRESS))
    db.add(ClientAddress(**OTHER_CLIENT_ADDRESS))
    db.add(Menu(**MENU))
    db.flush()
    db.add(MenuCategory(**CATEGORY))
    db.flush()
    db.add(MenuItem(**ITEM_X))
    db.add(MenuItem(**ITEM_Y))
    db.flush()
    db.add(Choice(**CHOICE_SAUCE))
    db.add(Choice(**CHOICE_DRINK))
    db.add(Choice(**CHOICE_TOPPINGS))
    db.flush()
    for garnish in (
        GARNISH_BBQ,
        GARNISH_MUSTARD,
        GARNISH_COLA,
        GARNISH_GUARANA,
        GARNISH_CHEDDAR,
        GARNISH_BACON,
    ):
        db.add(GarnishItem(**garnish))
    db.commit()
    return SimpleNamespace(
        environment_id=ENVIRONMENT["id"],
        client_id=CLIENT["id"],
        other_client_id=OTHER_CLIENT["id"],
        address_id=CLIENT_ADDRESS["id"],
        other_address_id=OTHER_CLIENT_ADDRESS["id"],
        item_x=ITEM_X["id"],
        item_y=ITEM_Y["id"],
        choice_sauce=CHOICE_SAUCE["id"],
        choice_drink=CHOICE_DRINK["id"],
        choice_toppings=CHOICE_TOPPINGS["id"],
        garnish_bbq=GARNISH_BBQ["id"],
        garnish_mustard=GARNISH_MUSTARD["id"],
        garnish_cola=GARNISH_COLA["id"],
        garnish_guarana=GARNISH_GUARANA["id"],
        garnish_cheddar=GARNISH_CHEDDAR["id"],
        garnish_bacon=GARNISH_BACON["id"],
    )
