from order_engine.models.environment import Environment
from order_engine.models.client import Client
from order_engine.models.client_address import ClientAddress
from order_engine.models.menu import Menu
from order_engine.models.menu_category import MenuCategory
from order_engine.models.menu_item import MenuItem
from order_engine.models.product_info import ProductInfo
from order_engine.models.selling_option import SellingOption
from order_engine.models.choice import Choice
from order_engine.models.garnish_item import GarnishItem
from order_engine.models.order import Order
from order_engine.models.order_item import OrderItem
from order_engine.models.order_choice import OrderChoice
from order_engine.models.order_garnish_item import OrderGarnishItem
