#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from pocketcashier.data.models.business import BusinessModel, BusinessSettingsModel
from pocketcashier.data.models.catalog import ProductModel, MenuItemModel
from pocketcashier.data.models.cart import CartModel
from pocketcashier.data.models.cart_item import CartItemModel
from pocketcashier.data.models.cart_booking import CartBookingModel
from pocketcashier.data.models.order import ShopOrderModel
from pocketcashier.data.models.order_item import ShopOrderItemModel
from pocketcashier.data.models.checkout_session import CheckoutSessionModel
from pocketcashier.data.models.booking import BookingModel

__all__ = [
    "BusinessModel",
    "BusinessSettingsModel",
    "ProductModel",
    "MenuItemModel",
    "CartModel",
    "CartItemModel",
    "CartBookingModel",
    "ShopOrderModel",
    "ShopOrderItemModel",
    "CheckoutSessionModel",
    "BookingModel",
]
