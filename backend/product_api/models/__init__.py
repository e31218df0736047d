from .users import User
from .products import Product, InventoryStatus

__all__ = [
    'User',
    'Product', 'InventoryStatus',
]
