from armenu.models.restaurant import Restaurant, SubscriptionPlan
from armenu.models.menu import MenuCategory, MenuItem

__all__ = ["Restaurant", "SubscriptionPlan", "MenuCategory", "MenuItem"]
