from .menu_page import MenuPage, SubmenuPage, rules_to_css
from .navigation import AdminNavigation, MenuEntry, Navigation, SubmenuEntry

__all__ = ["AdminNavigation", "MenuEntry", "MenuPage", "Navigation", "SubmenuEntry", "SubmenuPage", "rules_to_css"]
