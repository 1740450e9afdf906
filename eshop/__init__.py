"""EShop parts catalog and shopping cart service."""
