# eshop/services/cart_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Tuple

from eshop.domain.errors import (
    InsufficientStockError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from eshop.domain.schemas import Cart, CartItem, Order
from eshop.repos.cart_repo import CartRepo
from eshop.services.catalog_service import CatalogService
from eshop.utils.logging import get_logger

logger = get_logger(__name__)


def recalculate_totals(cart: Cart) -> None:
    """Derive totals from the items; never adjusted incrementally."""
    cart.total_items = sum(i.quantity for i in cart.items)
    cart.total_price = sum((i.price * i.quantity for i in cart.items), Decimal("0"))
    cart.updated_at = datetime.now(timezone.utc)


def _find_item(cart: Cart, part_id: int) -> CartItem | None:
    return next((i for i in cart.items if i.part_id == part_id), None)


class CartService:
    """
    Use cases for the cart domain.
    commands (add, update, remove, clear, checkout) validate everything first and
    mutate only after all checks pass, so a failed command leaves the cart untouched.
    query (get) returns a snapshot.

    Carts are get-or-create: an unknown cart id is never an error.
    """

    def __init__(self, repo: CartRepo, catalog: CatalogService):
        self.repo = repo
        self.catalog = catalog

    #query
    def get_cart(self, cart_id: str) -> Cart:
        with self.repo.locked(cart_id) as cart:
            return cart.model_copy(deep=True)

    #commands
    def add_item(self, cart_id: str, part_id: int | None, quantity: int = 1) -> Cart:
        if part_id is None:
            raise InvalidInputError("Part ID is required")

        if quantity < 1:
            raise InvalidInputError("Quantity must be at least 1")

        part = self.catalog.get_part(part_id)

        if not part:
            raise NotFoundError("Part not found")

        if not part.in_stock:
            logger.warning(f"Part {part_id} is out of stock, cart {cart_id} not changed")
            raise InvalidStateError("Part is out of stock")

        with self.repo.locked(cart_id) as cart:
            existing_item = _find_item(cart, part_id)

            if existing_item:
                requested = existing_item.quantity + quantity
                if requested > part.stock_quantity:
                    logger.warning(
                        f"Cart {cart_id} asked for {requested} of part {part_id}, "
                        f"only {part.stock_quantity} available"
                    )
                    raise InsufficientStockError(part.stock_quantity, requested)

                logger.info(
                    f"Part {part_id} already in cart {cart_id}, quantity "
                    f"{existing_item.quantity} -> {requested}"
                )
                #price stays as captured when the line was added
                existing_item.quantity = requested
            else:
                if quantity > part.stock_quantity:
                    logger.warning(
                        f"Cart {cart_id} asked for {quantity} of part {part_id}, "
                        f"only {part.stock_quantity} available"
                    )
                    raise InsufficientStockError(part.stock_quantity, quantity)

                logger.info(f"Adding part {part_id} x{quantity} to cart {cart_id}")
                cart.items.append(
                    CartItem(
                        part_id=part.id,
                        name=part.name,
                        description=part.description,
                        manufacturer=part.manufacturer,
                        price=part.price,
                        quantity=quantity,
                        image_url=part.image_url,
                    )
                )

            recalculate_totals(cart)
            return cart.model_copy(deep=True)

    def update_item(self, cart_id: str, part_id: int, quantity: int | None) -> Cart:
        if quantity is None or quantity < 0:
            raise InvalidInputError("Valid quantity is required")

        with self.repo.locked(cart_id) as cart:
            item = _find_item(cart, part_id)

            if not item:
                raise NotFoundError("Item not found in cart")

            #a part dropped from the catalog has no stock ceiling to check
            part = self.catalog.get_part(part_id)

            if part and quantity > part.stock_quantity:
                logger.warning(
                    f"Cart {cart_id} asked for {quantity} of part {part_id}, "
                    f"only {part.stock_quantity} available"
                )
                raise InsufficientStockError(part.stock_quantity, quantity)

            if quantity == 0:
                logger.info(f"Quantity 0 for part {part_id}, removing it from cart {cart_id}")
                cart.items.remove(item)
            else:
                logger.info(f"Setting part {part_id} quantity to {quantity} in cart {cart_id}")
                item.quantity = quantity

            recalculate_totals(cart)
            return cart.model_copy(deep=True)

    def remove_item(self, cart_id: str, part_id: int) -> Cart:
        with self.repo.locked(cart_id) as cart:
            item = _find_item(cart, part_id)

            if not item:
                raise NotFoundError("Item not found in cart")

            logger.info(f"Removing part {part_id} from cart {cart_id}")
            cart.items.remove(item)

            recalculate_totals(cart)
            return cart.model_copy(deep=True)

    def clear_cart(self, cart_id: str) -> Cart:
        with self.repo.locked(cart_id) as cart:
            logger.info(f"Clearing cart {cart_id} ({len(cart.items)} lines)")
            cart.items = []

            recalculate_totals(cart)
            return cart.model_copy(deep=True)

    def checkout(self, cart_id: str) -> Tuple[Order, Cart]:
        """
        Snapshot the cart into an order and empty it, under one lock.
        Payment is not processed; the order is returned and not stored.
        """
        with self.repo.locked(cart_id) as cart:
            if not cart.items:
                raise InvalidStateError("Cart is empty")

            order_date = datetime.now(timezone.utc)
            order = Order(
                order_id=f"ORD-{int(order_date.timestamp() * 1000)}",
                items=[i.model_copy() for i in cart.items],
                total_items=cart.total_items,
                total_price=cart.total_price,
                order_date=order_date,
                status="confirmed",
            )

            cart.items = []
            recalculate_totals(cart)

            logger.info(
                f"Order {order.order_id} placed from cart {cart_id}: "
                f"{order.total_items} items, total {order.total_price}"
            )
            return order, cart.model_copy(deep=True)
