# eshop/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Request

from eshop.domain.errors import NotFoundError, ServiceError
from eshop.domain.schemas import (
    AddItemIn,
    Cart,
    CartActionOut,
    CheckoutOut,
    UpdateItemIn,
)
from eshop.services.cart_service import CartService
from eshop.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/cart", tags=["cart"])


#a part id that is not a number cannot be in any cart
def _parse_part_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise NotFoundError("Item not found in cart")


def get_service(request: Request) -> CartService:
    return CartService(
        repo=request.app.state.cart_repo,
        catalog=CatalogService(request.app.state.catalog_reader),
    )


@router.get("/{cart_id}", response_model=Cart)
def get_cart(cart_id: str, svc: CartService = Depends(get_service)):
    return svc.get_cart(cart_id)


@router.post("/{cart_id}/add", response_model=CartActionOut)
def add_item(
    cart_id: str,
    payload: AddItemIn,
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.add_item(cart_id, payload.part_id, payload.quantity)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    return {"message": "Item added to cart successfully", "cart": cart}


@router.put("/{cart_id}/update/{part_id}", response_model=CartActionOut)
def update_item(
    cart_id: str,
    part_id: str,
    payload: UpdateItemIn,
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.update_item(cart_id, _parse_part_id(part_id), payload.quantity)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    return {"message": "Cart updated successfully", "cart": cart}


@router.delete("/{cart_id}/remove/{part_id}", response_model=CartActionOut)
def remove_item(
    cart_id: str,
    part_id: str,
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.remove_item(cart_id, _parse_part_id(part_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    return {"message": "Item removed from cart successfully", "cart": cart}


@router.delete("/{cart_id}/clear", response_model=CartActionOut)
def clear_cart(cart_id: str, svc: CartService = Depends(get_service)):
    return {"message": "Cart cleared successfully", "cart": svc.clear_cart(cart_id)}


@router.post("/{cart_id}/checkout", response_model=CheckoutOut)
def checkout(cart_id: str, svc: CartService = Depends(get_service)):
    try:
        order, cart = svc.checkout(cart_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    return {"message": "Order placed successfully", "order": order, "cart": cart}
