# eshop/api/routers/health.py
from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    return {"status": "ok", "carts": request.app.state.cart_repo.count()}
