# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin, get_image_client, get_order_service, to_http, unwrap
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import ActionResult, ProductOut, ProductUpdate
from storefront.services.image_client import ImageClient
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(
    name: str = Form(...),
    description: str = Form(""),
    price: str = Form(...),
    stock: int = Form(...),
    category: str = Form(...),
    sizes: List[str] = Form([]),
    images: List[UploadFile] = File([]),
    db: Session = Depends(get_db),
    image_client: ImageClient = Depends(get_image_client),
):
    svc = ProductService(db, image_client=image_client)
    uploads = [(f.file.read(), f.filename or "image") for f in images]
    try:
        return svc.create_product(
            name=name,
            description=description,
            price=price,
            stock=stock,
            category=category,
            sizes=sizes,
            images=uploads,
        )
    except ServiceError as e:
        raise to_http(e)


@router.patch("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
):
    svc = ProductService(db)
    try:
        return svc.update_product(product_id, **payload.model_dump(exclude_unset=True))
    except ServiceError as e:
        raise to_http(e)


@router.get("/orders", response_model=ActionResult)
def all_orders(svc: OrderService = Depends(get_order_service)):
    return unwrap(svc.get_all_orders())


@router.post("/orders/{order_id}/deliver", response_model=ActionResult)
def mark_delivered(order_id: int, svc: OrderService = Depends(get_order_service)):
    return unwrap(svc.mark_order_delivered(order_id))
