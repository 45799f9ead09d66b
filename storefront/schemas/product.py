# storefront/schemas/product.py

from typing import Any, List, Optional, Union
from pydantic import AliasChoices, Field
from storefront.schemas.base import CamelModel
from storefront.utils.database import MAX_ID

class ProductCreate(CamelModel):
    product_name: Optional[str] = None
    description: Optional[str] = None
    collection: Optional[str] = None
    normal_price: Optional[float] = None
    offer_price: Optional[float] = None
    actual_price: Optional[float] = None
    quantity: Optional[int] = Field(None, ge=0, le=MAX_ID)
    material: Optional[str] = None
    size: Optional[str] = None
    images: Optional[List[str]] = None

class Product(CamelModel):
    id: int
    product_id: str
    product_name: str
    description: Optional[str] = None
    collection_name: str
    normal_price: float
    offer_price: Optional[float] = None
    actual_price: Optional[float] = None
    quantity: int
    material: Optional[str] = None
    size: Optional[str] = None

class ProductListItem(Product):
    image_url: Optional[str] = None

class Image(CamelModel):
    id: int
    owner_id: int
    source: Optional[str] = None
    image_url: str

class ImageChange(CamelModel):
    image_url: Optional[str] = Field(None, validation_alias=AliasChoices("imageUrl", "imageURL", "image_url"))

# ────────────── Отзывы ──────────────
class CommentCreate(CamelModel):
    user_id: Optional[Union[str, int]] = None
    product_id: Optional[int] = None
    comment: Optional[str] = None
    rating: Optional[Any] = None    # может прийти строкой или мусором: нормализуем в сервисе
    avatar: Optional[str] = None
    date: Optional[str] = None

class Comment(CamelModel):
    id: int
    product_id: int
    user_id: str
    rating: int
    likes: int
    comment: str
    avatar: Optional[str] = None
    date: Optional[str] = None

# ────────────── Коллекции ──────────────
class CollectionCreate(CamelModel):
    collection_name: Optional[str] = None
    description: Optional[str] = None

class Collection(CamelModel):
    id: int
    collection_name: str
    description: Optional[str] = None
