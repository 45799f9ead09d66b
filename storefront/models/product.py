# storefront/models/product.py

from sqlalchemy import Column, Integer, String, Text, Float, DateTime
from sqlalchemy.sql import func
from storefront.utils.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    product_id      = Column(String, unique=True, index=True)       # RAYA/2025/PRD/0001
    product_name    = Column(String, nullable=False)
    description     = Column(Text, nullable=True)
    collection_name = Column(String, index=True, nullable=False)
    normal_price    = Column(Float, nullable=False)
    offer_price     = Column(Float, nullable=True)
    actual_price    = Column(Float, nullable=True)
    quantity        = Column(Integer, default=0)                    # остаток на складе, >= 0
    material        = Column(String, nullable=True)
    size            = Column(String, nullable=True)


class Image(Base):
    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)

    owner_id  = Column(Integer, index=True, nullable=False)         # products.id
    source    = Column(String, default="PRDIMG")
    image_url = Column(Text, nullable=False)                        # base64 или URL


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)

    product_id = Column(Integer, index=True, nullable=False)
    user_id    = Column(String, nullable=False)
    rating     = Column(Integer, default=1)                         # 1..5
    likes      = Column(Integer, default=0)
    comment    = Column(Text, nullable=False)
    avatar     = Column(String, nullable=True)
    date       = Column(String, nullable=True)                      # дата от клиента
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Collection(Base):
    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, index=True)
    collection_name = Column(String, unique=True, nullable=False)
    description     = Column(Text, nullable=True)
