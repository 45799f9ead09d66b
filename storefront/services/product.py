# storefront/services/product.py

from urllib.parse import quote
from fastapi import HTTPException, Request

from storefront.config import settings
from storefront.models.product import Product as ProductModel, Comment as CommentModel, Collection as CollectionModel
from storefront.repositories.product import ProductRepository, ImageRepository, CommentRepository, CollectionRepository
from storefront.schemas.product import ProductCreate, CommentCreate, ImageChange, CollectionCreate
from storefront.utils.sequence import next_code, PRODUCT

MIN_RATING = 1
MAX_RATING = 5


def clamp_rating(value) -> int:
    """
    Оценка в диапазоне 1..5. Пустое или нечисловое значение даёт 1.
    """
    try:
        number = float(value) if value not in (None, "") else 0
    except (TypeError, ValueError):
        number = 0
    except OverflowError:
        # целое вне диапазона float
        number = MAX_RATING if value > 0 else MIN_RATING
    if number != number:  # NaN
        number = 0
    return int(min(max(number, MIN_RATING), MAX_RATING))


def default_avatar(user_id: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(str(user_id), safe='')}&background=random"


def _with_image(product: ProductModel, image_url: str | None) -> dict:
    data = {c.name: getattr(product, c.name) for c in ProductModel.__table__.columns}
    data["image_url"] = image_url
    return data


async def _get_product_or_404(id: int, request: Request) -> ProductModel:
    db_product = await ProductRepository(request.state.db).get(id)
    if db_product is None:
        await request.app.state.log.log_error("product", "Товар не найден", {"id": id})
        raise HTTPException(status_code=404, detail="Product not found")
    return db_product


async def create_product_service(product: ProductCreate, request: Request) -> ProductModel:
    """
    Создание товара вместе с изображениями.
    """
    db = request.state.db
    log = request.app.state.log

    if not product.product_name or not product.collection or product.normal_price is None or product.quantity is None:
        raise HTTPException(status_code=400, detail="Please fill all required fields")
    if not product.images:
        raise HTTPException(status_code=400, detail="At least one image is required")

    product_code = await next_code(db, PRODUCT)

    db_product = ProductRepository(db).add(ProductModel(
        product_id=product_code,
        product_name=product.product_name,
        description=product.description,
        collection_name=product.collection,
        normal_price=product.normal_price,
        offer_price=product.offer_price,
        actual_price=product.actual_price,
        quantity=product.quantity,
        material=product.material or None,
        size=product.size or None,
    ))
    await db.flush()
    ImageRepository(db).add_many(db_product.id, product.images)
    await db.commit()

    request.app.state.notifier.send("PRDAD", {
        "product_id": db_product.product_id,
        "product_name": db_product.product_name,
        "qty": db_product.quantity,
        "price": db_product.offer_price,
    })
    await log.log_info("product", "Товар создан", {"product_id": product_code, "images": len(product.images)})
    return db_product


async def read_products_service(request: Request) -> list[dict]:
    """Все товары с главным изображением."""
    db = request.state.db

    products = await ProductRepository(db).list_all()
    images = await ImageRepository(db).representative_map([p.id for p in products])

    await request.app.state.log.log_info("product", f"{len(products)} товаров загружено")
    return [_with_image(p, images.get(p.id)) for p in products]


async def read_product_service(id: int, request: Request) -> tuple[ProductModel, list]:
    db_product = await _get_product_or_404(id, request)
    images = await ImageRepository(request.state.db).for_owner(db_product.id)
    return db_product, images


async def random_products_service(request: Request, size: int | None = None) -> list[dict]:
    db = request.state.db

    products = await ProductRepository(db).sample(size or settings.RANDOM_SAMPLE_SIZE)
    images = await ImageRepository(db).representative_map([p.id for p in products])
    return [_with_image(p, images.get(p.id)) for p in products]


async def collection_products_service(collection_id: int, request: Request) -> tuple[CollectionModel, list]:
    """
    Товары коллекции, у каждого свой полный список изображений.
    """
    db = request.state.db
    log = request.app.state.log

    collection = await CollectionRepository(db).get(collection_id)
    if collection is None:
        await log.log_error("product", "Коллекция не найдена", {"id": collection_id})
        raise HTTPException(status_code=404, detail="Collection not found")

    products = await ProductRepository(db).list_by_collection(collection.collection_name)
    images = await ImageRepository(db).for_owners([p.id for p in products])
    return collection, [(p, images.get(p.id, [])) for p in products]


async def post_comment_service(comment: CommentCreate, request: Request) -> CommentModel:
    """
    Отзыв о товаре. Оценка приводится к 1..5, лайки начинаются с нуля,
    без аватара подставляется сгенерированный по user_id.
    """
    db = request.state.db
    log = request.app.state.log

    if comment.user_id in (None, ""):
        raise HTTPException(status_code=400, detail="User ID is required")
    if not comment.comment or not comment.comment.strip():
        raise HTTPException(status_code=400, detail="Comment text is required")
    if comment.product_id is None:
        raise HTTPException(status_code=400, detail="Product ID is required")

    db_product = await _get_product_or_404(comment.product_id, request)

    user_id = str(comment.user_id)
    db_comment = CommentRepository(db).add(CommentModel(
        product_id=db_product.id,
        user_id=user_id,
        rating=clamp_rating(comment.rating),
        likes=0,
        comment=comment.comment.strip(),
        avatar=comment.avatar or default_avatar(user_id),
        date=comment.date,
    ))
    await db.commit()

    request.app.state.notifier.send("CMTPST", {"user_id": user_id, "product_id": db_product.product_id})
    await log.log_info("product", "Отзыв добавлен", {"product_id": db_product.id, "rating": db_comment.rating})
    return db_comment


async def read_comments_service(product_id: int, request: Request) -> list[CommentModel]:
    """Отзывы товара, новые сверху."""
    await _get_product_or_404(product_id, request)
    return await CommentRepository(request.state.db).for_product(product_id)


async def change_image_service(id: int, change: ImageChange, request: Request) -> None:
    """Добавляет товару ещё одно изображение (старые не удаляются)."""
    db = request.state.db

    db_product = await _get_product_or_404(id, request)
    if not change.image_url:
        raise HTTPException(status_code=400, detail="Image is required")

    ImageRepository(db).add_many(db_product.id, [change.image_url])
    await db.commit()
    await request.app.state.log.log_info("product", "Изображение добавлено", {"id": id})


async def create_collection_service(collection: CollectionCreate, request: Request) -> CollectionModel:
    db = request.state.db
    repo = CollectionRepository(db)

    if not collection.collection_name:
        raise HTTPException(status_code=400, detail="Collection name is required")
    if await repo.get_by_name(collection.collection_name) is not None:
        raise HTTPException(status_code=400, detail="Collection already exists")

    db_collection = repo.add(CollectionModel(
        collection_name=collection.collection_name,
        description=collection.description,
    ))
    await db.commit()
    await request.app.state.log.log_info("product", "Коллекция создана", {"id": db_collection.id})
    return db_collection


async def read_collections_service(request: Request) -> list[CollectionModel]:
    return await CollectionRepository(request.state.db).list_all()
