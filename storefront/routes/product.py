# storefront/routes/product.py

from fastapi import APIRouter, HTTPException, Request, status
from typing import List
from storefront.schemas.base import MessageResponse
from storefront.schemas.product import (
    Product,
    ProductCreate,
    ProductListItem,
    Image,
    ImageChange,
    Comment,
    CommentCreate,
    Collection,
    CollectionCreate,
)
from storefront.services.product import (
    create_product_service,
    read_products_service,
    read_product_service,
    random_products_service,
    collection_products_service,
    post_comment_service,
    read_comments_service,
    change_image_service,
    create_collection_service,
    read_collections_service,
)

router = APIRouter()


def _dump(model, obj) -> dict:
    return model.model_validate(obj).model_dump(by_alias=True)


# ────────────── CREATE ──────────────
@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    summary="Создать товар с изображениями",
    responses={
        201: {"description": "Товар создан"},
        400: {"description": "Не заполнены обязательные поля или нет изображений"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def create_product(request: Request, product: ProductCreate):
    try:
        db_product = await create_product_service(product, request)
        return {
            "message": "Product created successfully",
            "productId": db_product.product_id,
            "images": product.images,
        }
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при создании товара: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── READ ALL ──────────────
@router.get(
    "/get/all",
    status_code=status.HTTP_200_OK,
    summary="Все товары с главным изображением",
    responses={
        200: {"description": "Список товаров"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_all_products(request: Request):
    try:
        products = await read_products_service(request)
        return {"products": [_dump(ProductListItem, p) for p in products]}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при получении списка товаров: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── RANDOM ──────────────
@router.get(
    "/get/random/product",
    status_code=status.HTTP_200_OK,
    summary="Случайная выборка товаров",
    responses={
        200: {"description": "Случайные товары с главным изображением"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_random_products(request: Request):
    try:
        products = await random_products_service(request)
        return {"products": [_dump(ProductListItem, p) for p in products]}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при выборке случайных товаров: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── COLLECTION PRODUCTS ──────────────
@router.get(
    "/get/collection/product/{id}",
    status_code=status.HTTP_200_OK,
    summary="Товары коллекции",
    responses={
        200: {"description": "Коллекция и её товары с изображениями"},
        404: {"description": "Коллекция не найдена"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_collection_products(id: int, request: Request):
    try:
        collection, items = await collection_products_service(id, request)
        products = []
        for product, images in items:
            data = _dump(Product, product)
            data["images"] = [_dump(Image, i) for i in images]
            products.append(data)
        return {"collection": collection.collection_name, "products": products}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при получении товаров коллекции: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── COMMENTS ──────────────
@router.get(
    "/get/product/comments/{id}",
    status_code=status.HTTP_200_OK,
    summary="Отзывы о товаре",
    responses={
        200: {"description": "Отзывы, новые сверху"},
        404: {"description": "Товар не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_comments(id: int, request: Request):
    try:
        comments = await read_comments_service(id, request)
        return {"comments": [_dump(Comment, c) for c in comments]}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при получении отзывов: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post(
    "/post/product",
    status_code=status.HTTP_200_OK,
    summary="Оставить отзыв о товаре",
    responses={
        200: {"description": "Отзыв сохранён"},
        400: {"description": "Нет user ID, product ID или текста"},
        404: {"description": "Товар не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def post_comment(request: Request, comment: CommentCreate):
    try:
        db_comment = await post_comment_service(comment, request)
        return {
            "success": True,
            "message": "Comment posted successfully",
            "comment": _dump(Comment, db_comment),
        }
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при сохранении отзыва: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── IMAGE ──────────────
@router.put(
    "/change/image/{id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Добавить изображение товару",
    responses={
        200: {"description": "Изображение добавлено"},
        400: {"description": "Изображение не передано"},
        404: {"description": "Товар не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def change_image(id: int, change: ImageChange, request: Request):
    try:
        await change_image_service(id, change, request)
        return {"message": "Image Updated..."}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при добавлении изображения: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── COLLECTIONS ──────────────
@router.post(
    "/collection/create",
    response_model=Collection,
    status_code=status.HTTP_201_CREATED,
    summary="Создать коллекцию",
    responses={
        201: {"description": "Коллекция создана"},
        400: {"description": "Нет названия или коллекция уже есть"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def create_collection(request: Request, collection: CollectionCreate):
    try:
        return await create_collection_service(collection, request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при создании коллекции: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get(
    "/collection/all",
    response_model=List[Collection],
    status_code=status.HTTP_200_OK,
    summary="Список коллекций",
)
async def get_collections(request: Request):
    try:
        return await read_collections_service(request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при получении коллекций: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── READ ONE ──────────────
@router.get(
    "/get/{id}",
    status_code=status.HTTP_200_OK,
    summary="Товар по ID со всеми изображениями",
    responses={
        200: {"description": "Товар найден"},
        404: {"description": "Товар не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_product(id: int, request: Request):
    try:
        db_product, images = await read_product_service(id, request)
        return {"product": _dump(Product, db_product), "images": [_dump(Image, i) for i in images]}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при получении товара: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")
