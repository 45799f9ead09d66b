# storefront/repositories/product.py

from sqlalchemy import case, func, update
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.utils.database import id_in_range
from storefront.models.product import Product, Image, Comment, Collection


class ProductRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, id: int) -> Product | None:
        if not id_in_range(id):
            return None
        return await self.db.get(Product, id)

    async def list_all(self) -> list[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def list_by_ids(self, ids: list[int]) -> list[Product]:
        if not ids:
            return []
        result = await self.db.execute(select(Product).where(Product.id.in_(ids)))
        return list(result.scalars().all())

    async def list_by_collection(self, collection_name: str) -> list[Product]:
        result = await self.db.execute(
            select(Product).where(Product.collection_name == collection_name).order_by(Product.id)
        )
        return list(result.scalars().all())

    async def sample(self, size: int) -> list[Product]:
        result = await self.db.execute(select(Product).order_by(func.random()).limit(size))
        return list(result.scalars().all())

    def add(self, product: Product) -> Product:
        self.db.add(product)
        return product

    async def adjust_quantity(self, id: int, delta: int) -> int | None:
        """
        Меняет остаток на delta одним UPDATE, результат не уходит ниже нуля.
        Возвращает новый остаток или None, если товара нет.
        """
        new_quantity = Product.quantity + delta
        result = await self.db.execute(
            update(Product)
            .where(Product.id == id)
            .values(quantity=case((new_quantity < 0, 0), else_=new_quantity))
            .returning(Product.quantity)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()


class ImageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def for_owner(self, owner_id: int) -> list[Image]:
        result = await self.db.execute(select(Image).where(Image.owner_id == owner_id).order_by(Image.id))
        return list(result.scalars().all())

    async def for_owners(self, owner_ids: list[int]) -> dict[int, list[Image]]:
        grouped = {owner_id: [] for owner_id in owner_ids}
        if not owner_ids:
            return grouped
        result = await self.db.execute(
            select(Image).where(Image.owner_id.in_(owner_ids)).order_by(Image.id)
        )
        for image in result.scalars().all():
            grouped[image.owner_id].append(image)
        return grouped

    async def representative_map(self, owner_ids: list[int]) -> dict[int, str]:
        """Первое найденное изображение каждого товара."""
        grouped = await self.for_owners(owner_ids)
        return {owner_id: images[0].image_url for owner_id, images in grouped.items() if images}

    def add_many(self, owner_id: int, urls: list[str], source: str = "PRDIMG") -> list[Image]:
        images = [Image(owner_id=owner_id, source=source, image_url=url) for url in urls]
        self.db.add_all(images)
        return images


class CommentRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def for_product(self, product_id: int) -> list[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.product_id == product_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())

    def add(self, comment: Comment) -> Comment:
        self.db.add(comment)
        return comment


class CollectionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, id: int) -> Collection | None:
        if not id_in_range(id):
            return None
        return await self.db.get(Collection, id)

    async def get_by_name(self, name: str) -> Collection | None:
        result = await self.db.execute(select(Collection).where(Collection.collection_name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Collection]:
        result = await self.db.execute(select(Collection).order_by(Collection.id))
        return list(result.scalars().all())

    def add(self, collection: Collection) -> Collection:
        self.db.add(collection)
        return collection
