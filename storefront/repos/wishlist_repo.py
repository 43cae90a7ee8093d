from sqlalchemy import select, delete
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.wishlist import WishlistModel, WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_wishlist(self, user_id: int) -> WishlistModel | None:
        return self.db.execute(
            select(WishlistModel)
            .options(selectinload(WishlistModel.items).selectinload(WishlistItemModel.product))
            .where(WishlistModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_wishlist(self, wishlist: WishlistModel) -> WishlistModel:
        self.db.add(wishlist)
        self.db.flush()
        return wishlist

    def get_item(self, wishlist_id: int, product_id: int) -> WishlistItemModel | None:
        return self.db.execute(
            select(WishlistItemModel).where(
                WishlistItemModel.wishlist_id == wishlist_id,
                WishlistItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, wishlist_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(WishlistItemModel).where(
                WishlistItemModel.wishlist_id == wishlist_id,
                WishlistItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
