from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.wishlist import WishlistModel, WishlistItemModel
from storefront.domain.errors import AlreadyInWishlist, NotFound, ProductNotFound
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.services.user_service import resolve_user
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    def get_wishlist(self, principal_id: str | None) -> List[ProductModel]:
        user = resolve_user(self.users, principal_id)
        wishlist = self.repo.get_wishlist(user.id)
        if not wishlist:
            return []
        return [item.product for item in wishlist.items]

    def add_to_wishlist(self, principal_id: str | None, product_id: int) -> str:
        user = resolve_user(self.users, principal_id)

        product = self.products.get_product(product_id)
        if not product:
            raise ProductNotFound()

        try:
            wishlist = self.repo.get_wishlist(user.id)
            if not wishlist:
                wishlist = self.repo.create_wishlist(WishlistModel(user_id=user.id))

            if self.repo.get_item(wishlist.id, product.id):
                raise AlreadyInWishlist()

            self.repo.add_item(WishlistItemModel(wishlist_id=wishlist.id, product_id=product.id))
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Product {product_id} added to wishlist of user {user.id}")
        return "Added to wishlist"

    def remove_from_wishlist(self, principal_id: str | None, product_id: int) -> str:
        user = resolve_user(self.users, principal_id)

        wishlist = self.repo.get_wishlist(user.id)
        if not wishlist:
            raise NotFound("Wishlist not found")

        if self.repo.delete_item(wishlist.id, product_id) == 0:
            raise NotFound("Product not in wishlist")

        self.repo.commit()
        logger.info(f"Product {product_id} removed from wishlist of user {user.id}")
        return "Removed from wishlist"
