from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_external_id(self, external_id: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.external_id == external_id)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_contact(self, user_id: int, address: str, phone: str) -> int:
        # update po id, bez ladowania wygaszonego obiektu
        result = self.db.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(address=address, phone=phone)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
