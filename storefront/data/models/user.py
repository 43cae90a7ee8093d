from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    # id uzytkownika u dostawcy tozsamosci (principal)
    external_id = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, default="")
    full_name = Column(String, nullable=False, default="")
    avatar_url = Column(String, nullable=True)

    # domyslne dane do wysylki, nadpisywane przy kazdym zamowieniu
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    orders = relationship("OrderModel", back_populates="user")
