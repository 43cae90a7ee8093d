from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.repos.user_repo import UserRepo
from storefront.domain.errors import NotAuthenticated, UserNotFound, InvalidInput
from storefront.domain.schemas import UserRead
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def resolve_user(repo: UserRepo, principal_id: str | None) -> UserModel:
    """Principal z granicy (naglowek) -> rekord usera. Wolane raz na poczatku use case."""
    if not principal_id:
        raise NotAuthenticated()
    user = repo.get_by_external_id(principal_id)
    if not user:
        raise UserNotFound()
    return user


def _full_name(data: dict) -> str:
    return f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip()


def _primary_email(data: dict) -> str | None:
    addresses = data.get("email_addresses") or []
    if not addresses:
        return None
    return addresses[0].get("email_address") or None


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def handle_identity_event(self, event_type: str, data: dict) -> str:
        """
        user.created -> upsert po principal id
        user.updated -> update email/imie/avatar
        inne typy ignorujemy
        """
        external_id = data.get("id")

        if event_type == "user.created":
            if not external_id:
                raise InvalidInput("Event payload has no user id")
            existing = self.repo.get_by_external_id(external_id)
            if existing:
                logger.info(f"User {external_id} already exists, updating from user.created")
                self._apply(existing, data)
                self.repo.save(existing)
                return "User has been created!"

            user = UserModel(external_id=external_id, email="", full_name="")
            self._apply(user, data)
            created = self.repo.create_user(user)
            logger.info(f"Created user {created.id} for principal {external_id}")
            return "User has been created!"

        if event_type == "user.updated":
            if not external_id:
                raise InvalidInput("Event payload has no user id")
            user = self.repo.get_by_external_id(external_id)
            if not user:
                raise UserNotFound()
            self._apply(user, data)
            self.repo.save(user)
            logger.info(f"Updated user {user.id} for principal {external_id}")
            return "User has been updated!"

        logger.info(f"Ignoring identity event {event_type}")
        return "Webhook received"

    @staticmethod
    def _apply(user: UserModel, data: dict):
        user.full_name = _full_name(data)
        user.avatar_url = data.get("image_url")
        email = _primary_email(data)
        #przy update brak maila nie kasuje istniejacego
        if email is not None:
            user.email = email

    def get_profile(self, principal_id: str | None) -> UserRead:
        user = resolve_user(self.repo, principal_id)
        return UserRead.model_validate(user)

    def get_default_address(self, principal_id: str | None) -> str:
        user = resolve_user(self.repo, principal_id)
        return user.address or ""

    def set_default_address(self, principal_id: str | None, address: str) -> str:
        user = resolve_user(self.repo, principal_id)

        if not address or not address.strip():
            raise InvalidInput("Address is required")

        user.address = address.strip()
        self.repo.save(user)
        return user.address
