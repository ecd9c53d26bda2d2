import logging
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from parking_booking.config import Config
from parking_booking.database import Store
from parking_booking.errors import NotFoundError, InvalidStateError, StoreFailureError
from parking_booking.schemas.parking_schemas import UserResponse

logger = logging.getLogger(__name__)

# Mock authentication: no passwords are checked, every request acts as the demo user
# unless a user id is passed explicitly.


class UserController:
    @staticmethod
    def get_current_user(store: Store) -> UserResponse:
        query = text("SELECT id, email, name FROM users WHERE email = :email")
        user = store.fetch_one(query, {"email": Config.DEMO_USER_EMAIL})
        if user:
            return UserResponse(**user._mapping)

        logger.info(f"Creating demo user {Config.DEMO_USER_EMAIL}")
        return UserController.register(store, Config.DEMO_USER_EMAIL, Config.DEMO_USER_NAME)

    @staticmethod
    def login(store: Store, email: str) -> UserResponse:
        query = text("SELECT id, email, name FROM users WHERE email = :email")
        user = store.fetch_one(query, {"email": email.strip().lower()})
        if not user:
            raise NotFoundError(f"No user registered with email '{email}'.")
        return UserResponse(**user._mapping)

    @staticmethod
    def register(store: Store, email: str, name: str) -> UserResponse:
        query_insert_user = text("""
            INSERT INTO users (email, name, password_hash)
            VALUES (:email, :name, :password_hash)
            RETURNING id, email, name
        """)
        try:
            with store.transaction() as session:
                user = session.execute(query_insert_user, {
                    "email": email.strip().lower(),
                    "name": name.strip(),
                    "password_hash": Config.PLACEHOLDER_PASSWORD_HASH,
                }).fetchone()
        except IntegrityError as e:
            raise InvalidStateError(f"A user with email '{email}' already exists.") from e
        except SQLAlchemyError as e:
            logger.error(f"Store failure while registering {email}: {e}")
            raise StoreFailureError(f"Internal error while registering user: {e}") from e

        logger.info(f"Registered user {user.id} ({user.email})")
        return UserResponse(**user._mapping)
