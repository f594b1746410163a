from dataclasses import dataclass

from ..application.security import PasswordHasher, TokenIssuer
from ..application.services.contact_service import ContactService
from ..application.services.user_service import UserService
from ..application.validation import ValidationService
from ..domain.ports.persistence import PersistenceGateway
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    password_hasher: PasswordHasher
    token_issuer: TokenIssuer
    validation_service: ValidationService
    user_service: UserService
    contact_service: ContactService
