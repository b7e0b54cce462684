"""Per-user profile: role, ban flag and payout details."""

from __future__ import annotations

from dataclasses import dataclass, field

from radium.domain.model.entity import Entity
from radium.domain.model.enums import UserRole


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True)
class PayoutDetails:
    """Where royalties are paid out. Every field is optional."""

    paypal_email: str | None = None
    bank_account_iban: str | None = None
    bank_account_swift: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "paypal_email", _blank_to_none(self.paypal_email))
        object.__setattr__(self, "bank_account_iban", _blank_to_none(self.bank_account_iban))
        object.__setattr__(self, "bank_account_swift", _blank_to_none(self.bank_account_swift))

    @property
    def is_empty(self) -> bool:
        return not (self.paypal_email or self.bank_account_iban or self.bank_account_swift)

    def __composite_values__(self) -> tuple[str | None, str | None, str | None]:
        """Return values in a shape suitable for SQLAlchemy composite columns."""
        return (self.paypal_email, self.bank_account_iban, self.bank_account_swift)


@dataclass(eq=False, kw_only=True)
class Profile(Entity):
    """Public profile row. The id is owned by the identity provider."""

    username: str
    role: UserRole = UserRole.USER
    is_banned: bool = False
    payout: PayoutDetails = field(default_factory=PayoutDetails)

    def __post_init__(self) -> None:
        self.username = _require_username(self.username)

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def rename(self, username: str) -> None:
        self.username = _require_username(username)

    def ban(self) -> None:
        self.is_banned = True

    def unban(self) -> None:
        self.is_banned = False

    def update_payouts(self, details: PayoutDetails) -> None:
        self.payout = details


def _require_username(username: str) -> str:
    cleaned = username.strip()
    if not cleaned:
        raise ValueError("username must not be blank")
    return cleaned
