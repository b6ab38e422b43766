"""Color registry - the hex-text-addressed surface over all collaborators.

ColorRegistry composes three independent capabilities:
- OwnershipLedger: create/destroy/transfer/rename over ColorLedger
- AccessControlled: a single administrative principal (AccessControl)
- UpgradeGated: a one-way UpgradeLock consulted by the UpgradeDelegate

Every public entry point that takes hex text decodes it first, so
InvalidFormatError surfaces before anything else runs. Every mutating
operation runs in a Journal transaction: any failure, including one raised
by a reentrant call or a receiver, reverts all ledger, treasury, lock and
event effects of the operation.

Ordering inside create/transfer: ledger effects first, then the
notification check. A receiver that calls back in sees the new owner and
name already in place and is subject to the same guards as any caller.

Usage:
    registry = ColorRegistry(principal="deployer")
    price = registry.required_payment("FF8000")
    registry.create("ff8000", "Tangerine", caller="alice", payment=price)
    registry.owner_of("FF8000")   # "alice"
    registry.render("FF8000")     # "data:application/json;base64,..."
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Protocol, runtime_checkable, TYPE_CHECKING

from . import codec
from .access_control import AccessControl
from .constants import DEFAULT_REGISTRY_ID, EVENT_RENAMED, EVENT_TRANSFER, NO_PRINCIPAL
from .errors import (
    AlreadyExistsError,
    InsufficientPaymentError,
    InvalidTargetError,
    NameTooLongError,
    NotOwnerError,
    RegistryError,
)
from .events import RegistryEvents
from .journal import Journal
from .ledger import ColorEntry, ColorLedger
from .logger import EventLogger
from .notifications import ReceiverDirectory
from .pricing import PricingPolicy, Tier
from .renderer import DEFAULT_DESCRIPTION, MetadataRenderer
from .treasury import PayoutChannel, Treasury
from .upgrade import UpgradeDelegate, UpgradeLock

if TYPE_CHECKING:
    from ..config_schema import AppConfig


logger = logging.getLogger(__name__)


@runtime_checkable
class OwnershipLedger(Protocol):
    """Transferable single-owner ledger addressed by hex text."""

    def owner_of(self, hex_text: str) -> str: ...

    def balance_of(self, principal_id: str) -> int: ...

    def transfer(self, hex_text: str, new_owner: str, *, caller: str) -> None: ...


class ColorRegistry:
    """Owner/name registry over the 24-bit color space."""

    registry_id: str
    pricing: PricingPolicy
    max_name_length: int | None
    enforce_name_on_rename: bool

    def __init__(
        self,
        principal: str,
        *,
        registry_id: str = DEFAULT_REGISTRY_ID,
        pricing: PricingPolicy | None = None,
        max_name_length: int | None = 24,
        enforce_name_on_rename: bool = True,
        description: str = DEFAULT_DESCRIPTION,
        receivers: ReceiverDirectory | None = None,
        payouts: PayoutChannel | None = None,
        event_logger: EventLogger | None = None,
        initial_version: str = "1",
    ) -> None:
        """Initialize an empty registry.

        Args:
            principal: Initial administrative principal
            registry_id: The registry's own id; transfers to it are refused
            pricing: Tier pricing (defaults to PricingPolicy())
            max_name_length: Longest permitted name, None for unbounded
            enforce_name_on_rename: Apply max_name_length to rename too
            description: Static description embedded in documents
            receivers: Notification collaborator for programmable accounts
            payouts: Outward payment channel used by withdraw
            event_logger: Optional JSONL sink for committed events
            initial_version: Implementation version active at deployment
        """
        self.registry_id = registry_id
        self.pricing = pricing if pricing is not None else PricingPolicy()
        self.max_name_length = max_name_length
        self.enforce_name_on_rename = enforce_name_on_rename

        self.journal = Journal()
        self.events = RegistryEvents(self.journal, event_logger)
        self.ledger = ColorLedger(self.journal)
        self.access = AccessControl(principal, self.events)
        self.lock = UpgradeLock(self.access, self.events)
        self.upgrades = UpgradeDelegate(self.lock, self.access, self.events, initial_version)
        self.treasury = Treasury(self.access, self.events, payouts)
        self.receivers = receivers if receivers is not None else ReceiverDirectory()
        self.renderer = MetadataRenderer(self.ledger, description)

    @classmethod
    def from_config(
        cls,
        config: AppConfig | None = None,
        *,
        principal: str | None = None,
        receivers: ReceiverDirectory | None = None,
        payouts: PayoutChannel | None = None,
        event_logger: EventLogger | None = None,
        run_id: str | None = None,
    ) -> ColorRegistry:
        """Create a registry from the validated config.

        Args:
            config: Validated config (defaults to the loaded global config)
            principal: Overrides registry.principal from config
            run_id: When given (and no event_logger), committed events go to
                logging.logs_dir/{run_id}/events.jsonl
        """
        if config is None:
            from ..config import get_validated_config
            config = get_validated_config()

        if event_logger is None and run_id:
            event_logger = EventLogger(logs_dir=config.logging.logs_dir, run_id=run_id)

        return cls(
            principal or config.registry.principal,
            registry_id=config.registry.registry_id,
            pricing=PricingPolicy.from_config(config.pricing),
            max_name_length=config.names.max_length,
            enforce_name_on_rename=config.names.enforce_on_rename,
            description=config.registry.description,
            receivers=receivers,
            payouts=payouts,
            event_logger=event_logger,
            initial_version=config.registry.initial_version,
        )

    # ========== Internals ==========

    @contextmanager
    def _operation(self, action: str, **context: Any) -> Iterator[None]:
        """Run one mutating operation as a transaction, logging failures."""
        try:
            with self.journal.transaction():
                yield
        except RegistryError as e:
            logger.warning("%s failed [%s]: %s %s", action, e.code.value, e.message, context)
            raise
        logger.debug("%s committed %s", action, context)

    def _require_owner(self, token_id: int, caller: str) -> str:
        owner = self.ledger.owner_of(token_id)
        if caller != owner:
            raise NotOwnerError(
                f"{caller} does not own color {codec.encode(token_id)}",
                token_id=token_id,
                caller=caller,
            )
        return owner

    def _check_name(self, name: str, *, bounded: bool = True) -> None:
        """Names are always text; the length bound applies when bounded."""
        if not isinstance(name, str):
            raise TypeError(f"name must be a str, got {type(name).__name__}")
        if bounded and self.max_name_length is not None and len(name) > self.max_name_length:
            raise NameTooLongError(
                f"Name is {len(name)} characters, limit is {self.max_name_length}",
                length=len(name),
                limit=self.max_name_length,
            )

    # ========== Codec pass-throughs ==========

    @staticmethod
    def decode(hex_text: str) -> int:
        return codec.decode(hex_text)

    @staticmethod
    def encode(token_id: int) -> str:
        return codec.encode(token_id)

    # ========== Ledger mutations ==========

    def create(self, hex_text: str, name: str, *, caller: str, payment: int = 0) -> int:
        """Create an entry owned by caller.

        Returns:
            The decoded identifier.

        Raises:
            InvalidFormatError: Malformed hex text
            AlreadyExistsError: The entry already has an owner
            InsufficientPaymentError: payment below the identifier's tier
            NameTooLongError: name exceeds the length bound
            InvalidTargetError: caller is the empty principal
            NotificationRejectedError: A programmable caller refused the entry
        """
        token_id = codec.decode(hex_text)
        with self._operation("create", token_id=token_id, caller=caller):
            if self.ledger.exists(token_id):
                raise AlreadyExistsError(
                    f"Color {codec.encode(token_id)} already exists",
                    token_id=token_id,
                )
            required = self.pricing.required_payment(token_id)
            if payment < required:
                raise InsufficientPaymentError(
                    f"Color {codec.encode(token_id)} requires {required}, got {payment}",
                    token_id=token_id,
                    required=required,
                    payment=payment,
                )
            self._check_name(name)
            if caller == NO_PRINCIPAL:
                raise InvalidTargetError("Cannot create a color for the empty principal")

            self.treasury.credit(payment)
            self.ledger.set_owner(token_id, caller)
            self.events.emit(
                EVENT_TRANSFER, from_id=NO_PRINCIPAL, to_id=caller, token_id=token_id
            )
            self.ledger.set_name(token_id, name)

            # Effects are in place; the receiver may now re-enter
            self.receivers.check(caller, NO_PRINCIPAL, caller, token_id)
        return token_id

    def destroy(self, hex_text: str, *, caller: str) -> None:
        """Destroy an entry. Clears the name, then the owner.

        Raises:
            InvalidFormatError: Malformed hex text
            NotFoundError: The entry doesn't exist
            NotOwnerError: caller is not the owner
        """
        token_id = codec.decode(hex_text)
        with self._operation("destroy", token_id=token_id, caller=caller):
            owner = self._require_owner(token_id, caller)
            self.ledger.clear_name(token_id)
            self.ledger.clear_owner(token_id)
            self.events.emit(
                EVENT_TRANSFER, from_id=owner, to_id=NO_PRINCIPAL, token_id=token_id
            )

    def transfer(self, hex_text: str, new_owner: str, *, caller: str) -> None:
        """Hand an entry to a new owner. The name is untouched.

        Raises:
            InvalidFormatError: Malformed hex text
            NotFoundError: The entry doesn't exist
            NotOwnerError: caller is not the owner
            InvalidTargetError: new_owner is the registry itself or empty
            NotificationRejectedError: A programmable new_owner refused the entry
        """
        token_id = codec.decode(hex_text)
        with self._operation("transfer", token_id=token_id, caller=caller, to_id=new_owner):
            owner = self._require_owner(token_id, caller)
            if new_owner == NO_PRINCIPAL or new_owner == self.registry_id:
                raise InvalidTargetError(
                    f"Cannot transfer color {codec.encode(token_id)} to {new_owner!r}",
                    token_id=token_id,
                    to_id=new_owner,
                )

            self.ledger.set_owner(token_id, new_owner)
            self.events.emit(
                EVENT_TRANSFER, from_id=owner, to_id=new_owner, token_id=token_id
            )

            self.receivers.check(caller, owner, new_owner, token_id)

    def rename(self, hex_text: str, new_name: str, *, caller: str) -> None:
        """Change an entry's name.

        Raises:
            InvalidFormatError: Malformed hex text
            NotFoundError: The entry doesn't exist
            NotOwnerError: caller is not the owner
            NameTooLongError: new_name exceeds the bound (when enforced on rename)
        """
        token_id = codec.decode(hex_text)
        with self._operation("rename", token_id=token_id, caller=caller):
            self._require_owner(token_id, caller)
            self._check_name(new_name, bounded=self.enforce_name_on_rename)
            old_name = self.ledger.set_name(token_id, new_name)
            self.events.emit(
                EVENT_RENAMED, token_id=token_id, old_name=old_name, new_name=new_name
            )

    # ========== Ledger reads ==========

    def exists(self, hex_text: str) -> bool:
        return self.ledger.exists(codec.decode(hex_text))

    def owner_of(self, hex_text: str) -> str:
        """Owner of an entry. Raises NotFoundError if it doesn't exist."""
        return self.ledger.owner_of(codec.decode(hex_text))

    def name_of(self, hex_text: str) -> str:
        """Name of an entry. Raises NotFoundError if it doesn't exist."""
        return self.ledger.name_of(codec.decode(hex_text))

    def entry(self, hex_text: str) -> ColorEntry | None:
        return self.ledger.get_entry(codec.decode(hex_text))

    def balance_of(self, principal_id: str) -> int:
        return self.ledger.balance_of(principal_id)

    def total_supply(self) -> int:
        return self.ledger.total_supply()

    def colors_of(self, principal_id: str) -> list[str]:
        """Canonical hex of every entry a principal owns."""
        return [codec.encode(tid) for tid in self.ledger.ids_owned_by(principal_id)]

    def required_payment(self, hex_text: str) -> int:
        return self.pricing.required_payment(codec.decode(hex_text))

    def tier_of(self, hex_text: str) -> Tier:
        return self.pricing.tier_of(codec.decode(hex_text))

    # ========== Metadata ==========

    def render(self, hex_text: str) -> str:
        """Metadata document (JSON data URI) for an existing entry."""
        return self.renderer.render(codec.decode(hex_text))

    def token_uri(self, hex_text: str) -> str:
        return self.render(hex_text)

    # ========== Administration ==========

    def current_principal(self) -> str:
        return self.access.current_principal()

    def is_principal(self, caller: str) -> bool:
        return self.access.is_principal(caller)

    def transfer_principal(self, caller: str, new_principal: str) -> None:
        with self._operation("transfer_principal", caller=caller, to_id=new_principal):
            self.access.transfer_principal(caller, new_principal)

    def is_locked(self) -> bool:
        return self.lock.is_locked()

    def lock_upgrades(self, caller: str) -> None:
        """Permanently forbid implementation upgrades."""
        with self._operation("lock_upgrades", caller=caller):
            self.lock.set_locked(caller)

    def upgrade_to(self, caller: str, version: str) -> None:
        with self._operation("upgrade_to", caller=caller, version=version):
            self.upgrades.upgrade_to(caller, version)

    @property
    def version(self) -> str:
        return self.upgrades.version

    def receive(self, sender: str, amount: int) -> None:
        """Accept a plain deposit."""
        with self._operation("receive", sender=sender, amount=amount):
            self.treasury.receive(sender, amount)

    def withdraw(self, caller: str) -> int:
        """Pay the held balance to the principal. Returns the amount."""
        with self._operation("withdraw", caller=caller):
            amount = self.treasury.withdraw(caller)
        return amount

    @property
    def balance(self) -> int:
        """Funds currently held by the registry."""
        return self.treasury.balance
