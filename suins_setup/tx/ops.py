"""
Setup operations expressed against a programmable transaction.

`SetupBuilder` is the whole surface the orchestrator needs: four appends, each
returning an opaque handle the next append may consume. `PtbSetupBuilder`
lowers them onto a `TransactionBlock` using the Sui framework entry points.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .build import Argument, TransactionBlock

DISPLAY_NEW_WITH_FIELDS = "0x2::display::new_with_fields"
DISPLAY_UPDATE_VERSION = "0x2::display::update_version"
TRANSFER_POLICY_NEW = "0x2::transfer_policy::new"
PUBLIC_SHARE_OBJECT = "0x2::transfer::public_share_object"


class SetupBuilder(Protocol):
    def create_display(
        self, publisher: str, keys: Sequence[str], values: Sequence[str], item_type: str
    ) -> Any: ...

    def update_display_version(self, display: Any, item_type: str) -> Any: ...

    def create_transfer_policy(self, item_type: str, publisher: str) -> Any: ...

    def transfer_objects(self, objects: Sequence[Any], recipient: str) -> Any: ...


class PtbSetupBuilder:
    """SetupBuilder over a TransactionBlock."""

    def __init__(self, tx: TransactionBlock | None = None) -> None:
        self.tx = tx if tx is not None else TransactionBlock()

    def create_display(
        self, publisher: str, keys: Sequence[str], values: Sequence[str], item_type: str
    ) -> Argument:
        if len(keys) != len(values):
            raise ValueError("display keys and values must have the same length")
        return self.tx.move_call(
            DISPLAY_NEW_WITH_FIELDS,
            [self.tx.object(publisher), self.tx.pure(list(keys)), self.tx.pure(list(values))],
            type_arguments=[item_type],
        )

    def update_display_version(self, display: Argument, item_type: str) -> Argument:
        return self.tx.move_call(
            DISPLAY_UPDATE_VERSION, [display], type_arguments=[item_type]
        )

    def create_transfer_policy(self, item_type: str, publisher: str) -> Argument:
        """Create and share `TransferPolicy<item_type>`; return its cap."""
        created = self.tx.move_call(
            TRANSFER_POLICY_NEW, [self.tx.object(publisher)], type_arguments=[item_type]
        )
        policy, cap = created[0], created[1]
        self.tx.move_call(
            PUBLIC_SHARE_OBJECT,
            [policy],
            type_arguments=[f"0x2::transfer_policy::TransferPolicy<{item_type}>"],
        )
        return cap

    def transfer_objects(self, objects: Sequence[Argument], recipient: str) -> Argument:
        return self.tx.transfer_objects(list(objects), self.tx.pure(recipient, "address"))


__all__ = [
    "SetupBuilder",
    "PtbSetupBuilder",
    "DISPLAY_NEW_WITH_FIELDS",
    "DISPLAY_UPDATE_VERSION",
    "TRANSFER_POLICY_NEW",
    "PUBLIC_SHARE_OBJECT",
]
