"""
suins_setup.tx.build
====================

A minimal programmable-transaction builder. It records inputs and an
append-only list of commands; it does not sign, select gas, or submit.

    tx = TransactionBlock()
    display = tx.move_call(
        "0x2::display::new_with_fields",
        [tx.object(publisher), tx.pure(keys), tx.pure(values)],
        type_arguments=[item_type],
    )
    tx.transfer_objects([display], tx.pure(admin, "address"))
    tx.to_dict()

Arguments returned by `object()`, `pure()` and `move_call()` are handles into
this block only; a `Result` handle can be indexed (`result[1]`) to address one
value of a multi-value Move return.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..address import normalize_sui_address

__all__ = [
    "Argument",
    "ObjectInput",
    "PureInput",
    "MoveCall",
    "TransferObjects",
    "Command",
    "TransactionBlock",
    "parse_target",
]


@dataclass(frozen=True)
class Argument:
    """Reference to a transaction input or to the output of an earlier command."""

    kind: str  # "Input" | "Result" | "NestedResult"
    index: int
    sub_index: Optional[int] = None

    def __getitem__(self, i: int) -> "Argument":
        if self.kind != "Result":
            raise TypeError(f"cannot index a {self.kind} argument")
        return Argument("NestedResult", self.index, int(i))

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == "NestedResult":
            return {"NestedResult": [self.index, self.sub_index]}
        return {self.kind: self.index}


@dataclass(frozen=True)
class ObjectInput:
    object_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "object", "objectId": self.object_id}


@dataclass(frozen=True)
class PureInput:
    value: Any
    type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": "pure", "value": _jsonable(self.value)}
        if self.type:
            out["valueType"] = self.type
        return out


@dataclass(frozen=True)
class MoveCall:
    package: str
    module: str
    function: str
    type_arguments: Tuple[str, ...]
    arguments: Tuple[Argument, ...]

    @property
    def target(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "MoveCall": {
                "package": self.package,
                "module": self.module,
                "function": self.function,
                "typeArguments": list(self.type_arguments),
                "arguments": [a.to_dict() for a in self.arguments],
            }
        }


@dataclass(frozen=True)
class TransferObjects:
    objects: Tuple[Argument, ...]
    address: Argument

    def to_dict(self) -> Dict[str, Any]:
        return {
            "TransferObjects": {
                "objects": [a.to_dict() for a in self.objects],
                "address": self.address.to_dict(),
            }
        }


Command = Union[MoveCall, TransferObjects]
Input = Union[ObjectInput, PureInput]


def parse_target(target: str) -> Tuple[str, str, str]:
    """Split `pkg::module::function`, normalizing the package address."""
    parts = target.split("::")
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"move call target must be pkg::module::function, got {target!r}")
    pkg, module, function = parts
    return normalize_sui_address(pkg), module, function


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class TransactionBlock:
    """Append-only programmable transaction under construction."""

    def __init__(self) -> None:
        self._inputs: List[Input] = []
        self._commands: List[Command] = []

    # ---- inputs ----------------------------------------------------------

    def object(self, object_id: str) -> Argument:
        oid = normalize_sui_address(object_id)
        for i, existing in enumerate(self._inputs):
            if isinstance(existing, ObjectInput) and existing.object_id == oid:
                return Argument("Input", i)
        return self._add_input(ObjectInput(oid))

    def pure(self, value: Any, type: Optional[str] = None) -> Argument:
        if type == "address":
            value = normalize_sui_address(value)
        elif isinstance(value, tuple):
            value = list(value)
        return self._add_input(PureInput(value, type))

    def _add_input(self, item: Input) -> Argument:
        self._inputs.append(item)
        return Argument("Input", len(self._inputs) - 1)

    # ---- commands --------------------------------------------------------

    def move_call(
        self,
        target: str,
        arguments: Sequence[Argument] = (),
        type_arguments: Sequence[str] = (),
    ) -> Argument:
        package, module, function = parse_target(target)
        return self._add_command(
            MoveCall(
                package=package,
                module=module,
                function=function,
                type_arguments=tuple(type_arguments),
                arguments=tuple(arguments),
            )
        )

    def transfer_objects(
        self, objects: Sequence[Argument], address: Union[Argument, str]
    ) -> Argument:
        if not objects:
            raise ValueError("transfer_objects needs at least one object")
        if isinstance(address, str):
            address = self.pure(address, "address")
        return self._add_command(TransferObjects(tuple(objects), address))

    def _add_command(self, cmd: Command) -> Argument:
        self._commands.append(cmd)
        return Argument("Result", len(self._commands) - 1)

    # ---- views -----------------------------------------------------------

    @property
    def inputs(self) -> Tuple[Input, ...]:
        return tuple(self._inputs)

    @property
    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inputs": [i.to_dict() for i in self._inputs],
            "commands": [c.to_dict() for c in self._commands],
        }
