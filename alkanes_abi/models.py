import json

from .config import UNKNOWN_CONTRACT


class AbiMethod:
    def __init__(
        self,
        name: str,
        opcode: int,
        inputs: list[str] | None = None,
        outputs: list[str] | None = None,
    ):
        self.name = name
        self.opcode = opcode
        self.inputs = inputs if inputs is not None else []
        self.outputs = outputs if outputs is not None else []

    @classmethod
    def for_opcode(cls, opcode: int) -> "AbiMethod":
        return cls(f"method_{opcode}", opcode)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "opcode": self.opcode,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
        }

    def __repr__(self):
        return f"AbiMethod(name={self.name!r}, opcode={self.opcode})"


class AlkanesABI:
    """Contract name plus the opcodes its entry point dispatches on, in source order."""

    def __init__(self, name: str = UNKNOWN_CONTRACT, methods: list[AbiMethod] | None = None):
        self.name = name
        self.methods = methods if methods is not None else []

    @property
    def opcodes(self) -> list[int]:
        return [m.opcode for m in self.methods]

    def to_dict(self) -> dict:
        return {"name": self.name, "methods": [m.to_dict() for m in self.methods]}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self):
        return f"AlkanesABI(name={self.name!r}, methods={self.methods!r})"
