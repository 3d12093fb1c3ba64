from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .keys import generate_key


@dataclass
class TranslationUnit:
    """
    Represents a single translation unit (trans-unit) exchanged with an XLIFF file.
    """
    key: str
    source: str = ""
    target: str = ""  # Empty means untranslated
    context: str = ""
    comment: str = ""  # Developer note, may span several lines
    fuzzy: bool = False
    flags: List[str] = field(default_factory=list)  # e.g. ["state-translated"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "source": self.source,
            "target": self.target,
            "context": self.context,
            "comment": self.comment,
            "fuzzy": self.fuzzy,
            "flags": list(self.flags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationUnit":
        source = data.get("source") or ""
        context = data.get("context") or ""
        return cls(
            key=data.get("key") or generate_key(source, context),
            source=source,
            target=data.get("target") or "",
            context=context,
            comment=data.get("comment") or "",
            fuzzy=bool(data.get("fuzzy", False)),
            flags=list(data.get("flags") or []),
        )


def mint_unit(source: str, target: str = "", context: str = "", comment: str = "",
              fuzzy: bool = False) -> TranslationUnit:
    """Builds a unit whose key is derived from its source and context."""
    return TranslationUnit(
        key=generate_key(source, context),
        source=source,
        target=target,
        context=context,
        comment=comment,
        fuzzy=fuzzy,
    )


class DiagnosticKind(str, Enum):
    MISSING_TARGET = "missing-target"
    EMPTY_KEY = "empty-key"
    BAD_KEY = "bad-key"
    INVALID_STATE = "invalid-state"


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal issue found while reading a trans-unit."""
    kind: DiagnosticKind
    key: str = ""
    context: str = ""
    state: str = ""

    def __str__(self) -> str:
        if self.kind == DiagnosticKind.MISSING_TARGET:
            return f"[missing target] for {self.key}"
        if self.kind == DiagnosticKind.EMPTY_KEY:
            return "[empty key]"
        if self.kind == DiagnosticKind.BAD_KEY:
            return f"[bad key] {self.key} for context {self.context}"
        return f"[invalid state] for {self.key} with state {self.state}"

    def to_dict(self) -> Dict[str, str]:
        return {
            "kind": self.kind.value,
            "key": self.key,
            "context": self.context,
            "state": self.state,
        }


@dataclass
class DeserializeResult:
    units: List[TranslationUnit] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def __iter__(self):
        # Allows `units, diagnostics = deserializer.deserialize(text)`
        return iter((self.units, self.diagnostics))

    def diagnostics_of(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def find(self, key: str) -> Optional[TranslationUnit]:
        for unit in self.units:
            if unit.key == key:
                return unit
        return None
