"""
Validation rule definitions for generated levels.

Each rule has:
- Code: Unique identifier (e.g., "LVL-001")
- Severity: FAIL, WARN or INFO
- Message template: Human-readable description
- Remediation: Suggested fix
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .core import Severity


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule."""
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)


# =============================================================================
# LEVEL RULES (LVL)
# =============================================================================

LVL_001 = ValidationRule(
    code="LVL-001",
    severity=Severity.FAIL,
    message_template="Chunks {first} and {second} overlap",
    remediation_template="Only add chunks through Level.add_chunk or the generator",
)

LVL_002 = ValidationRule(
    code="LVL-002",
    severity=Severity.FAIL,
    message_template="Chunk {chunk} at {bounds} leaves the level extents {extents}",
    remediation_template="Check chunk positions against the target extents before placing",
)

LVL_003 = ValidationRule(
    code="LVL-003",
    severity=Severity.FAIL,
    message_template="Context {context} targets {target}, which does not point back",
    remediation_template="Fill contexts in pairs with Context.join",
)

LVL_004 = ValidationRule(
    code="LVL-004",
    severity=Severity.FAIL,
    message_template="Paired contexts {context} and {target} are {distance:.6f} apart",
    remediation_template="Align the contexts before joining them",
)

LVL_006 = ValidationRule(
    code="LVL-006",
    severity=Severity.WARN,
    message_template="Context {context} was filled by chunk {attached} without a paired context",
    remediation_template="Give the template a context at each anchor with a compatible tag",
)

LVL_005 = ValidationRule(
    code="LVL-005",
    severity=Severity.INFO,
    message_template="{count} open context(s) remain ({unfulfilled} unfulfilled)",
)

ALL_RULES: Dict[str, ValidationRule] = {
    rule.code: rule for rule in (LVL_001, LVL_002, LVL_003, LVL_004, LVL_005, LVL_006)
}
