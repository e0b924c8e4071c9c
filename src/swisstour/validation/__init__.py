from swisstour.validation.pairing_validator import (
    CheckResult,
    CheckStatus,
    PairingValidator,
    Severity,
    ValidationReport,
    rematch_free_pairing_exists,
)

__all__ = [
    "CheckResult",
    "CheckStatus",
    "PairingValidator",
    "Severity",
    "ValidationReport",
    "rematch_free_pairing_exists",
]
