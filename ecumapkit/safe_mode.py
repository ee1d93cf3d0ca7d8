"""Guards that block unsafe edits to an ECU image."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum, auto

from .checksum import ChecksumType, calculate_checksum

logger = logging.getLogger(__name__)

_CHECKSUM_NAMES = {
    "CRC16": ChecksumType.CRC16,
    "SimpleSum": ChecksumType.SIMPLE_SUM,
}


class ValidationResult(Enum):
    ALLOWED = auto()
    WARNING = auto()
    BLOCKED = auto()


@dataclass(frozen=True)
class ValueLimits:
    """Hard limits block a value; warning limits only flag it."""

    hard_min: float = 0.0
    hard_max: float = 1000.0
    warning_min: float = 0.0
    warning_max: float = 1000.0


class SafeModeManager:
    """Validation of values, checksums and ECU signatures; enabled by default."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        if self._enabled != enabled:
            self._enabled = enabled
            logger.info("[SAFE MODE] %s", "ENABLED" if enabled else "DISABLED")

    def validate_value(
        self, value: float, limits: ValueLimits = ValueLimits()
    ) -> tuple[ValidationResult, str]:
        """Check ``value`` against ``limits``; return the verdict and its reason."""
        if not self._enabled:
            return ValidationResult.ALLOWED, ""
        if value < limits.hard_min:
            return (
                ValidationResult.BLOCKED,
                f"Value {value:f} below hard minimum {limits.hard_min:f}",
            )
        if value > limits.hard_max:
            return (
                ValidationResult.BLOCKED,
                f"Value {value:f} above hard maximum {limits.hard_max:f}",
            )
        if value < limits.warning_min or value > limits.warning_max:
            return (
                ValidationResult.WARNING,
                f"Value {value:f} outside warning range "
                f"[{limits.warning_min:f}, {limits.warning_max:f}]",
            )
        return ValidationResult.ALLOWED, ""

    def validate_checksum(self, data, algorithm: str = "CRC32") -> bool:
        """Compute and log the checksum of ``data``; empty data fails."""
        if not self._enabled:
            return True
        data = bytes(data)
        if not data:
            self.log_block("Checksum validation failed: Invalid data")
            return False
        checksum_type = _CHECKSUM_NAMES.get(algorithm, ChecksumType.CRC32)
        calculated = calculate_checksum(checksum_type, data)
        logger.info("[SAFE MODE] Checksum calculated: 0x%X", calculated)
        return True

    def compute_ecu_signature(
        self, ecu_name: str, software_version: str, flash_size: int
    ) -> str:
        """A 16-digit upper-case hex signature of the ECU identity."""
        text = f"{ecu_name}|{software_version}|{flash_size}"
        return hashlib.blake2b(text.encode("utf-8"), digest_size=8).hexdigest().upper()

    def verify_ecu_signature(self, current_signature: str, project_signature: str) -> bool:
        if not self._enabled:
            return True
        match = current_signature == project_signature
        if not match:
            self.log_block(
                f"ECU signature mismatch. Current: {current_signature}, "
                f"Project: {project_signature}"
            )
        return match

    def log_block(self, reason: str) -> None:
        logger.error("[SAFE MODE BLOCK] %s", reason)

    def log_warning(self, message: str) -> None:
        logger.warning("[SAFE MODE WARNING] %s", message)