"""
Legacy Guard Validator Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from legacy_guard.constants import APP_VK, APP_TAG, HASH_SIZE
from legacy_guard.core.types import App, Hash

logger = logging.getLogger(__name__)


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class ValidatorConfig:
    """
    Transition validator configuration.

    The defaults reproduce the deployed contract: authorization and the
    claim timeout are enforced by whatever invokes the validator. Turning
    the require_* flags on makes those trust boundaries explicit inputs.
    """
    app_vk: str = APP_VK
    app_identity: str = "00" * HASH_SIZE
    app_tag: str = APP_TAG

    # Reject Pulse/Claim unless a verifier is wired in and the witness signs
    require_authorization: bool = False
    # Reject Claim unless an attested current height is supplied
    require_height_attestation: bool = False
    # Reject Initialize of a vault with timeout_blocks == 0
    reject_zero_timeout: bool = False

    log: LogConfig = field(default_factory=LogConfig)

    @property
    def app(self) -> App:
        """Application identity the validator guards."""
        return App(
            vk=Hash.from_hex(self.app_vk),
            identity=Hash.from_hex(self.app_identity),
            tag=self.app_tag,
        )

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for name in ("app_vk", "app_identity"):
            value = getattr(self, name)
            try:
                raw = bytes.fromhex(value)
            except ValueError:
                errors.append(f"{name} is not valid hex")
                continue
            if len(raw) != HASH_SIZE:
                errors.append(f"{name} must be {HASH_SIZE} bytes, got {len(raw)}")

        if len(self.app_tag) != 1:
            errors.append(f"app_tag must be a single character: {self.app_tag!r}")

        if not isinstance(logging.getLevelName(self.log.level.upper()), int):
            errors.append(f"Unknown log level: {self.log.level}")

        return errors

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "app_vk": self.app_vk,
            "app_identity": self.app_identity,
            "app_tag": self.app_tag,
            "require_authorization": self.require_authorization,
            "require_height_attestation": self.require_height_attestation,
            "reject_zero_timeout": self.reject_zero_timeout,
            "log": asdict(self.log),
        }

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "ValidatorConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls(
            app_vk=data.get("app_vk", APP_VK),
            app_identity=data.get("app_identity", "00" * HASH_SIZE),
            app_tag=data.get("app_tag", APP_TAG),
            require_authorization=data.get("require_authorization", False),
            require_height_attestation=data.get("require_height_attestation", False),
            reject_zero_timeout=data.get("reject_zero_timeout", False),
        )

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def strict(cls) -> "ValidatorConfig":
        """Configuration with both trust boundaries enforced locally."""
        return cls(require_authorization=True, require_height_attestation=True)


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
