"""Typed configuration dataclasses for roller-blind-quote.

Provides strongly-typed configuration objects so controllers receive plain
attributes instead of digging through nested dicts.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass
class DetailConfig:
    """Detail-configuration timing settings (milliseconds)."""
    active_cell_clear_ms: int = 150
    focus_delay_ms: int = 50

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PricingConfig:
    """Accessory pricing used by the calculation service."""
    dual_bracket_pair_price: float = 10.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AutosaveConfig:
    """Periodic snapshot of the order lines."""
    enabled: bool = True
    interval_ms: int = 60000
    path: str = "data/autosave/quote.json"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    detail: DetailConfig = field(default_factory=DetailConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    autosave: AutosaveConfig = field(default_factory=AutosaveConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary matching the load_config() layout."""
        return {
            "log_level": self.log_level,
            "detail": self.detail.to_dict(),
            "pricing": self.pricing.to_dict(),
            "autosave": self.autosave.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance
        """
        return cls(
            log_level=data.get("log_level", "INFO"),
            detail=DetailConfig(**data.get("detail", {})),
            pricing=PricingConfig(**data.get("pricing", {})),
            autosave=AutosaveConfig(**data.get("autosave", {})),
        )


__all__ = [
    "AppConfig",
    "DetailConfig",
    "PricingConfig",
    "AutosaveConfig",
]
