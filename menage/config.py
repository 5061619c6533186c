"""
Centralized configuration with environment variable overrides.

Every rate, minimum and add-on price used by the pricing calculator is
configurable here. Nothing is hardcoded in classifier or pricing logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("fr", "ar", "en")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Marketplace identity and display settings."""

    name: str = os.getenv("BUSINESS_NAME", "Site Ménage")
    currency: str = os.getenv("CURRENCY", "DH")
    default_language: str = os.getenv("DEFAULT_LANGUAGE", "fr")


@dataclass(frozen=True)
class PricingConfig:
    """Rates and fixed add-on prices for every booking family."""

    # Sofa cleaning: flat minimum up to the threshold, per-m2 above it
    sofa_threshold_m2: float = _safe_float("SOFA_THRESHOLD_M2", "8")
    sofa_minimum_price: float = _safe_float("SOFA_MINIMUM_PRICE", "800")
    sofa_rate_per_m2: float = _safe_float("SOFA_RATE_PER_M2", "100")

    # Complete housekeeping (guest house, house, apartment, hotel)
    housekeeping_rate_per_m2: float = _safe_float("HOUSEKEEPING_RATE_PER_M2", "2")
    breakfast_price: float = _safe_float("BREAKFAST_PRICE", "50")
    sheets_price: float = _safe_float("SHEETS_PRICE", "20")
    laundry_price: float = _safe_float("LAUNDRY_PRICE", "50")
    towels_price: float = _safe_float("TOWELS_PRICE", "30")
    windows_price: float = _safe_float("WINDOWS_PRICE", "20")

    # Housekeeping booked together with cooking
    combined_sheets_price: float = _safe_float("COMBINED_SHEETS_PRICE", "30")

    # Laundry & ironing, per garment
    everyday_garment_price: float = _safe_float("EVERYDAY_GARMENT_PRICE", "5")
    jacket_price: float = _safe_float("JACKET_PRICE", "10")
    coat_price: float = _safe_float("COAT_PRICE", "15")
    leather_jacket_price: float = _safe_float("LEATHER_JACKET_PRICE", "12")

    # Laundry & ironing, large textiles per m2
    bedsheet_rate_per_m2: float = _safe_float("BEDSHEET_RATE_PER_M2", "10")
    blanket_rate_per_m2: float = _safe_float("BLANKET_RATE_PER_M2", "15")
    quilted_blanket_rate_per_m2: float = _safe_float("QUILTED_BLANKET_RATE_PER_M2", "20")


@dataclass(frozen=True)
class StorageConfig:
    """Device-local prefill storage and contact-form limits."""

    prefill_dir: str = os.getenv("PREFILL_DIR", ".menage")
    prefill_key: str = os.getenv("PREFILL_KEY", "booking_prefill")
    max_message_length: int = _safe_int("MAX_MESSAGE_LENGTH", "1000")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.business.default_language not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"DEFAULT_LANGUAGE must be one of {SUPPORTED_LANGUAGES}, "
            f"got {config.business.default_language!r}"
        )
    if config.pricing.sofa_threshold_m2 <= 0:
        raise ValueError(
            f"SOFA_THRESHOLD_M2 must be > 0, got {config.pricing.sofa_threshold_m2}"
        )

    for price_name, price_value in [
        ("SOFA_MINIMUM_PRICE", config.pricing.sofa_minimum_price),
        ("SOFA_RATE_PER_M2", config.pricing.sofa_rate_per_m2),
        ("HOUSEKEEPING_RATE_PER_M2", config.pricing.housekeeping_rate_per_m2),
        ("BREAKFAST_PRICE", config.pricing.breakfast_price),
        ("SHEETS_PRICE", config.pricing.sheets_price),
        ("LAUNDRY_PRICE", config.pricing.laundry_price),
        ("TOWELS_PRICE", config.pricing.towels_price),
        ("WINDOWS_PRICE", config.pricing.windows_price),
        ("COMBINED_SHEETS_PRICE", config.pricing.combined_sheets_price),
        ("EVERYDAY_GARMENT_PRICE", config.pricing.everyday_garment_price),
        ("JACKET_PRICE", config.pricing.jacket_price),
        ("COAT_PRICE", config.pricing.coat_price),
        ("LEATHER_JACKET_PRICE", config.pricing.leather_jacket_price),
        ("BEDSHEET_RATE_PER_M2", config.pricing.bedsheet_rate_per_m2),
        ("BLANKET_RATE_PER_M2", config.pricing.blanket_rate_per_m2),
        ("QUILTED_BLANKET_RATE_PER_M2", config.pricing.quilted_blanket_rate_per_m2),
    ]:
        if price_value < 0:
            raise ValueError(f"{price_name} must be >= 0, got {price_value}")

    if not config.storage.prefill_key.strip():
        raise ValueError("PREFILL_KEY must not be empty")
    if config.storage.max_message_length < 1:
        raise ValueError(
            f"MAX_MESSAGE_LENGTH must be >= 1, got {config.storage.max_message_length}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
