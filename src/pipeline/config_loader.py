"""
Configuration loader for the document scanner.

Loads and validates configuration from config.yaml file.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from src.extraction.types import ExtractionConfig
from src.locator.types import LocatorConfig, PreviewConfig
from src.pipeline.types import ScannerConfig
from src.rectification.enhancement import ENHANCEMENT_METHODS
from src.rectification.image_rectification import BORDER_MODES, INTERPOLATION_FLAGS
from src.rectification.types import EnhancementConfig, RectificationConfig

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> ScannerConfig:
    """
    Load scanner configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated ScannerConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.extraction.canny_low_threshold)
        75.0
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading scanner config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded scanner configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> ScannerConfig:
    """Parse raw dictionary into structured config objects."""
    extraction = raw["extraction"]
    locator = raw["locator"]
    preview = raw["preview"]
    rectification = raw["rectification"]
    enhancement = raw["enhancement"]

    return ScannerConfig(
        extraction=ExtractionConfig(
            blur_kernel_size=int(extraction["blur_kernel_size"]),
            canny_low_threshold=float(extraction["canny_low_threshold"]),
            canny_high_threshold=float(extraction["canny_high_threshold"]),
            close_kernel_size=int(extraction["close_kernel_size"]),
            retrieval_mode=str(extraction["retrieval_mode"]),
            channel_order=str(extraction["channel_order"]).lower(),
        ),
        locator=LocatorConfig(
            approx_epsilon_ratio=float(locator["approx_epsilon_ratio"]),
            require_convex=bool(locator["require_convex"]),
            min_area_ratio=float(locator["min_area_ratio"]),
            max_area_ratio=float(locator["max_area_ratio"]),
        ),
        preview=PreviewConfig(
            approx_epsilon_ratio=float(preview["approx_epsilon_ratio"]),
            min_area_ratio=float(preview["min_area_ratio"]),
            max_area_ratio=float(preview["max_area_ratio"]),
            close_kernel_size=int(preview["close_kernel_size"]),
            analysis_max_dimension=int(preview["analysis_max_dimension"]),
        ),
        rectification=RectificationConfig(
            interpolation=str(rectification["interpolation"]),
            border_mode=str(rectification["border_mode"]),
            min_output_size=int(rectification["min_output_size"]),
            min_corner_separation=float(rectification["min_corner_separation"]),
        ),
        enhancement=EnhancementConfig(
            method=str(enhancement["method"]),
            clahe_clip_limit=float(enhancement["clahe_clip_limit"]),
            clahe_tile_grid_size=int(enhancement["clahe_tile_grid_size"]),
        ),
    )


def _validate_area_ratios(name: str, min_ratio: float, max_ratio: float) -> None:
    if not 0.0 <= min_ratio < max_ratio <= 1.0:
        raise ValueError(
            f"{name}: area ratios must satisfy 0 <= min ({min_ratio}) "
            f"< max ({max_ratio}) <= 1"
        )


def _validate_config(config: ScannerConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    extraction = config.extraction
    if extraction.blur_kernel_size < 1 or extraction.blur_kernel_size % 2 == 0:
        raise ValueError("blur_kernel_size must be a positive odd number")

    if extraction.canny_low_threshold < 0:
        raise ValueError("canny_low_threshold cannot be negative")

    if extraction.canny_low_threshold >= extraction.canny_high_threshold:
        raise ValueError(
            f"canny_low_threshold ({extraction.canny_low_threshold}) must be less "
            f"than canny_high_threshold ({extraction.canny_high_threshold})"
        )

    if extraction.close_kernel_size < 0:
        raise ValueError("close_kernel_size cannot be negative")

    if extraction.retrieval_mode not in ("list", "external"):
        raise ValueError(
            f"Invalid retrieval_mode: {extraction.retrieval_mode}. "
            "Must be one of ['list', 'external']"
        )

    if extraction.channel_order not in ("bgr", "rgb"):
        raise ValueError(
            f"Invalid channel_order: {extraction.channel_order}. "
            "Must be one of ['bgr', 'rgb']"
        )

    for name, epsilon in (
        ("locator", config.locator.approx_epsilon_ratio),
        ("preview", config.preview.approx_epsilon_ratio),
    ):
        if not 0.0 < epsilon < 1.0:
            raise ValueError(f"{name}: approx_epsilon_ratio must be in (0, 1)")

    _validate_area_ratios(
        "locator", config.locator.min_area_ratio, config.locator.max_area_ratio
    )
    _validate_area_ratios(
        "preview", config.preview.min_area_ratio, config.preview.max_area_ratio
    )

    if config.preview.close_kernel_size < 0:
        raise ValueError("preview close_kernel_size cannot be negative")

    if config.preview.analysis_max_dimension < 0:
        raise ValueError("analysis_max_dimension cannot be negative")

    rectification = config.rectification
    if rectification.interpolation not in INTERPOLATION_FLAGS:
        raise ValueError(
            f"Invalid interpolation: {rectification.interpolation}. "
            f"Must be one of {list(INTERPOLATION_FLAGS)}"
        )

    if rectification.border_mode not in BORDER_MODES:
        raise ValueError(
            f"Invalid border_mode: {rectification.border_mode}. "
            f"Must be one of {list(BORDER_MODES)}"
        )

    if rectification.min_output_size < 2:
        raise ValueError("min_output_size must be at least 2")

    if rectification.min_corner_separation <= 0:
        raise ValueError("min_corner_separation must be positive")

    enhancement = config.enhancement
    if enhancement.method not in ENHANCEMENT_METHODS:
        raise ValueError(
            f"Invalid enhancement method: {enhancement.method}. "
            f"Must be one of {list(ENHANCEMENT_METHODS)}"
        )

    if enhancement.clahe_clip_limit <= 0:
        raise ValueError("clahe_clip_limit must be positive")

    if enhancement.clahe_tile_grid_size < 1:
        raise ValueError("clahe_tile_grid_size must be at least 1")

    logger.debug("Configuration validation passed")
