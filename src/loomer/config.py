"""
loomer Configuration
====================

This module handles configuration loading for stimulus generation.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. loomer.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    LOOMER_FRAME_RATE      -> constant_speed/variable_speed/diameter.frame_rate
    LOOMER_SCREEN_DISTANCE -> constant_speed/variable_speed.screen_distance
    LOOMER_CORRECTION      -> animation.correction
    LOOMER_WIDTH           -> animation.width
    LOOMER_HEIGHT          -> animation.height
    LOOMER_LATENCY         -> threshold.latency
    LOOMER_LOG_LEVEL       -> logging.level
    LOOMER_LOG_FORMAT      -> logging.format

Example:
    from loomer.config import load_config, setup_logging
    
    settings = load_config()
    setup_logging(settings)
    print(settings.constant_speed.frame_rate)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from loomer.animation.markers import MarkerConfig
from loomer.models.parameters import (
    ConstantSpeedParams,
    DiameterParams,
    VariableSpeedParams,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class AnimationConfig(BaseModel):
    """Frame sequence assembly configuration."""
    
    correction: Optional[float] = Field(
        default=0.0285,
        gt=0,
        description="Display calibration factor applied to diameters",
    )
    width: int = Field(default=1280, ge=2, description="Video width in pixels")
    height: int = Field(default=1024, ge=2, description="Video height in pixels")
    pad: Optional[float] = Field(
        default=None,
        ge=0,
        description="Seconds of first-frame hold before the animation",
    )
    pad_blank: bool = Field(
        default=False,
        description="Hide the stimulus during padding",
    )
    markers: MarkerConfig = Field(default_factory=MarkerConfig)


class ThresholdConfig(BaseModel):
    """ALT extraction configuration."""
    
    latency: float = Field(
        default=0.0,
        ge=0,
        description="Response latency subtracted from the response frame (s)",
    )
    new_distance: Optional[float] = Field(
        default=None,
        gt=0,
        description="Viewing distance override (cm)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for loomer.
    
    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """
    
    constant_speed: ConstantSpeedParams = Field(default_factory=ConstantSpeedParams)
    variable_speed: VariableSpeedParams = Field(default_factory=VariableSpeedParams)
    diameter: DiameterParams = Field(default_factory=DiameterParams)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    threshold: ThresholdConfig = Field(default_factory=ThresholdConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.
    
    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values
        
    Args:
        config_path: Path to loomer.yaml. If None, searches common locations.
        
    Returns:
        Settings: Loaded configuration
        
    Raises:
        pydantic.ValidationError: If a value is out of range
        ValueError: If a LOOMER_* variable is not a number
        yaml.YAMLError: If the config file is not valid YAML
    """
    # Find config file
    if config_path is None:
        search_paths = [
            Path("loomer.yaml"),
            Path("loomer.yml"),
            Path.home() / ".config" / "loomer" / "loomer.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break
    
    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")
    
    # Apply environment variable overrides
    _apply_env_overrides(config_data)
    
    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""
    
    # Builder settings
    if env_rate := os.environ.get("LOOMER_FRAME_RATE"):
        for section in ("constant_speed", "variable_speed", "diameter"):
            config_data.setdefault(section, {})["frame_rate"] = float(env_rate)
    if env_screen := os.environ.get("LOOMER_SCREEN_DISTANCE"):
        for section in ("constant_speed", "variable_speed"):
            config_data.setdefault(section, {})["screen_distance"] = float(env_screen)
    
    # Animation settings
    if env_corr := os.environ.get("LOOMER_CORRECTION"):
        config_data.setdefault("animation", {})["correction"] = float(env_corr)
    if env_width := os.environ.get("LOOMER_WIDTH"):
        config_data.setdefault("animation", {})["width"] = int(env_width)
    if env_height := os.environ.get("LOOMER_HEIGHT"):
        config_data.setdefault("animation", {})["height"] = int(env_height)
    
    # Threshold settings
    if env_latency := os.environ.get("LOOMER_LATENCY"):
        config_data.setdefault("threshold", {})["latency"] = float(env_latency)
    
    # Logging settings
    if env_log := os.environ.get("LOOMER_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_fmt := os.environ.get("LOOMER_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_fmt


# =============================================================================
# Logging
# =============================================================================

LOG_FORMATS = {
    "json": (
        '{"time": "%(asctime)s", "level": "%(levelname)s", '
        '"module": "%(name)s", "message": "%(message)s"}'
    ),
    "text": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Attach a stderr handler to the ``loomer`` logger tree.
    
    Any handler installed by an earlier call is replaced, so repeated
    CLI runs in one process never duplicate output. The root logger is
    left alone.
    
    Args:
        settings: Loaded settings; only the ``logging`` section is used
        
    Returns:
        The configured ``loomer`` package logger
    """
    package_logger = logging.getLogger("loomer")
    package_logger.setLevel(
        getattr(logging, settings.logging.level.upper(), logging.INFO)
    )
    
    log_format = LOG_FORMATS.get(settings.logging.format, LOG_FORMATS["text"])
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(log_format, datefmt="%Y-%m-%dT%H:%M:%S"))
    
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    
    return package_logger
