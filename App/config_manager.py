"""Preset persistence for the pixel art editor.

This module handles loading and saving of filter parameter presets to/from
JSON files. Nothing is read or written unless the user names a file.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import FilterParameters

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of filter parameter presets."""

    def __init__(self, config_path: Path | str):
        """Initialize config manager.

        Args:
            config_path: Path to the JSON preset file
        """
        self.config_path = Path(config_path)

    def load(self) -> FilterParameters:
        """Load a preset from file, returning defaults if not found.

        Returns:
            FilterParameters with loaded (clamped) or default values
        """
        params = FilterParameters()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                # Missing keys fall back to defaults
                params = FilterParameters(
                    pixel_size=data.get("pixel_size", params.pixel_size),
                    noise_level=data.get("noise_level", params.noise_level),
                )
                logger.info("Loaded preset from %s", self.config_path)
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.warning("Could not load preset file %s: %s", self.config_path, e)
            params = FilterParameters()

        return params

    def save(self, params: FilterParameters) -> Tuple[bool, Optional[str]]:
        """Save a preset to file.

        Args:
            params: FilterParameters to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(asdict(params), f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
