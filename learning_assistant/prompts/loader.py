"""Prompt profile loading and registry management."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from learning_assistant.prompts.models import PromptProfile, PromptProfileSummary

logger = logging.getLogger(__name__)


class PromptProfileRegistry:
    """Registry for managing loaded prompt profiles."""

    def __init__(self) -> None:
        self._profiles: Dict[str, PromptProfile] = {}

    def load_from_directory(self, profiles_dir: str | Path) -> None:
        """
        Load all YAML prompt profiles from the specified directory.

        Args:
            profiles_dir: Path to directory containing profile YAML files

        Raises:
            yaml.YAMLError: If a file is not valid YAML
            ValidationError: If a profile fails validation
        """
        profiles_path = Path(profiles_dir)
        if not profiles_path.is_dir():
            logger.warning(f"Prompt profiles directory not found: {profiles_dir}")
            return

        loaded_profiles = []
        for yaml_file in sorted(profiles_path.glob("*.yaml")):
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)

                if not data:
                    logger.warning(f"Empty prompt profile file: {yaml_file}")
                    continue

                profile = PromptProfile.model_validate(data)
                self._profiles[profile.id] = profile
                loaded_profiles.append(f"{profile.id}@{profile.version}")

            except yaml.YAMLError as e:
                logger.error(f"YAML parse error in {yaml_file}: {e}")
                raise
            except ValidationError as e:
                logger.error(f"Validation error in {yaml_file}: {e}")
                raise

        if loaded_profiles:
            logger.info(f"Prompt profiles loaded: {', '.join(loaded_profiles)}")
        else:
            logger.info("No prompt profiles loaded")

    def get(self, profile_id: str) -> Optional[PromptProfile]:
        return self._profiles.get(profile_id)

    def list_profiles(self) -> List[PromptProfileSummary]:
        return [
            PromptProfileSummary(
                id=profile.id,
                title=profile.title,
                version=profile.version,
                description=profile.description,
                input_type=profile.input_type,
            )
            for profile in self._profiles.values()
        ]

    def get_available_ids(self) -> List[str]:
        return list(self._profiles.keys())


def load_registry(profiles_dir: str | Path) -> PromptProfileRegistry:
    registry = PromptProfileRegistry()
    registry.load_from_directory(profiles_dir)
    return registry
