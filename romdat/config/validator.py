"""Configuration validation."""

import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

VALID_FORMATS = ['clrmamepro', 'logiqx']
VALID_GAME_ELEMENTS = ['game', 'machine']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Every problem is collected before raising, so one run reports them all.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    for section in ('clrmamepro', 'output', 'logging'):
        if not isinstance(config.get(section, {}), dict):
            errors.append(f"{section} must be a mapping")

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )

    # Validate clrmamepro section
    errors.extend(_validate_clrmamepro(config.get('clrmamepro', {})))

    # Validate output section
    errors.extend(_validate_output(config.get('output', {})))

    # Validate logging section
    errors.extend(_validate_logging(config.get('logging', {})))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )

    logger.debug("Configuration validated")


def _validate_clrmamepro(section: Dict[str, Any]) -> List[str]:
    """Validate ClrMamePro format options."""
    errors = []

    quotes = section.get('quotes', True)
    if not isinstance(quotes, bool):
        errors.append("clrmamepro.quotes must be a boolean")

    return errors


def _validate_output(section: Dict[str, Any]) -> List[str]:
    """Validate output options section."""
    errors = []

    output_format = section.get('format', 'clrmamepro')
    if output_format not in VALID_FORMATS:
        errors.append(f"output.format must be one of: {', '.join(VALID_FORMATS)}")

    game_element = section.get('game_element', 'game')
    if game_element not in VALID_GAME_ELEMENTS:
        errors.append(
            f"output.game_element must be one of: {', '.join(VALID_GAME_ELEMENTS)}"
        )

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    # Validate level
    level = section.get('level', 'INFO')
    if level not in VALID_LOG_LEVELS:
        errors.append(f"logging.level must be one of: {', '.join(VALID_LOG_LEVELS)}")

    # Validate console flag
    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    # Validate optional log file
    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors
