"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

# Providers commonly reject single files above this size
LARGE_FILE_WARNING_BYTES = 100 * 1024 * 1024


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for legal but suspicious settings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    attachments = config_dict.get("attachments", {})
    if isinstance(attachments, dict):
        for role, rule in attachments.items():
            if not isinstance(rule, dict):
                continue

            if rule.get("max_files_per_role") == 0:
                warning_messages.append(
                    f"Attachment role '{role}' allows zero files; any {role} upload will be rejected"
                )

            max_bytes = rule.get("max_bytes_per_file")
            if isinstance(max_bytes, int) and max_bytes > LARGE_FILE_WARNING_BYTES:
                warning_messages.append(
                    f"Attachment role '{role}' accepts files up to {max_bytes} bytes, "
                    "which the storage provider may refuse"
                )

    storage = config_dict.get("storage", {})
    if isinstance(storage, dict):
        api_url = storage.get("api_url", "")
        if isinstance(api_url, str) and api_url.startswith("http://"):
            warning_messages.append(
                "storage.api_url uses plain HTTP; the access credential will be sent unencrypted"
            )

    matching = config_dict.get("matching", {})
    if isinstance(matching, dict) and matching.get("top_k") == 0:
        warning_messages.append("matching.top_k is 0; ranking will always return no matches")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
