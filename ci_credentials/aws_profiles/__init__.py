"""
AWS profile utilities for persisting credentials to the shared credentials file.
"""

from .config_merger import (
    ProfileBlock,
    parse_profile_blocks,
    render_profile,
    merge_profile,
    save_credentials_to_config,
    list_profile_names,
)
