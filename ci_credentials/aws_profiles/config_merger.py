"""
AWS Credentials File Merger

This module writes a named profile into the AWS shared credentials file.
The file is treated as a sequence of ``[name]`` blocks rather than parsed
with configparser, so comments, spacing and the order of every other
profile survive untouched.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import get_aws_credentials_path
from ..errors import InvalidProfileName, MissingCredentials
from ..models import Credentials
from ..utils.filesystem import FileSystem, LocalFileSystem, PathLike

__all__ = [
    'ProfileBlock',
    'parse_profile_blocks',
    'render_profile',
    'merge_profile',
    'save_credentials_to_config',
    'list_profile_names',
]

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^\s*\[([^\[\]]+)\]\s*(?:[;#].*)?$")


class ProfileBlock:
    """A ``[name]`` header line and every line up to the next header."""
    def __init__(self, name: str, text: str):
        self.name = name
        self.text = text

    def trailing_whitespace(self) -> str:
        """Blank lines after the block's last non-blank line."""
        stripped = self.text.rstrip()
        return self.text[len(stripped):]

    def __repr__(self) -> str:
        return f"ProfileBlock(name={self.name!r})"


def parse_profile_blocks(content: str) -> Tuple[str, List[ProfileBlock]]:
    """
    Split credentials file content into profile blocks.

    Args:
        content: Full text of the credentials file

    Returns:
        Tuple of (preamble before the first header, blocks in file order).
        Concatenating the preamble and every block's text gives back
        ``content`` exactly.
    """
    preamble_lines: List[str] = []
    blocks: List[Tuple[str, List[str]]] = []

    for line in content.splitlines(keepends=True):
        match = HEADER_PATTERN.match(line)
        if match:
            blocks.append((match.group(1).strip(), [line]))
        elif blocks:
            blocks[-1][1].append(line)
        else:
            preamble_lines.append(line)

    return "".join(preamble_lines), [ProfileBlock(name, "".join(lines)) for name, lines in blocks]


def render_profile(profile_name: str, credentials: Credentials) -> str:
    """Render the credentials block for one profile."""
    return (
        f"[{profile_name}]\n"
        f"aws_access_key_id={credentials.access_key_id}\n"
        f"aws_secret_access_key={credentials.secret_access_key}\n"
        f"aws_session_token={credentials.session_token}\n"
    )


def _check_profile_name(profile_name: str) -> None:
    # Headers are read back stripped, so padded names would never match again
    if not profile_name.strip() or profile_name != profile_name.strip() \
            or any(c in profile_name for c in "[]\r\n"):
        raise InvalidProfileName(f"Invalid profile name: {profile_name!r}")


def _after_first_line_break(whitespace: str) -> str:
    index = whitespace.find("\n")
    return whitespace[index + 1:] if index >= 0 else ""


def merge_profile(content: str, profile_name: str, credentials: Credentials) -> str:
    """
    Merge one profile into existing credentials file content.

    An existing block for ``profile_name`` is replaced where it stands and any
    later duplicates are dropped; otherwise the new block is appended. All
    other text is kept as is.

    Args:
        content: Existing file content (may be empty)
        profile_name: Name of the profile to write
        credentials: Complete credentials for the profile

    Returns:
        str: The new file content
    """
    preamble, blocks = parse_profile_blocks(content)
    rendered = render_profile(profile_name, credentials)

    parts = [preamble]
    replaced = False
    for block in blocks:
        if block.name != profile_name:
            parts.append(block.text)
        elif not replaced:
            parts.append(rendered + _after_first_line_break(block.trailing_whitespace()))
            replaced = True

    if replaced:
        return "".join(parts)

    merged = "".join(parts)
    if merged.strip():
        if not merged.endswith("\n"):
            merged += "\n"
        if not merged.endswith("\n\n"):
            merged += "\n"
    else:
        merged = ""
    return merged + rendered


async def save_credentials_to_config(
    profile_name: Optional[str] = None,
    credentials: Optional[Credentials] = None,
    filesystem: Optional[FileSystem] = None,
    credentials_path: Optional[PathLike] = None,
) -> None:
    """
    Save credentials as a named profile in the AWS credentials file.

    Does nothing if either the profile name or the credentials are missing.

    Args:
        profile_name: Profile to create or replace
        credentials: Credentials to store
        filesystem: Filesystem to use (defaults to the local disk)
        credentials_path: File to write (defaults to the AWS CLI location)

    Raises:
        MissingCredentials: If any of the three credential fields is missing
        InvalidProfileName: If the name cannot be used as a section header
    """
    if not profile_name or credentials is None:
        return

    if not credentials.is_complete():
        raise MissingCredentials()
    _check_profile_name(profile_name)

    filesystem = filesystem or LocalFileSystem()
    path = Path(credentials_path) if credentials_path else get_aws_credentials_path()
    config_dir = path.parent

    if not await filesystem.exists(str(config_dir)):
        await filesystem.makedirs(str(config_dir))

    content = ""
    if await filesystem.exists(str(path)):
        content = await filesystem.read_text(str(path))

    await filesystem.write_text(str(path), merge_profile(content, profile_name, credentials))
    logger.debug("Saved credentials for profile %s to %s", profile_name, path)


async def list_profile_names(
    filesystem: Optional[FileSystem] = None,
    credentials_path: Optional[PathLike] = None,
) -> List[str]:
    """
    List the profiles in the AWS credentials file.

    Returns:
        List of profile names in file order (empty if the file does not exist)
    """
    filesystem = filesystem or LocalFileSystem()
    path = Path(credentials_path) if credentials_path else get_aws_credentials_path()

    if not await filesystem.exists(str(path)):
        return []

    _, blocks = parse_profile_blocks(await filesystem.read_text(str(path)))
    names: List[str] = []
    for block in blocks:
        if block.name not in names:
            names.append(block.name)
    return names
