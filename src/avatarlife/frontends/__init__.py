"""Frontend interfaces for the avatar board."""

from .cli import CLIAvatarLife

__all__ = ["CLIAvatarLife"]
