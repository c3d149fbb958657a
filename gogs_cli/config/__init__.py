"""Configuration for the gog client.

Key Components:
    - GogsConfig: Complete configuration with YAML load/save
    - ServerConfig: Tracker URL, timeout, and fan-out limit
    - Defaults: Default repository and profile
    - Profile: One agent identity (user, token, role, signature)

Example:
    >>> from gogs_cli.config import GogsConfig
    >>> config = GogsConfig.load("config.yaml")
    >>> config.profiles["planner"].signature
    '[Planner]'
"""

from gogs_cli.config.settings import Defaults, GogsConfig, Profile, ServerConfig

__all__ = ["Defaults", "GogsConfig", "Profile", "ServerConfig"]
