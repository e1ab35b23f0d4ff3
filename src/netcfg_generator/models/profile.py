"""Target operating system profiles."""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class OsStyle(str, Enum):
    """How a target OS expects the default gateway to be written."""

    LEGACY = "legacy"
    """Single ``gateway4``/``gateway6`` field (netplan before 0.103)."""

    MODERN = "modern"
    """Explicit ``routes`` entry with ``to: default``."""


class OsProfile(BaseModel):
    """A selectable target operating system."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable profile identifier (e.g., ubuntu_22_04)")
    display_name: str = Field(description="Human-readable name used in output headers")
    style: OsStyle = Field(description="Gateway expression style")


OS_PROFILES: tuple[OsProfile, ...] = (
    OsProfile(id="ubuntu_20_04", display_name="Ubuntu 20.04 LTS (Focal)", style=OsStyle.LEGACY),
    OsProfile(id="ubuntu_22_04", display_name="Ubuntu 22.04 LTS (Jammy)", style=OsStyle.MODERN),
    OsProfile(id="ubuntu_24_04", display_name="Ubuntu 24.04 LTS (Noble)", style=OsStyle.MODERN),
    OsProfile(id="ubuntu_26_04", display_name="Ubuntu 26.04 LTS", style=OsStyle.MODERN),
    OsProfile(id="debian", display_name="Debian (Standard)", style=OsStyle.MODERN),
)

DEFAULT_PROFILE_ID = "ubuntu_22_04"


def get_profile(profile_id: str | None) -> OsProfile:
    """Look up a profile by id.

    Unknown or missing ids fall back to the default profile rather than
    failing, so a stale selection still renders.

    Args:
        profile_id: Profile identifier

    Returns:
        The matching profile, or the default profile
    """
    for profile in OS_PROFILES:
        if profile.id == profile_id:
            return profile

    default = next(p for p in OS_PROFILES if p.id == DEFAULT_PROFILE_ID)
    if profile_id is not None:
        logger.warning("Unknown OS profile '%s', using %s", profile_id, default.id)
    return default
