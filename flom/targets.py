"""Target selection: one platform, every platform, or the song.link page."""

from dataclasses import dataclass
from typing import Callable, Optional

from .errors import InvalidInput
from .platforms import normalize_target

ALL = "all"
GENERIC_PAGE = "songlink"
SPECIFIC = "specific"


@dataclass(frozen=True)
class TargetSelection:
    """What the user asked to convert to.

    kind is one of SPECIFIC, ALL or GENERIC_PAGE; platform_key is set only
    for SPECIFIC.
    """

    kind: str
    platform_key: Optional[str] = None

    @classmethod
    def specific(cls, platform_key: str) -> "TargetSelection":
        return cls(SPECIFIC, platform_key)

    @classmethod
    def all(cls) -> "TargetSelection":
        return cls(ALL)

    @classmethod
    def generic_page(cls) -> "TargetSelection":
        return cls(GENERIC_PAGE)

    @property
    def is_all(self) -> bool:
        return self.kind == ALL

    @property
    def is_generic_page(self) -> bool:
        return self.kind == GENERIC_PAGE


def parse_target(value: str) -> TargetSelection:
    """Interpret a target string.

    Raises:
        InvalidInput: If the target is not "all", "songlink" or a known platform
    """
    normalized = value.strip().lower()
    if normalized == ALL:
        return TargetSelection.all()
    if normalized == GENERIC_PAGE:
        return TargetSelection.generic_page()

    key = normalize_target(value)
    if key is None:
        raise InvalidInput(f"unknown target: {value}")
    return TargetSelection.specific(key)


def choose_target(
    explicit: Optional[str], default: Optional[str]
) -> Optional[TargetSelection]:
    """Pick the explicit target, else the configured default.

    Returns:
        Selection, or None when neither is set and the user must be asked
    """
    for candidate in (explicit, default):
        if candidate and candidate.strip():
            return parse_target(candidate)
    return None


def resolve_target(
    explicit: Optional[str],
    default: Optional[str],
    ask: Callable[[], TargetSelection],
) -> TargetSelection:
    """Decide the target selection, asking the user as a last resort."""
    selection = choose_target(explicit, default)
    if selection is None:
        selection = ask()
    return selection
