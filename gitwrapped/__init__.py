"""GitHub profile trading cards, badges and stats."""

from .card_data import build_card_data, fetch_card_data
from .cards import PokemonCard, ProfileBadge, TopLanguagesCard
from .exceptions import GitHubAPIError, GitWrappedError, InvalidUsernameError, UserNotFoundError
from .stats import derive_stats, fetch_user_stats

__all__ = [
    "GitHubAPIError",
    "GitWrappedError",
    "InvalidUsernameError",
    "PokemonCard",
    "ProfileBadge",
    "TopLanguagesCard",
    "UserNotFoundError",
    "build_card_data",
    "derive_stats",
    "fetch_card_data",
    "fetch_user_stats",
]
