"""
Entites metier du catalogue.

Exports :
- ContentItem, MovieItem, SeriesItem : Contenus du catalogue (variante etiquetee)
- Season, Episode, VideoSource : Structure imbriquee d'une serie
- ContentType, ContentStatus : Enumerations du catalogue
- NewsBannerMessage, UserFeedback : Entites annexes du site
- UpcomingEpisode, EpisodeAddress, ReconciledEpisode : Calendrier des sorties
"""

from cineform.core.entities.content import (
    ContentItem,
    ContentStatus,
    ContentType,
    Episode,
    MovieItem,
    Season,
    SeriesItem,
    VideoSource,
    split_csv,
)
from cineform.core.entities.site import (
    FeedbackStatus,
    FeedbackType,
    NewsBannerMessage,
    NewsBannerType,
    UserFeedback,
)
from cineform.core.entities.upcoming import (
    EpisodeAddress,
    ReconciledEpisode,
    UpcomingEpisode,
)

__all__ = [
    "ContentItem",
    "ContentStatus",
    "ContentType",
    "Episode",
    "MovieItem",
    "Season",
    "SeriesItem",
    "VideoSource",
    "split_csv",
    "FeedbackStatus",
    "FeedbackType",
    "NewsBannerMessage",
    "NewsBannerType",
    "UserFeedback",
    "EpisodeAddress",
    "ReconciledEpisode",
    "UpcomingEpisode",
]
