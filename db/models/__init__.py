# Import all models to ensure they are registered with the database
from .users import User
from .sessions import Session
from .leagues import League
from .teams import FantasyTeam
from .chat_messages import ChatMessage
from .weekly_stats import WeeklyStats
from .platform_connections import PlatformConnection

# Creation order respects foreign key dependencies
ALL_MODELS = [
    User, Session, League, FantasyTeam, ChatMessage, WeeklyStats, PlatformConnection
]

__all__ = [
    'User', 'Session', 'League', 'FantasyTeam', 'ChatMessage', 'WeeklyStats', 'PlatformConnection', 'ALL_MODELS'
]
