from journal_api.models.question import Question
from journal_api.models.refresh_token import RefreshToken
from journal_api.models.user import User
from journal_api.models.user_setting import UserSetting

__all__ = [
    "Question",
    "RefreshToken",
    "User",
    "UserSetting",
]
