# Models package init: importing it registers every table on Base.metadata
from bookshelf.models.author import Author
from bookshelf.models.user import PersonalAccessToken, User

__all__ = ["Author", "PersonalAccessToken", "User"]
