from novel_extras.models.chapter import Chapter
from novel_extras.models.visit import Visit
from novel_extras.models.user import User
from novel_extras.models.comment import Comment
from novel_extras.models.mention import Mention
from novel_extras.models.vote import Vote

__all__ = ['Chapter', 'Visit', 'User', 'Comment', 'Mention', 'Vote']
