# Import all models here so Alembic and create_all can detect them
from threadline.db.session import Base

from threadline.modules.user_management.models.user import User
from threadline.modules.follows.models.follow import Follow
from threadline.modules.posts.models.post import Post
from threadline.modules.posts.comments.models.comment import Comment
from threadline.modules.posts.reposts.models.repost import Repost
from threadline.modules.notifications.models.notification import Notification
from threadline.modules.messaging.models.conversation import Conversation, Message
