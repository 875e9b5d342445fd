"""
Modules package initialization.
This package contains all the functional modules of the application.
"""

from threadline.modules import auth
from threadline.modules import user_management
from threadline.modules import follows
from threadline.modules import posts
from threadline.modules import notifications
from threadline.modules import messaging
from threadline.modules import home_feed
from threadline.modules import media
