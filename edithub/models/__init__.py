# edithub/models/__init__.py
from edithub.models.group import VideoGroup
from edithub.models.client import Client
from edithub.models.access_code import AccessCode
from edithub.models.video import Video
from edithub.models.feedback import Feedback
from edithub.models.profile import Profile

__all__ = ["VideoGroup", "Client", "AccessCode", "Video", "Feedback", "Profile"]
