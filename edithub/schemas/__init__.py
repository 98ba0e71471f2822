from edithub.schemas.access import SignInIn, SignInOut, IdentityOut
from edithub.schemas.catalog import (
    GroupCreate, GroupUpdate, GroupOut, GroupAdminOut,
    ClientCreate, ClientUpdate, ClientOut,
    AccessCodeCreate, AccessCodeUpdate, AccessCodeOut,
    VideoCreate, StreamableUploadIn, VideoUpdate, VideoOut, CleanupOut,
)
from edithub.schemas.feedback import FeedbackCreate, FeedbackOut
from edithub.schemas.profile import ProfileSignUp, ProfileSignIn, ProfileOut

__all__ = [
    "SignInIn",
    "SignInOut",
    "IdentityOut",
    "GroupCreate",
    "GroupUpdate",
    "GroupOut",
    "GroupAdminOut",
    "ClientCreate",
    "ClientUpdate",
    "ClientOut",
    "AccessCodeCreate",
    "AccessCodeUpdate",
    "AccessCodeOut",
    "VideoCreate",
    "StreamableUploadIn",
    "VideoUpdate",
    "VideoOut",
    "CleanupOut",
    "FeedbackCreate",
    "FeedbackOut",
    "ProfileSignUp",
    "ProfileSignIn",
    "ProfileOut",
]
