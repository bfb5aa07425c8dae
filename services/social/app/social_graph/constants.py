"""
Social graph domain — enums.
"""
from __future__ import annotations

import enum


class FriendRequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class FriendRequestAction(str, enum.Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


# Terminal status reached by each response action
ACTION_TO_STATUS: dict[FriendRequestAction, FriendRequestStatus] = {
    FriendRequestAction.ACCEPT: FriendRequestStatus.ACCEPTED,
    FriendRequestAction.DECLINE: FriendRequestStatus.DECLINED,
}
