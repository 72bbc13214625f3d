from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


# Mattermost's default post type; every system event uses a "system_*" type
USER_POST_TYPE = ""



@dataclass(frozen=True)
class Team:
    id: str
    name: str
    display_name: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            id=data["id"],
            name=data["name"],
            display_name=data.get("display_name", ""),
        )



@dataclass(frozen=True)
class Channel:
    id: str
    name: str
    display_name: str
    create_at: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Channel":
        return cls(
            id=data["id"],
            name=data["name"],
            display_name=data.get("display_name", ""),
            create_at=int(data.get("create_at", 0)),
        )

    @property
    def created(self) -> datetime:
        return datetime.fromtimestamp(self.create_at / 1000, tz=timezone.utc)



@dataclass(frozen=True)
class Post:
    id: str
    channel_id: str
    type: str
    create_at: int
    user_id: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Post":
        return cls(
            id=data["id"],
            channel_id=data.get("channel_id", ""),
            type=data.get("type", USER_POST_TYPE),
            create_at=int(data.get("create_at", 0)),
            user_id=data.get("user_id", ""),
        )

    @property
    def is_user_message(self) -> bool:
        """True for authored content, False for joins, leaves, header changes etc."""
        return self.type == USER_POST_TYPE



@dataclass(frozen=True)
class ArchiveOutcome:
    channel: Channel
    success: bool



@dataclass
class ArchiveRun:
    """Everything one archiver run saw and did"""
    team: Team
    cutoff: datetime
    dry_run: bool
    channels: List[Channel] = field(default_factory=list)
    unused_channels: List[Channel] = field(default_factory=list)
    outcomes: List[ArchiveOutcome] = field(default_factory=list)

    @property
    def failed(self) -> List[ArchiveOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]
