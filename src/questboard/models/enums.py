"""String enums for the job board domain."""

from enum import StrEnum


class JobStatus(StrEnum):
    """Job lifecycle status. Declaration order is the canonical order."""

    POSTED = "Posted"
    TAKEN = "Taken"
    COMPLETED = "Completed"
    FAILED = "Failed"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"

    @property
    def is_open(self) -> bool:
        return self in (JobStatus.POSTED, JobStatus.TAKEN)

    @property
    def is_terminal(self) -> bool:
        return not self.is_open


class ReputationTargetType(StrEnum):
    LOCATION = "Location"
    FACTION = "Faction"
    NPC = "NPC"


class ReputationCondition(StrEnum):
    ON_SUCCESS = "OnSuccess"
    ON_FAILURE = "OnFailure"
    ON_EXPIRATION = "OnExpiration"


class JobStatusChangeReason(StrEnum):
    MANUAL = "Manual"
    AUTO_EXPIRED = "AutoExpired"


class JobEventType(StrEnum):
    CREATED = "JobCreated"
    UPDATED = "JobUpdated"
    STATUS_CHANGED = "JobStatusChanged"
    DELETED = "JobDeleted"
    REWARDS_DISTRIBUTED = "JobRewardsDistributed"


class CalendarEventType(StrEnum):
    TIME_ADVANCED = "TimeAdvanced"


# --- Query engine enums ---


class JobSortField(StrEnum):
    POST_DATE = "postDate"
    TITLE = "title"
    STATUS = "status"
    LOCATION = "location"
    DAYS_REMAINING = "daysRemaining"


class SortDirection(StrEnum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class JobGroupField(StrEnum):
    NONE = "none"
    STATUS = "status"
    LOCATION = "location"
