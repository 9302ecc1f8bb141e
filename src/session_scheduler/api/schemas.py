"""Pydantic request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from session_scheduler.domain.actors import UserRecord
from session_scheduler.domain.sessions import Feedback, Session


class ProposalCreate(BaseModel):
    """Body of a new session proposal."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    time_start: AwareDatetime
    time_end: AwareDatetime
    maximum_participants: int = Field(gt=0)


class SessionUpdate(BaseModel):
    """Partial session edit; omitted fields keep their values."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    time_start: AwareDatetime | None = None
    time_end: AwareDatetime | None = None
    maximum_participants: int | None = Field(default=None, gt=0)


class ProposalDecision(BaseModel):
    action: str


class FeedbackCreate(BaseModel):
    comment: str = Field(min_length=1)


class FeedbackOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    comment: str
    created_at: datetime

    @classmethod
    def from_domain(cls, feedback: Feedback) -> "FeedbackOut":
        return cls.model_validate(feedback)


class SessionOut(BaseModel):
    """Session as returned to clients."""

    id: UUID
    title: str
    description: str
    time_start: datetime
    time_end: datetime
    maximum_participants: int
    status: str
    created_by: UUID
    participants: list[UUID]
    feedbacks: list[FeedbackOut]
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, session: Session) -> "SessionOut":
        return cls(
            id=session.id,
            title=session.title,
            description=session.description,
            time_start=session.time_start,
            time_end=session.time_end,
            maximum_participants=session.maximum_participants,
            status=str(session.status),
            created_by=session.created_by,
            participants=list(session.participants),
            feedbacks=[FeedbackOut.from_domain(item) for item in session.feedbacks],
            created_at=session.created_at,
        )


class UserOut(BaseModel):
    id: UUID
    username: str
    role: str

    @classmethod
    def from_domain(cls, user: UserRecord) -> "UserOut":
        return cls(id=user.id, username=user.username, role=str(user.role))


class MessageOut(BaseModel):
    message: str
