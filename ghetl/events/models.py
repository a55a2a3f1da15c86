"""Typed GitHub event structures.

Events are modelled as a msgspec tagged union keyed by the JSON ``type``
field. Each of the sixteen recognised event types is its own frozen struct
whose payload only declares the fields relevant to that type. Unknown fields
are ignored at every level so archives recorded against newer GitHub
schemas still decode.

Usage
-----
>>> import msgspec
>>> from ghetl.events.models import GitHubEvent
>>> msgspec.json.decode(raw_line, type=GitHubEvent).event_type
<EventType.PUSH: 'PushEvent'>

"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

NonNegativeInt = typ.Annotated[int, msgspec.Meta(ge=0)]


class EventType(enum.StrEnum):
    """Closed set of GitHub event types accepted by the pipeline."""

    PUSH = "PushEvent"
    PULL_REQUEST = "PullRequestEvent"
    PULL_REQUEST_REVIEW = "PullRequestReviewEvent"
    PULL_REQUEST_REVIEW_COMMENT = "PullRequestReviewCommentEvent"
    CREATE = "CreateEvent"
    DELETE = "DeleteEvent"
    ISSUES = "IssuesEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    WATCH = "WatchEvent"
    FORK = "ForkEvent"
    RELEASE = "ReleaseEvent"
    GOLLUM = "GollumEvent"
    MEMBER = "MemberEvent"
    PUBLIC = "PublicEvent"
    COMMIT_COMMENT = "CommitCommentEvent"
    DISCUSSION = "DiscussionEvent"

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return every recognised type name in declaration order."""
        return tuple(member.value for member in cls)


class Actor(msgspec.Struct, frozen=True, kw_only=True, omit_defaults=True):
    """User or bot that triggered the event."""

    id: NonNegativeInt
    login: str
    gravatar_id: str
    url: str
    avatar_url: str
    display_login: str | None = None


class Repo(msgspec.Struct, frozen=True, kw_only=True):
    """Repository the event belongs to."""

    id: NonNegativeInt
    name: str
    url: str


class Org(msgspec.Struct, frozen=True, kw_only=True):
    """Organisation owning the repository, when there is one."""

    id: NonNegativeInt
    login: str
    gravatar_id: str
    url: str
    avatar_url: str


class _Shape(msgspec.Struct, frozen=True, kw_only=True, omit_defaults=True):
    """Base for payload sub-structures where every field is optional."""


class PullRequest(_Shape):
    """Pull request reference embedded in a payload."""

    url: str | None = None
    id: NonNegativeInt | None = None
    number: NonNegativeInt | None = None
    head: typ.Any = None
    base: typ.Any = None


class Issue(_Shape):
    """Issue reference embedded in a payload."""

    url: str | None = None
    id: NonNegativeInt | None = None
    number: NonNegativeInt | None = None
    title: str | None = None
    body: str | None = None
    user: typ.Any = None
    state: str | None = None
    assignee: typ.Any = None
    assignees: tuple[typ.Any, ...] | None = None
    labels: tuple[typ.Any, ...] | None = None


class Comment(_Shape):
    """Issue, commit, or review comment."""

    url: str | None = None
    id: NonNegativeInt | None = None
    body: str | None = None
    user: typ.Any = None
    created_at: str | None = None
    updated_at: str | None = None


class Review(_Shape):
    """Pull request review."""

    id: NonNegativeInt | None = None
    user: typ.Any = None
    body: str | None = None
    state: str | None = None
    submitted_at: str | None = None


class Release(_Shape):
    """Published release."""

    id: NonNegativeInt | None = None
    tag_name: str | None = None
    name: str | None = None
    body: str | None = None
    draft: bool | None = None
    prerelease: bool | None = None
    created_at: str | None = None


class Forkee(_Shape):
    """Repository created by a fork."""

    id: NonNegativeInt | None = None
    name: str | None = None
    full_name: str | None = None
    owner: typ.Any = None
    description: str | None = None
    url: str | None = None


class Label(_Shape):
    """Label attached to an issue or pull request."""

    id: NonNegativeInt | None = None
    name: str | None = None
    color: str | None = None
    default: bool | None = None


class PushPayload(_Shape):
    """Payload of a ``PushEvent``."""

    repository_id: NonNegativeInt | None = None
    push_id: NonNegativeInt | None = None
    ref: str | None = None
    head: str | None = None
    before: str | None = None


class PullRequestPayload(_Shape):
    """Payload of a ``PullRequestEvent``."""

    action: str | None = None
    number: NonNegativeInt | None = None
    pull_request: PullRequest | None = None
    assignee: typ.Any = None
    assignees: tuple[typ.Any, ...] | None = None
    label: Label | None = None
    labels: tuple[typ.Any, ...] | None = None


class PullRequestReviewPayload(_Shape):
    """Payload of a ``PullRequestReviewEvent``."""

    action: str | None = None
    pull_request: PullRequest | None = None
    review: Review | None = None


class PullRequestReviewCommentPayload(_Shape):
    """Payload of a ``PullRequestReviewCommentEvent``."""

    action: str | None = None
    pull_request: PullRequest | None = None
    comment: Comment | None = None


class CreatePayload(_Shape):
    """Payload of a ``CreateEvent``."""

    ref: str | None = None
    ref_type: str | None = None
    full_ref: str | None = None
    master_branch: str | None = None
    description: str | None = None
    pusher_type: str | None = None


class DeletePayload(_Shape):
    """Payload of a ``DeleteEvent``."""

    ref: str | None = None
    ref_type: str | None = None
    full_ref: str | None = None
    pusher_type: str | None = None


class IssuesPayload(_Shape):
    """Payload of an ``IssuesEvent``."""

    action: str | None = None
    issue: Issue | None = None
    assignee: typ.Any = None
    assignees: tuple[typ.Any, ...] | None = None
    label: Label | None = None
    labels: tuple[typ.Any, ...] | None = None


class IssueCommentPayload(_Shape):
    """Payload of an ``IssueCommentEvent``."""

    action: str | None = None
    issue: Issue | None = None
    comment: Comment | None = None


class WatchPayload(_Shape):
    """Payload of a ``WatchEvent``."""

    action: str | None = None


class ForkPayload(_Shape):
    """Payload of a ``ForkEvent``."""

    forkee: Forkee | None = None


class ReleasePayload(_Shape):
    """Payload of a ``ReleaseEvent``."""

    action: str | None = None
    release: Release | None = None


class GollumPayload(_Shape):
    """Payload of a ``GollumEvent`` (wiki page edits)."""

    pages: tuple[typ.Any, ...] | None = None


class MemberPayload(_Shape):
    """Payload of a ``MemberEvent``."""

    action: str | None = None
    member: typ.Any = None


class PublicPayload(_Shape):
    """Payload of a ``PublicEvent``; GitHub sends an empty object."""


class CommitCommentPayload(_Shape):
    """Payload of a ``CommitCommentEvent``."""

    action: str | None = None
    comment: Comment | None = None


class DiscussionPayload(_Shape):
    """Payload of a ``DiscussionEvent``."""

    action: str | None = None
    discussion: typ.Any = None


class BaseGitHubEvent(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    tag_field="type",
):
    """Fields shared by every event variant.

    Attributes
    ----------
    id : str
        GitHub's event identifier.
    actor : Actor
        Account that triggered the event.
    repo : Repo
        Repository the event happened in.
    public : bool
        Whether the event is publicly visible.
    created_at : str
        ISO-8601 timestamp, kept as text.
    org : Org | None
        Owning organisation, absent for user repositories.

    """

    id: str
    actor: Actor
    repo: Repo
    public: bool
    created_at: str
    org: Org | None = None

    @property
    def event_type(self) -> EventType:
        """Return the closed-set type this variant was decoded from."""
        return EventType(self.__struct_config__.tag)


class PushEvent(BaseGitHubEvent, tag=True):
    """One or more commits pushed to a branch or tag."""

    payload: PushPayload


class PullRequestEvent(BaseGitHubEvent, tag=True):
    """Activity on a pull request."""

    payload: PullRequestPayload


class PullRequestReviewEvent(BaseGitHubEvent, tag=True):
    """A pull request review was submitted or changed."""

    payload: PullRequestReviewPayload


class PullRequestReviewCommentEvent(BaseGitHubEvent, tag=True):
    """A comment on a pull request diff."""

    payload: PullRequestReviewCommentPayload


class CreateEvent(BaseGitHubEvent, tag=True):
    """A branch, tag, or repository was created."""

    payload: CreatePayload


class DeleteEvent(BaseGitHubEvent, tag=True):
    """A branch or tag was deleted."""

    payload: DeletePayload


class IssuesEvent(BaseGitHubEvent, tag=True):
    """Activity on an issue."""

    payload: IssuesPayload


class IssueCommentEvent(BaseGitHubEvent, tag=True):
    """A comment on an issue or pull request conversation."""

    payload: IssueCommentPayload


class WatchEvent(BaseGitHubEvent, tag=True):
    """A repository was starred."""

    payload: WatchPayload


class ForkEvent(BaseGitHubEvent, tag=True):
    """A repository was forked."""

    payload: ForkPayload


class ReleaseEvent(BaseGitHubEvent, tag=True):
    """Activity on a release."""

    payload: ReleasePayload


class GollumEvent(BaseGitHubEvent, tag=True):
    """Wiki pages were created or updated."""

    payload: GollumPayload


class MemberEvent(BaseGitHubEvent, tag=True):
    """A collaborator was added to a repository."""

    payload: MemberPayload


class PublicEvent(BaseGitHubEvent, tag=True):
    """A private repository was made public."""

    payload: PublicPayload


class CommitCommentEvent(BaseGitHubEvent, tag=True):
    """A comment on a commit."""

    payload: CommitCommentPayload


class DiscussionEvent(BaseGitHubEvent, tag=True):
    """Activity on a repository discussion."""

    payload: DiscussionPayload


GitHubEvent: typ.TypeAlias = (
    PushEvent
    | PullRequestEvent
    | PullRequestReviewEvent
    | PullRequestReviewCommentEvent
    | CreateEvent
    | DeleteEvent
    | IssuesEvent
    | IssueCommentEvent
    | WatchEvent
    | ForkEvent
    | ReleaseEvent
    | GollumEvent
    | MemberEvent
    | PublicEvent
    | CommitCommentEvent
    | DiscussionEvent
)

EVENT_VARIANTS: dict[EventType, type[BaseGitHubEvent]] = {
    EventType(variant.__struct_config__.tag): variant
    for variant in typ.get_args(GitHubEvent)
}
