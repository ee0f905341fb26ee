"""
Parliament annunciator + members lookups

Walkthrough:
1. GET {now_base}/Message/message/{annunciator}/{date}
2. pluck slides[0].lines[1].member -> nameFullTitle, id
3. GET {members_base}/Members/{id}/WrittenQuestions -> totalResults

A slide with fewer lines than expected is a "not found -> default" case,
never an IndexError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Union

from ..config import Settings
from ..core.errors import InvalidArgument
from ..core.http import Executor, RequestsExecutor, fetch_json
from ..core.pluck import pluck
from ..core.request import RequestDescriptor, build

logger = logging.getLogger(__name__)

ANNUNCIATORS = ("CommonsMain", "LordsMain")
NAME_NOT_FOUND = "Value not found"
CURRENT = "current"

# second line of the first slide carries the member being announced
MEMBER_SLIDE = 0
MEMBER_LINE = 1


@dataclass(frozen=True)
class AnnunciatorMember:
    name_full_title: str
    member_id: Optional[int]
    slide_index: int = 0
    line_index: int = 1

    @property
    def found(self) -> bool:
        return self.member_id is not None


@dataclass(frozen=True)
class WrittenQuestionCount:
    member_id: int
    total_results: Optional[int]


def format_annunciator_date(date: Union[str, datetime]) -> str:
    """
    "current" or an ISO-8601 string pass through; datetimes become
    YYYY-MM-DDTHH:MM:SSZ in UTC (naive datetimes are taken as UTC).

    Any other string raises InvalidArgument.
    """
    if isinstance(date, datetime):
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return date.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    if not isinstance(date, str) or not date.strip():
        raise InvalidArgument("date must be 'current', an ISO-8601 string or a datetime")

    text = date.strip()
    if text == CURRENT:
        return text
    # fromisoformat only learned the Z suffix in 3.11
    candidate = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        datetime.fromisoformat(candidate)
    except ValueError as e:
        raise InvalidArgument(f"date must be 'current' or ISO-8601, got {date!r}") from e
    return text


def annunciator_request(
    annunciator: str,
    date: Union[str, datetime] = "current",
    base: str = Settings.parliament_now_base,
) -> RequestDescriptor:
    if annunciator not in ANNUNCIATORS:
        raise InvalidArgument(f"annunciator must be one of {ANNUNCIATORS}, got {annunciator!r}")
    if not isinstance(base, str) or not base.strip():
        raise InvalidArgument("base must be a non-empty string")
    # fixed route in the base; annunciator and date are data, so "/" is escaped
    route = base.rstrip("/") + "/Message/message"
    return build(route, [annunciator, format_annunciator_date(date)], literal_slashes=False)


def written_questions_request(
    member_id: int,
    base: str = Settings.parliament_members_base,
) -> RequestDescriptor:
    if isinstance(member_id, bool) or not isinstance(member_id, int) or member_id <= 0:
        raise InvalidArgument(f"member_id must be a positive integer, got {member_id!r}")
    return build(base, ["Members", member_id, "WrittenQuestions"])


def _member_at(message, slide_index: int, line_index: int) -> AnnunciatorMember:
    member = pluck(message, ["slides", slide_index, "lines", line_index, "member"], None, dict)
    return AnnunciatorMember(
        name_full_title=pluck(member, ["nameFullTitle"], NAME_NOT_FOUND, str),
        member_id=pluck(member, ["id"], None, int),
        slide_index=slide_index,
        line_index=line_index,
    )


class ParliamentClient:
    """
    Thin client over the annunciator and members APIs.

    Errors (NetworkError, HttpStatusError, DecodeError) propagate; absent
    fields come back as defaults.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        executor: Optional[Executor] = None,
    ):
        self.settings = settings or Settings()
        self.executor = executor or RequestsExecutor(user_agent=self.settings.user_agent)

    def get_annunciator_message(self, annunciator: str, date: Union[str, datetime] = "current"):
        descriptor = annunciator_request(annunciator, date, base=self.settings.parliament_now_base)
        return fetch_json(self.executor, descriptor, self.settings.timeout)

    def get_annunciator_member(
        self,
        annunciator: str = "CommonsMain",
        date: Union[str, datetime] = "current",
    ) -> AnnunciatorMember:
        """Member shown on line 2 of slide 1, or defaults if that line is absent."""
        message = self.get_annunciator_message(annunciator, date)
        member = _member_at(message, MEMBER_SLIDE, MEMBER_LINE)
        if not member.found:
            logger.info("[parliament] no member at slides[0].lines[1] for %s/%s", annunciator, date)
        return member

    def list_annunciator_members(
        self,
        annunciator: str = "CommonsMain",
        date: Union[str, datetime] = "current",
    ) -> List[AnnunciatorMember]:
        """Every line on every slide that carries a member, in display order."""
        message = self.get_annunciator_message(annunciator, date)
        members: List[AnnunciatorMember] = []
        slides = pluck(message, ["slides"], [], list)
        for s, slide in enumerate(slides):
            lines = pluck(slide, ["lines"], [], list)
            for i in range(len(lines)):
                member = _member_at(message, s, i)
                if member.found:
                    members.append(member)
        logger.info("[parliament] %s/%s: %s members on %s slides", annunciator, date, len(members), len(slides))
        return members

    def get_written_question_count(self, member_id: int) -> WrittenQuestionCount:
        descriptor = written_questions_request(member_id, base=self.settings.parliament_members_base)
        data = fetch_json(self.executor, descriptor, self.settings.timeout)
        return WrittenQuestionCount(
            member_id=member_id,
            total_results=pluck(data, ["totalResults"], None, int),
        )
