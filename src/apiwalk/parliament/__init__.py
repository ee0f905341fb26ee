"""
Parliament: annunciator (who is speaking) + members (written questions)
"""

from .annunciator import (
    ANNUNCIATORS,
    NAME_NOT_FOUND,
    AnnunciatorMember,
    ParliamentClient,
    WrittenQuestionCount,
    annunciator_request,
    format_annunciator_date,
    written_questions_request,
)

__all__ = [
    "ANNUNCIATORS",
    "NAME_NOT_FOUND",
    "AnnunciatorMember",
    "ParliamentClient",
    "WrittenQuestionCount",
    "annunciator_request",
    "format_annunciator_date",
    "written_questions_request",
]
