"""Tests for the Parliament annunciator + members client (fake executor)."""

from datetime import datetime, timedelta, timezone

import pytest

from apiwalk.config import Settings
from apiwalk.core import DecodeError, HttpStatusError, InvalidArgument, NetworkError, build
from apiwalk.parliament import (
    NAME_NOT_FOUND,
    ParliamentClient,
    annunciator_request,
    format_annunciator_date,
    written_questions_request,
)

NOW = "https://now-api.parliament.uk/api/Message/message"
MEMBERS = "https://members-api.parliament.uk/api/Members"

MESSAGE = {
    "annunciatorType": "LordsMain",
    "slides": [
        {
            "lines": [
                {"content": "Oral questions"},
                {"member": {"nameFullTitle": "Lord Example", "id": 4321}},
                {"member": {"nameFullTitle": "Baroness Sample", "id": 1234}},
            ]
        },
        {"lines": [{"member": {"nameFullTitle": "Lord Third", "id": 99}}]},
    ],
}


@pytest.fixture
def client(fake_executor):
    return ParliamentClient(Settings(), executor=fake_executor)


@pytest.mark.clients
class TestRequests:
    def test_annunciator_url(self):
        desc = annunciator_request("LordsMain", "2025-05-20T15:00:00Z")
        assert desc.url == f"{NOW}/LordsMain/2025-05-20T15:00:00Z"

    def test_current(self):
        assert annunciator_request("CommonsMain").url == f"{NOW}/CommonsMain/current"

    def test_unknown_annunciator(self):
        with pytest.raises(InvalidArgument):
            annunciator_request("Westminster Hall")

    def test_datetime_rendered_in_utc(self):
        bst = timezone(timedelta(hours=1))
        assert format_annunciator_date(datetime(2025, 5, 20, 16, 0, tzinfo=bst)) == "2025-05-20T15:00:00Z"

    def test_naive_datetime_taken_as_utc(self):
        assert format_annunciator_date(datetime(2025, 5, 20, 15)) == "2025-05-20T15:00:00Z"

    @pytest.mark.parametrize("date", ["2025/05/20", "yesterday", "2025-13-40", "current/../x"])
    def test_non_iso_date_rejected(self, date):
        with pytest.raises(InvalidArgument):
            annunciator_request("LordsMain", date)

    @pytest.mark.parametrize("date", ["2025-05-20", "2025-05-20T15:00:00", "2025-05-20T16:00:00+01:00"])
    def test_iso_dates_accepted(self, date):
        assert format_annunciator_date(date) == date

    def test_date_is_one_escaped_segment(self):
        """Route lives in the base; annunciator and date are data segments"""
        desc = annunciator_request("LordsMain", "2025-05-20T16:00:00+01:00")
        assert desc.base == "https://now-api.parliament.uk/api/Message/message"
        assert desc.segments == ("LordsMain", "2025-05-20T16:00:00+01:00")

    def test_data_segment_slash_encoded(self):
        """The same build call percent-encodes a slash in a data value"""
        desc = build("https://now-api.parliament.uk/api/Message/message", ["LordsMain", "2025/05/20"], literal_slashes=False)
        assert desc.url == f"{NOW}/LordsMain/2025%2F05%2F20"

    def test_blank_date_rejected(self):
        with pytest.raises(InvalidArgument):
            format_annunciator_date("  ")

    def test_written_questions_url(self):
        assert written_questions_request(4321).url == f"{MEMBERS}/4321/WrittenQuestions"

    @pytest.mark.parametrize("member_id", [0, -5, "4321", True, None])
    def test_written_questions_bad_id(self, member_id):
        with pytest.raises(InvalidArgument):
            written_questions_request(member_id)


@pytest.mark.clients
class TestAnnunciatorMember:
    def test_member_on_second_line(self, client, fake_executor):
        fake_executor.add_json(f"{NOW}/LordsMain/current", MESSAGE)

        member = client.get_annunciator_member("LordsMain")

        assert member.found
        assert member.name_full_title == "Lord Example"
        assert member.member_id == 4321
        assert fake_executor.calls == [f"{NOW}/LordsMain/current"]

    def test_short_slide_returns_defaults(self, client, fake_executor):
        """One-line slide: not found -> default, no IndexError"""
        fake_executor.add_json(f"{NOW}/CommonsMain/current", {"slides": [{"lines": [{"content": "Prayers"}]}]})

        member = client.get_annunciator_member("CommonsMain")

        assert not member.found
        assert member.name_full_title == NAME_NOT_FOUND
        assert member.member_id is None

    def test_line_without_member(self, client, fake_executor):
        fake_executor.add_json(f"{NOW}/CommonsMain/current", {"slides": [{"lines": [{}, {"content": "Division"}]}]})
        assert client.get_annunciator_member("CommonsMain").name_full_title == NAME_NOT_FOUND

    def test_member_missing_name(self, client, fake_executor):
        fake_executor.add_json(f"{NOW}/CommonsMain/current", {"slides": [{"lines": [{}, {"member": {"id": 7}}]}]})
        member = client.get_annunciator_member("CommonsMain")
        assert member.member_id == 7
        assert member.name_full_title == NAME_NOT_FOUND

    def test_empty_message(self, client, fake_executor):
        fake_executor.add_json(f"{NOW}/CommonsMain/current", {})
        assert not client.get_annunciator_member("CommonsMain").found

    def test_list_members(self, client, fake_executor):
        fake_executor.add_json(f"{NOW}/LordsMain/current", MESSAGE)

        members = client.list_annunciator_members("LordsMain")

        assert [(m.member_id, m.slide_index, m.line_index) for m in members] == [
            (4321, 0, 1),
            (1234, 0, 2),
            (99, 1, 0),
        ]


@pytest.mark.clients
class TestWrittenQuestions:
    def test_total_results(self, client, fake_executor):
        fake_executor.add_json(f"{MEMBERS}/4321/WrittenQuestions", {"items": [], "totalResults": 57})
        count = client.get_written_question_count(4321)
        assert count.member_id == 4321
        assert count.total_results == 57

    def test_missing_total(self, client, fake_executor):
        fake_executor.add_json(f"{MEMBERS}/4321/WrittenQuestions", {"items": []})
        assert client.get_written_question_count(4321).total_results is None


@pytest.mark.clients
class TestErrorsPropagate:
    """Terminal errors surface to the caller unchanged"""

    def test_http_status(self, client, fake_executor):
        fake_executor.add_json(f"{NOW}/LordsMain/current", {"error": "down"}, status_code=500)
        with pytest.raises(HttpStatusError):
            client.get_annunciator_member("LordsMain")

    def test_decode(self, client, fake_executor):
        fake_executor.add_raw(f"{NOW}/LordsMain/current", b"<html>maintenance</html>")
        with pytest.raises(DecodeError):
            client.get_annunciator_member("LordsMain")

    def test_network(self, client, fake_executor):
        fake_executor.add_error(f"{NOW}/LordsMain/current", NetworkError("TIMEOUT", url=f"{NOW}/LordsMain/current"))
        with pytest.raises(NetworkError):
            client.get_annunciator_member("LordsMain")
        assert len(fake_executor.calls) == 1

    def test_invalid_argument_before_any_call(self, client, fake_executor):
        with pytest.raises(InvalidArgument):
            client.get_annunciator_member("Nope")
        assert fake_executor.calls == []
