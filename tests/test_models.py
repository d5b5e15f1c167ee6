"""Tests for data models."""

import logging

from factories import issue_payload, make_issue, repository_payload

from issuedesk.models import (
    AppConfig,
    Comment,
    Issue,
    IssueState,
    IssueStateFilter,
    LocalAttributes,
    ManualStatus,
    Repository,
)


class TestIssueFromApi:
    """Tests for translating GitHub issue payloads."""

    def test_maps_fields(self):
        """API fields map onto the upstream attributes."""
        issue = Issue.from_api(issue_payload(7, comments=3, state="closed"))

        assert issue.id == 7
        assert issue.number == 7
        assert issue.state == IssueState.CLOSED
        assert issue.author.login == "octocat"
        assert issue.comment_count == 3
        assert issue.label_names == ["bug"]
        assert issue.url == "https://github.com/octocat/hello/issues/7"
        assert issue.created_at.tzinfo is not None

    def test_local_attributes_default(self):
        """A translated issue carries default local attributes."""
        issue = Issue.from_api(issue_payload())

        assert issue.private_notes is None
        assert issue.is_archived is False
        assert issue.manual_status is ManualStatus.NONE

    def test_null_labels_and_body(self):
        """Null body and labels are accepted."""
        issue = Issue.from_api(issue_payload(body=None, labels=None))

        assert issue.body is None
        assert issue.labels == []


class TestIssueAttributeGroups:
    """Tests for the upstream/local split."""

    def test_groups_are_disjoint(self):
        assert not set(Issue.UPSTREAM_FIELDS) & set(Issue.LOCAL_FIELDS)

    def test_groups_cover_every_field(self):
        assert set(Issue.UPSTREAM_FIELDS) | set(Issue.LOCAL_FIELDS) == set(Issue.model_fields)

    def test_with_local_replaces_only_local(self):
        """with_local leaves upstream attributes alone."""
        issue = make_issue(1, title="Original")
        local = LocalAttributes(
            private_notes="remember", is_archived=True, manual_status=ManualStatus.RED
        )

        updated = issue.with_local(local)

        assert updated.title == "Original"
        assert updated.private_notes == "remember"
        assert updated.is_archived is True
        assert updated.manual_status is ManualStatus.RED
        assert issue.private_notes is None

    def test_with_upstream_keeps_local(self):
        """with_upstream takes the other issue's upstream attributes only."""
        existing = make_issue(1, title="Old", private_notes="mine")
        fresh = make_issue(1, title="New", state=IssueState.CLOSED, comment_count=4)

        merged = existing.with_upstream(fresh)

        assert merged.title == "New"
        assert merged.state == IssueState.CLOSED
        assert merged.comment_count == 4
        assert merged.private_notes == "mine"

    def test_has_notes_ignores_whitespace(self):
        assert make_issue(private_notes="   ").has_notes is False
        assert make_issue(private_notes="x").has_notes is True


class TestManualStatusCoercion:
    """Tests for loading manual status tags."""

    def test_wire_values(self):
        """Status tags use the camelCase wire values."""
        assert ManualStatus("lightGreen") is ManualStatus.LIGHT_GREEN
        assert ManualStatus("darkGreen") is ManualStatus.DARK_GREEN

    def test_missing_status_is_none(self):
        issue = make_issue(manual_status=None)
        assert issue.manual_status is ManualStatus.NONE

    def test_unknown_status_is_none(self, caplog):
        """An unknown tag loads as NONE and is logged."""
        with caplog.at_level(logging.WARNING):
            issue = make_issue(manual_status="purple")

        assert issue.manual_status is ManualStatus.NONE
        assert "purple" in caplog.text

    def test_implied_upstream_state(self):
        assert ManualStatus.RED.implies_open
        assert ManualStatus.YELLOW.implies_open
        assert ManualStatus.LIGHT_GREEN.implies_closed
        assert ManualStatus.DARK_GREEN.implies_closed
        assert not ManualStatus.NONE.implies_open
        assert not ManualStatus.NONE.implies_closed


class TestRepositoryFromApi:
    """Tests for translating repository payloads."""

    def test_maps_fields(self):
        repo = Repository.from_api(repository_payload("my-cool_repo", private=True))

        assert repo.owner == "octocat"
        assert repo.full_name == "octocat/my-cool_repo"
        assert repo.is_private is True
        assert repo.url == "https://github.com/octocat/my-cool_repo"
        assert repo.display_name == "My Cool Repo"

    def test_empty_homepage_is_none(self):
        repo = Repository.from_api(repository_payload(homepage=""))
        assert repo.homepage is None


class TestCommentFromApi:
    def test_maps_fields(self):
        comment = Comment.from_api(
            {
                "id": 9,
                "body": None,
                "user": {"login": "hubot"},
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z",
            }
        )
        assert comment.author.login == "hubot"
        assert comment.body == ""


class TestAppConfig:
    """Tests for the config.yml model."""

    def test_defaults(self):
        config = AppConfig.default()

        assert config.github.base_url == "api.github.com"
        assert config.ui.issue_state is IssueStateFilter.ALL
        assert config.ui.page_size == 100
        assert not config.has_github_token

    def test_empty_sections_use_defaults(self):
        """`github:` with no value loads as the default section."""
        config = AppConfig(github=None, paths=None, ui=None)
        assert config.github.token == ""

    def test_data_directory_expands_user(self):
        config = AppConfig(paths={"data_directory": "~/issues"})
        assert "~" not in str(config.data_directory)
