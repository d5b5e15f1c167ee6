"""Tests for the GitHub REST client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from factories import issue_payload, repository_payload

from issuedesk.github import (
    GitHubAuthError,
    GitHubClient,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubHTTPError,
    GitHubNotFoundError,
    GitHubResponseError,
)
from issuedesk.models import GitHubConfig, IssueState, IssueStateFilter


def mock_response(status_code: int = 200, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    response.text = str(body)
    return response


@pytest.fixture
def client():
    """Create a test client."""
    client = GitHubClient("test-token", page_size=50)
    yield client
    client.close()


class TestGitHubClientInit:
    """Tests for GitHubClient initialization."""

    def test_init_with_token(self):
        """Client initializes with token and default base URL."""
        client = GitHubClient("test-token")
        assert client.token == "test-token"
        assert client.base_url == "api.github.com"
        assert client.page_size == 100
        client.close()

    def test_sends_bearer_token(self, client):
        assert client._client.headers["Authorization"] == "Bearer test-token"
        assert client._client.headers["Accept"] == "application/vnd.github+json"

    def test_custom_base_url(self):
        """Client supports Enterprise hosts."""
        with GitHubClient("test-token", base_url="github.mycompany.com/api/v3") as client:
            assert str(client._client.base_url).startswith("https://github.mycompany.com")

    def test_empty_token_raises(self):
        with pytest.raises(GitHubAuthError):
            GitHubClient("")


class TestGitHubClientFromConfig:
    """Tests for GitHubClient.from_config / from_environment."""

    def test_uses_config_token(self):
        config = GitHubConfig(token=" config-token ", base_url="ghe.example.com")
        with GitHubClient.from_config(config, page_size=10) as client:
            assert client.token == "config-token"
            assert client.base_url == "ghe.example.com"
            assert client.page_size == 10

    def test_falls_back_to_environment(self):
        with (
            patch.dict("os.environ", {"GITHUB_TOKEN": "env-token"}),
            GitHubClient.from_config(GitHubConfig()) as client,
        ):
            assert client.token == "env-token"

    def test_from_gh_cli(self):
        """Client creates from gh CLI token."""
        mock_result = MagicMock()
        mock_result.stdout = "cli-token\n"
        with (
            patch.dict("os.environ", {}, clear=True),
            patch("subprocess.run", return_value=mock_result),
        ):
            client = GitHubClient.from_environment()
            assert client.token == "cli-token"
            client.close()

    def test_raises_when_no_token(self):
        """Client raises GitHubAuthError when no token available."""
        with (
            patch.dict("os.environ", {}, clear=True),
            patch("subprocess.run", side_effect=FileNotFoundError()),
            pytest.raises(GitHubAuthError) as exc_info,
        ):
            GitHubClient.from_config(GitHubConfig())
        assert "No GitHub token found" in str(exc_info.value)


class TestGitHubClientRequest:
    """Tests for status and transport error mapping."""

    def test_success_returns_json(self, client):
        with patch.object(
            client._client, "request", return_value=mock_response(200, {"ok": True})
        ) as mock_request:
            assert client.request("GET", "/user") == {"ok": True}
        mock_request.assert_called_once_with("GET", "/user", params=None, json=None)

    @pytest.mark.parametrize(
        ("status", "error"),
        [
            (401, GitHubAuthError),
            (403, GitHubForbiddenError),
            (404, GitHubNotFoundError),
            (422, GitHubHTTPError),
            (500, GitHubHTTPError),
        ],
    )
    def test_status_mapping(self, client, status, error):
        with (
            patch.object(client._client, "request", return_value=mock_response(status, {})),
            pytest.raises(error),
        ):
            client.request("GET", "/user")

    def test_http_error_carries_status_and_message(self, client):
        response = mock_response(422, {"message": "Validation Failed"})
        with (
            patch.object(client._client, "request", return_value=response),
            pytest.raises(GitHubHTTPError) as exc_info,
        ):
            client.request("POST", "/repos/o/r/issues")
        assert exc_info.value.status_code == 422
        assert "Validation Failed" in str(exc_info.value)

    def test_invalid_json_raises_response_error(self, client):
        response = mock_response(200)
        response.json.side_effect = ValueError("bad json")
        with (
            patch.object(client._client, "request", return_value=response),
            pytest.raises(GitHubResponseError),
        ):
            client.request("GET", "/user")

    def test_transport_error_raises_client_error(self, client):
        with (
            patch.object(client._client, "request", side_effect=httpx.ConnectError("down")),
            pytest.raises(GitHubClientError) as exc_info,
        ):
            client.request("GET", "/user")
        assert "Request failed" in str(exc_info.value)

    def test_all_errors_share_base(self):
        for error in (
            GitHubAuthError,
            GitHubForbiddenError,
            GitHubNotFoundError,
            GitHubResponseError,
        ):
            assert issubclass(error, GitHubClientError)
        assert issubclass(GitHubHTTPError, GitHubClientError)


class TestGitHubClientOperations:
    """Tests for the typed API operations."""

    def test_list_repositories_for_user(self, client):
        response = mock_response(200, [repository_payload("a"), repository_payload("b")])
        with patch.object(client._client, "request", return_value=response) as mock_request:
            repos = client.list_repositories("octocat")

        assert [r.name for r in repos] == ["a", "b"]
        args, kwargs = mock_request.call_args
        assert args == ("GET", "/users/octocat/repos")
        assert kwargs["params"] == {"per_page": 50, "sort": "updated"}

    def test_list_repositories_for_authenticated_user(self, client):
        with patch.object(
            client._client, "request", return_value=mock_response(200, [])
        ) as mock_request:
            client.list_repositories()
        assert mock_request.call_args.args == ("GET", "/user/repos")

    def test_list_issues_skips_pull_requests(self, client):
        pull = issue_payload(2, pull_request={"url": "https://example.com/pr/2"})
        response = mock_response(200, [issue_payload(1), pull, issue_payload(3)])
        with patch.object(client._client, "request", return_value=response) as mock_request:
            issues = client.list_issues("octocat", "hello", IssueStateFilter.OPEN)

        assert [i.id for i in issues] == [1, 3]
        args, kwargs = mock_request.call_args
        assert args == ("GET", "/repos/octocat/hello/issues")
        assert kwargs["params"] == {"state": "open", "per_page": 50}

    def test_list_issues_bad_shape_raises_response_error(self, client):
        response = mock_response(200, [{"id": 1}])
        with (
            patch.object(client._client, "request", return_value=response),
            pytest.raises(GitHubResponseError),
        ):
            client.list_issues("octocat", "hello")

    def test_list_issues_non_object_items_raise_response_error(self, client):
        with (
            patch.object(client._client, "request", return_value=mock_response(200, [1, 2])),
            pytest.raises(GitHubResponseError),
        ):
            client.list_issues("octocat", "hello")

    def test_list_issues_non_list_raises_response_error(self, client):
        with (
            patch.object(client._client, "request", return_value=mock_response(200, {})),
            pytest.raises(GitHubResponseError),
        ):
            client.list_issues("octocat", "hello")

    def test_create_issue(self, client):
        response = mock_response(201, issue_payload(9, title="New"))
        with patch.object(client._client, "request", return_value=response) as mock_request:
            issue = client.create_issue("octocat", "hello", "New", "Body")

        assert issue.id == 9
        assert mock_request.call_args.kwargs["json"] == {"title": "New", "body": "Body"}

    def test_create_issue_without_body(self, client):
        response = mock_response(201, issue_payload(9))
        with patch.object(client._client, "request", return_value=response) as mock_request:
            client.create_issue("octocat", "hello", "New")
        assert mock_request.call_args.kwargs["json"] == {"title": "New"}

    def test_update_issue_sends_only_given_fields(self, client):
        response = mock_response(200, issue_payload(9))
        with patch.object(client._client, "request", return_value=response) as mock_request:
            client.update_issue("octocat", "hello", 9, body="New body")

        args, kwargs = mock_request.call_args
        assert args == ("PATCH", "/repos/octocat/hello/issues/9")
        assert kwargs["json"] == {"body": "New body"}

    def test_close_and_reopen(self, client):
        response = mock_response(200, issue_payload(9, state="closed"))
        with patch.object(client._client, "request", return_value=response) as mock_request:
            issue = client.close_issue("octocat", "hello", 9)
            assert mock_request.call_args.kwargs["json"] == {"state": "closed"}
            client.reopen_issue("octocat", "hello", 9)
            assert mock_request.call_args.kwargs["json"] == {"state": "open"}
        assert issue.state is IssueState.CLOSED

    def test_comments(self, client):
        comment = {
            "id": 5,
            "body": "Looks good",
            "user": {"login": "hubot"},
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        }
        with patch.object(
            client._client, "request", return_value=mock_response(200, [comment])
        ) as mock_request:
            comments = client.list_comments("octocat", "hello", 9)
            assert mock_request.call_args.args == ("GET", "/repos/octocat/hello/issues/9/comments")

        with patch.object(
            client._client, "request", return_value=mock_response(201, comment)
        ) as mock_request:
            created = client.create_comment("octocat", "hello", 9, "Looks good")
            assert mock_request.call_args.kwargs["json"] == {"body": "Looks good"}

        assert comments[0].author.login == "hubot"
        assert created.id == 5
