from review_core.queries import build_queries, changes_url, pending_query, submittable_query
from review_core.state import TrackerConfig


CONFIG = TrackerConfig(server="https://review.example.com", project="platform/build", username="dev")


def test_pending_query_selects_reviewer_and_requests_revisions() -> None:
    q = pending_query(CONFIG)
    assert q.startswith("?q=status:open+project:platform/build+reviewer:dev")
    assert "+-owner:dev" in q
    assert q.endswith("&o=ALL_REVISIONS")


def test_submittable_query_selects_owner() -> None:
    q = submittable_query(CONFIG)
    assert q == "?q=status:open+project:platform/build+owner:dev&o=SUBMITTABLE"


def test_build_queries_order_is_pending_then_submittable() -> None:
    pending, submittable = build_queries(CONFIG)
    assert "reviewer:" in pending
    assert "owner:dev&o=SUBMITTABLE" in submittable


def test_values_are_percent_encoded() -> None:
    config = TrackerConfig(server="https://r", project="a b+c", username="me@example.com")
    q = submittable_query(config)
    assert "project:a%20b%2Bc" in q
    assert "owner:me@example.com" in q


def test_changes_url_joins_server_and_query() -> None:
    assert changes_url("https://r/", "?q=x") == "https://r/changes/?q=x"
    assert changes_url("https://r", "?q=x") == "https://r/changes/?q=x"
