import logging

from review_core.notify import ICON_DEFAULT, ICON_PENDING, ICON_READY, describe, log_notifier
from review_core.state import UpdateStatus


def test_submittable_news_wins_over_pending() -> None:
    status = UpdateStatus(has_new_pending=True, has_new_submittable=True,
                          pending_count=3, submittable_count=2)
    notice = describe(status)
    assert notice.icon == ICON_READY
    assert notice.title == "Ready to submit"
    assert notice.message == "2 commits ready to submit"


def test_pending_news_singular() -> None:
    notice = describe(UpdateStatus(has_new_pending=True, pending_count=1))
    assert notice.icon == ICON_PENDING
    assert notice.message == "1 commit to review"


def test_nothing_left_resets_icon() -> None:
    notice = describe(UpdateStatus())
    assert notice.icon == ICON_DEFAULT
    assert notice.message == ""


def test_no_news_with_open_items_leaves_presenter_alone() -> None:
    assert describe(UpdateStatus(pending_count=2)) is None


def test_log_notifier_logs_notice(caplog) -> None:
    caplog.set_level(logging.INFO)
    log_notifier(UpdateStatus(has_new_submittable=True, submittable_count=1))
    assert "1 commit ready to submit" in caplog.text
