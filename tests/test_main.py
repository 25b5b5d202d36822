"""Tests for process startup and the scheduler loop."""

import pytest

from research_relay import main as entry
from research_relay import scheduler
from research_relay.config import AppConfig, ScraperConfig, SchedulerConfig, TelegramConfig
from research_relay.scheduler import ArticleWatcher
from research_relay.state import CursorStore


class StopLoop(Exception):
    pass


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def deliver(self, text):
        self.sent.append(text)
        return True


def _app_config(tmp_path):
    return AppConfig(
        state_path=str(tmp_path / "last_article_id.txt"),
        telegram=TelegramConfig(token="123:abc", chat_id="-100200"),
        scraper=ScraperConfig(),
        scheduler=SchedulerConfig(interval_minutes=15, send_delay_seconds=0),
    )


def test_missing_credentials_exit_with_status_1(monkeypatch):
    monkeypatch.delenv("TELEGRAM_TOKEN", raising=False)
    monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)

    def fail_run(config):
        raise AssertionError("loop must not start without credentials")

    monkeypatch.setattr(entry, "run_forever", fail_run)

    with pytest.raises(SystemExit) as exc_info:
        entry.main()
    assert exc_info.value.code == 1


@pytest.mark.parametrize("startup_result", [RuntimeError("navigation failed"), []])
def test_polling_starts_after_failed_or_empty_startup(monkeypatch, tmp_path, startup_result):
    config = _app_config(tmp_path)
    notifier = RecordingNotifier()

    def scrape():
        if isinstance(startup_result, Exception):
            raise startup_result
        return startup_result

    watcher = ArticleWatcher(
        CursorStore(config.state_path), notifier, config.scheduler, scrape, sleep=lambda _: None
    )
    monkeypatch.setattr(scheduler, "create_watcher", lambda cfg: watcher)

    built = []
    real_build = scheduler.build_scheduler

    def recording_build(w, interval_minutes):
        built.append((w, interval_minutes))
        return real_build(w, interval_minutes)

    monkeypatch.setattr(scheduler, "build_scheduler", recording_build)

    def stop(seconds):
        raise StopLoop()

    monkeypatch.setattr(scheduler.time, "sleep", stop)

    with pytest.raises(StopLoop):
        scheduler.run_forever(config)

    assert built == [(watcher, 15)]
    assert notifier.sent == []
    assert CursorStore(config.state_path).load() == ""
