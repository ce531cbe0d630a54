"""
Tests for the command line entry point.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from valheim_launcher import cli


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("WORKING_DIR", str(tmp_path))
    monkeypatch.delenv("WEBHOOK_URL", raising=False)
    with patch("valheim_launcher.cli.setup_logging"):
        yield tmp_path


def _ok_response():
    cm = MagicMock()
    cm.__enter__.return_value = MagicMock(status=200, read=MagicMock(return_value=b"ok"))
    cm.__exit__.return_value = False
    return cm


class TestCli:

    def test_notify_with_explicit_webhook(self):
        with patch("urllib.request.urlopen", return_value=_ok_response()) as mock_urlopen:
            rc = cli.main(["notify", "Server restarting soon", "--webhook", "http://127.0.0.1:3000/hook"])
        assert rc == 0
        request = mock_urlopen.call_args[0][0]
        body = json.loads(request.data)
        assert body["event_type"]["name"] == "Broadcast"
        assert body["event_message"] == "Server restarting soon"

    def test_notify_without_webhook_is_noop(self):
        with patch("urllib.request.urlopen") as mock_urlopen:
            assert cli.main(["notify", "hi"]) == 0
        mock_urlopen.assert_not_called()

    def test_notify_with_malformed_webhook_does_not_fail(self):
        with patch("urllib.request.urlopen") as mock_urlopen:
            assert cli.main(["notify", "hello", "--webhook", "not-a-url"]) == 0
        mock_urlopen.assert_not_called()

    def test_start_failure_fires_failed_event(self):
        with patch("valheim_launcher.cli.ServerLauncher") as MockLauncher, \
             patch("valheim_launcher.cli.NotificationDispatcher.send") as mock_send:
            MockLauncher.return_value.start.side_effect = OSError("exec format error")
            rc = cli.main(["start"])
        assert rc == 1
        assert [str(c.args[0]) for c in mock_send.call_args_list] == ["Start Running", "Start Failed"]

    def test_start_success(self):
        with patch("valheim_launcher.cli.ServerLauncher") as MockLauncher, \
             patch("valheim_launcher.cli.NotificationDispatcher.send") as mock_send:
            assert cli.main(["start"]) == 0
        MockLauncher.return_value.start.assert_called_once()
        assert [str(c.args[0]) for c in mock_send.call_args_list] == ["Start Running", "Start Successful"]

    def test_backup_default_output(self, cli_env):
        worlds = cli_env / "worlds"
        worlds.mkdir()
        (worlds / "a.db").write_text("x")
        with patch.dict("os.environ", {"BACKUP_DIR": str(cli_env / "backups")}):
            assert cli.main(["backup", str(worlds)]) == 0
        assert len(list((cli_env / "backups").glob("worlds-*.tar.gz"))) == 1

    def test_install_failure(self):
        with patch("valheim_launcher.cli.SteamCMD") as MockSteam:
            MockSteam.return_value.install_server.side_effect = RuntimeError("SteamCMD failed (rc=8)")
            assert cli.main(["install"]) == 1
