"""
Tests for the SteamCMD installer wrapper.
"""

from unittest.mock import MagicMock, patch

import pytest

from valheim_launcher.steamcmd import SteamCMD


class TestSteamCMD:

    def test_install_server_args(self, settings):
        with patch("valheim_launcher.steamcmd.subprocess.run",
                   return_value=MagicMock(returncode=0, stdout="", stderr="")) as mock_run:
            SteamCMD(settings).install_server()

        cmd = mock_run.call_args[0][0]
        assert cmd[0] == str(settings.steamcmd_sh)
        assert cmd[cmd.index("+force_install_dir") + 1] == str(settings.working_dir)
        assert cmd[cmd.index("+login") + 1] == "anonymous"
        assert cmd[cmd.index("+app_update") + 1] == "896660"
        assert "validate" in cmd
        assert cmd[-1] == "+quit"

    def test_non_zero_exit_raises(self, settings):
        with patch("valheim_launcher.steamcmd.subprocess.run",
                   return_value=MagicMock(returncode=8, stdout="", stderr="No subscription")):
            with pytest.raises(RuntimeError):
                SteamCMD(settings).install_server()
