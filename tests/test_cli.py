"""Tests for the interactive menu driver."""

import io
from unittest.mock import MagicMock, patch

import pytest

from leano import cli
from leano.config import Settings
from leano.errors import AuthRejectedError, TransportError
from leano.pages import PageView, PaginationState
from leano.router_api import LeanoResponse, RouterAPI


def scripted(*answers):
    """input() replacement returning the given answers in order."""
    answers = iter(answers)
    return lambda prompt="": next(answers)


@pytest.fixture
def api():
    mock = MagicMock(spec=RouterAPI)
    mock.get_index_data.return_value = LeanoResponse({"recieve": "2048", "INTERNET": "Connected"})
    return mock


@pytest.fixture
def settings():
    return Settings()


class TestMenu:
    def test_exit(self, api, settings):
        cli.run_menu(api, settings, input_fn=scripted("0"))
        api.execute.assert_not_called()

    def test_invalid_choice(self, api, settings, capsys):
        cli.run_menu(api, settings, input_fn=scripted("9", "0"))
        assert "Invalid command" in capsys.readouterr().out

    def test_set_dmz_default(self, api, settings, capsys):
        api.set_dmz.return_value = LeanoResponse({"status": "success", "code": "0"})

        cli.run_menu(api, settings, input_fn=scripted("1", "", "0"))

        api.set_dmz.assert_called_once_with("192.168.0.98")
        assert "DMZ enabled for 192.168.0.98" in capsys.readouterr().out

    def test_set_dmz_failure_prints_raw_reply(self, api, settings, capsys):
        api.set_dmz.return_value = LeanoResponse({"status": "failed", "code": "7"})

        cli.run_menu(api, settings, input_fn=scripted("1", "192.168.0.5", "0"))

        out = capsys.readouterr().out
        assert "Router reported failure" in out
        assert '"code": "7"' in out

    def test_band_lock(self, api, settings, capsys):
        api.set_band_lock.return_value = LeanoResponse({"status": "success"})
        cli.run_menu(api, settings, input_fn=scripted("5", " 42490 ", "0"))
        api.set_band_lock.assert_called_once_with("42490")
        assert "EARFCN 42490" in capsys.readouterr().out

    def test_band_lock_requires_value(self, api, settings, capsys):
        cli.run_menu(api, settings, input_fn=scripted("5", "", "0"))
        api.set_band_lock.assert_not_called()
        assert "EARFCN is required" in capsys.readouterr().out

    def test_neighbour_cells(self, api, settings, capsys):
        api.neighbour_cells.return_value = [{"type": "LTE", "pcid": "12"}]
        cli.run_menu(api, settings, input_fn=scripted("4", "0"))
        assert "Neighbour cells: 1" in capsys.readouterr().out

    def test_raw_command(self, api, settings, capsys):
        api.execute.return_value = LeanoResponse({"status": "success"})
        cli.run_menu(api, settings, input_fn=scripted("6", "get_sms_list", "0"))
        api.execute.assert_called_once_with("get_sms_list")
        assert '"status": "success"' in capsys.readouterr().out

    def test_errors_return_to_menu(self, api, settings, capsys):
        api.neighbour_cells.side_effect = TransportError("router unreachable")

        cli.run_menu(api, settings, input_fn=scripted("4", "9", "0"))

        out = capsys.readouterr().out
        assert "router unreachable" in out
        assert "Invalid command" in out


class TestBrowse:
    def test_navigation(self, api, capsys):
        pages = PaginationState()

        cli.do_browse(api, pages, input_fn=scripted("n", "x", "p", "p", "q"))

        out = capsys.readouterr().out
        assert "CONNECTION  [2/6]" in out
        assert "SYSTEM  [6/6]" in out
        assert "Invalid command" in out
        assert pages.current is PageView.SYSTEM
        # Initial fetch plus one per move; invalid input does not refetch
        assert api.get_index_data.call_count == 4

    def test_fetch_error_propagates(self, api):
        api.get_index_data.side_effect = TransportError("down")
        with pytest.raises(TransportError):
            cli.do_browse(api, PaginationState(), input_fn=scripted("q"))


class TestLiveDashboard:
    def test_stops_on_quit(self, api, settings, capsys):
        api.execute.return_value = LeanoResponse({"recieve": "2048"})

        cli.do_live_dashboard(api, settings, PaginationState(), stream=io.StringIO("q\n"))

        assert "Monitoring stopped" in capsys.readouterr().out

    def test_frame_includes_status_block(self, api, settings, capsys):
        api.execute.return_value = LeanoResponse({"IMEI": "356938035643809", "recieve": "2048"})

        cli.do_live_dashboard(api, settings, PaginationState(), stream=io.StringIO("q\n"))

        out = capsys.readouterr().out
        assert "STATUS" in out
        assert "356938035643809" in out
        assert "2.00 KB" in out

    def test_error_is_reported_by_menu(self, api, settings, capsys):
        api.execute.side_effect = TransportError("timed out")

        cli.run_menu(api, settings, input_fn=scripted("2", "0"), stream=io.StringIO(""))

        assert "timed out" in capsys.readouterr().out


class TestConnect:
    def test_uses_configured_password(self, capsys):
        api = MagicMock()
        api.session.degraded = False
        settings = Settings(password="pw")

        with patch.object(RouterAPI, "from_settings", return_value=api):
            assert cli.connect(settings) is api

        api.authenticate.assert_called_once_with("admin", "pw")

    def test_prompts_without_password(self):
        api = MagicMock()
        api.session.degraded = False

        with patch.object(RouterAPI, "login_interactive", return_value=api) as login:
            cli.connect(Settings())

        login.assert_called_once()

    def test_warns_on_empty_token(self, capsys):
        api = MagicMock()
        api.session.degraded = True

        with patch.object(RouterAPI, "from_settings", return_value=api):
            cli.connect(Settings(password="pw"))

        assert "empty token" in capsys.readouterr().out


class TestMain:
    def test_auth_failure_exit_code(self, monkeypatch):
        monkeypatch.delenv("LEANO_PASSWORD", raising=False)
        with patch("leano.cli.connect", side_effect=AuthRejectedError("rejected")):
            assert cli.main([]) == 1

    def test_unreachable_exit_code(self):
        with patch("leano.cli.connect", side_effect=TransportError("refused")):
            assert cli.main(["--url", "10.0.0.1"]) == 1

    def test_runs_menu(self):
        with patch("leano.cli.connect") as connect, patch("leano.cli.run_menu") as run_menu:
            assert cli.main(["--url", "10.0.0.1", "--interval", "2", "-v"]) == 0

        settings = connect.call_args.args[0]
        assert settings.base_url == "http://10.0.0.1"
        assert settings.poll_interval == 2
        run_menu.assert_called_once()

    def test_interrupt_at_menu(self):
        with patch("leano.cli.connect"), \
                patch("leano.cli.run_menu", side_effect=KeyboardInterrupt):
            assert cli.main([]) == 0
