import io
from types import SimpleNamespace

import pytest
import yaml

from keko.ts3viewer.config import Settings, ViewerSettings
from keko.ts3viewer.main import RecordedResponse, main
from keko.ts3viewer.viewer import FALLBACK_MESSAGE


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "keko-ts3viewer.yaml"
    Settings(viewer=ViewerSettings(hide_empty_channels=True)).to_yaml(path)
    return path


def test_recorded_response_is_handed_out_once():
    executor = RecordedResponse("raw")
    assert executor.execute("serverinfo") == "raw"
    assert executor.execute("channellist") == ""


def test_main_prints_tree(tmp_path, config_path, sample_response, capsys):
    response_path = tmp_path / "response.txt"
    response_path.write_bytes(sample_response.encode("utf-8"))

    main(["--config", str(config_path), str(response_path)])

    data = yaml.safe_load(capsys.readouterr().out)
    assert data["name"] == "Kellerkompanie TS"
    # Empty channels are hidden by the config
    assert [c["id"] for c in data["channels"]] == [2, 5]
    assert [u["name"] for u in data["channels"][0]["users"]] == ["alice", "Zoe"]


def test_main_reads_stdin(config_path, sample_response, capsys, monkeypatch):
    stdin = SimpleNamespace(buffer=io.BytesIO(sample_response.encode("utf-8")))
    monkeypatch.setattr("sys.stdin", stdin)

    main(["--config", str(config_path)])

    assert "Kellerkompanie TS" in capsys.readouterr().out


def test_main_exits_on_fallback(tmp_path, config_path, capsys):
    response_path = tmp_path / "response.txt"
    response_path.write_text("garbage")

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path), str(response_path)])

    assert exc_info.value.code == 1
    assert FALLBACK_MESSAGE in capsys.readouterr().err


def test_main_exits_without_config(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(tmp_path / "missing.yaml"), str(tmp_path / "response.txt")])
    assert exc_info.value.code == 1


def test_main_exits_on_missing_response_file(tmp_path, config_path, caplog):
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path), str(tmp_path / "missing.txt")])

    assert exc_info.value.code == 1
    assert "Failed to read response" in caplog.text


def test_main_exits_on_non_utf8_capture(tmp_path, config_path, sample_response, caplog):
    response_path = tmp_path / "response.txt"
    response_path.write_bytes(sample_response.replace("Lobby", "Löbby").encode("latin-1"))

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path), str(response_path)])

    assert exc_info.value.code == 1
    assert "is not valid UTF-8" in caplog.text
