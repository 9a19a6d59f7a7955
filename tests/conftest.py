import pytest


@pytest.fixture(autouse=True)
def query_log(tmp_path, monkeypatch):
    path = tmp_path / "calc_tutor_log.jsonl"
    monkeypatch.setattr("core.logger.LOGFILE", str(path))
    return path
