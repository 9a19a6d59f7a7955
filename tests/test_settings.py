import json

from core.settings import DEFAULT_MODEL, LLMConfig, SettingsStore, load_config, readable_model


def test_store_round_trip(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.json"))
    assert store.load() is None
    store.save(LLMConfig(api_key="hf_abc", model="gpt2"))
    data = json.loads((tmp_path / "settings.json").read_text())
    assert data == {"llm-api-key": "hf_abc", "llm-model": "gpt2"}
    assert store.load() == LLMConfig(api_key="hf_abc", model="gpt2")


def test_store_keeps_base_url(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.json"))
    store.save(LLMConfig(api_key="sk", model="deepseek/deepseek-chat", base_url="http://localhost:1234/v1"))
    assert store.load().base_url == "http://localhost:1234/v1"


def test_clear(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.json"))
    store.save(LLMConfig(api_key="hf_abc"))
    store.clear()
    assert store.load() is None
    store.clear()


def test_unreadable_file_is_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert SettingsStore(str(path)).load() is None


def test_load_config_prefers_store(tmp_path, monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "sk-env")
    store = SettingsStore(str(tmp_path / "settings.json"))
    store.save(LLMConfig(api_key="hf_saved", model="gpt2"))
    assert load_config(store).api_key == "hf_saved"


def test_load_config_from_environment(tmp_path, monkeypatch):
    for name in ("LLM_API_KEY", "OPENAI_API_KEY", "HF_TOKEN", "LLM_MODEL", "LLM_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    store = SettingsStore(str(tmp_path / "missing.json"))
    assert load_config(store) is None

    monkeypatch.setenv("HF_TOKEN", "hf_env")
    config = load_config(store)
    assert config.api_key == "hf_env"
    assert config.model == DEFAULT_MODEL
    assert config.backend == "huggingface"


def test_readable_model():
    assert readable_model("meta-llama/Meta-Llama-3.2-8B-Instruct") == "LLaMA 3.2 8B"
    assert readable_model("some/unknown-model") == "some/unknown-model"
