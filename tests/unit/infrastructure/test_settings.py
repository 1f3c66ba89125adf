import pytest
from pathlib import Path

from mockdrills.domain.exceptions import ConfigurationError
from mockdrills.infrastructure.config import settings


def test_env_var_name():
    assert settings.env_var_name("signing.secret") == "MOCKDRILLS_SIGNING_SECRET"


def test_get_config_default():
    assert settings.get_config("no.such.key", "fallback") == "fallback"


def test_environment_overrides_yaml_and_is_coerced(monkeypatch):
    monkeypatch.setattr(settings, "_config", {"logging.level": "INFO", "lookup.enabled": "x"})
    monkeypatch.setenv("MOCKDRILLS_LOGGING_LEVEL", "DEBUG")
    monkeypatch.setenv("MOCKDRILLS_LOOKUP_ENABLED", "true")
    monkeypatch.setenv("MOCKDRILLS_SENDER_RETRIES", "3")

    assert settings.get_config("logging.level") == "DEBUG"
    assert settings.get_config("lookup.enabled") is True
    assert settings.get_config("sender.retries") == 3


def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("MOCKDRILLS_SIGNING_KEY_ID", "from-env")
    settings.set_config_for_testing({"signing.key_id": "from-test"})

    assert settings.get_config("signing.key_id") == "from-test"


def test_load_configuration_reads_nested_yaml(monkeypatch, tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("signing:\n  key_id: yaml-key\nsender:\n  accepted_formats: ['4.0']\n")
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.chdir(tmp_path)

    settings.load_configuration(config_file=config_file)

    assert settings.get_config("signing.key_id") == "yaml-key"
    assert settings.get_accepted_formats() == frozenset({"4.0"})


def test_load_configuration_reads_dotenv(monkeypatch, tmp_path: Path):
    (tmp_path / ".env").write_text("MOCKDRILLS_SIGNING_SECRET=from-dotenv\n")
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.chdir(tmp_path)
    # load_dotenv writes into os.environ; let monkeypatch restore it
    monkeypatch.setenv("MOCKDRILLS_SIGNING_SECRET", "")
    monkeypatch.delenv("MOCKDRILLS_SIGNING_SECRET")

    settings.load_configuration(config_file=tmp_path / "absent.yaml")

    assert settings.get_signing_credential().secret == b"from-dotenv"


def test_load_configuration_rejects_broken_yaml(monkeypatch, tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("signing: [unclosed\n")
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigurationError):
        settings.load_configuration(config_file=config_file)


def test_signing_credential_requires_secret():
    with pytest.raises(ConfigurationError, match="MOCKDRILLS_SIGNING_SECRET"):
        settings.get_signing_credential()


def test_signing_credential_key_id(monkeypatch):
    monkeypatch.setenv("MOCKDRILLS_SIGNING_SECRET", "abc")

    assert settings.get_signing_credential().key_id == "default"
    assert settings.get_signing_credential("other").key_id == "other"
    assert "abc" not in repr(settings.get_signing_credential())


def test_signing_credential_keeps_numeric_looking_text(monkeypatch):
    monkeypatch.setenv("MOCKDRILLS_SIGNING_SECRET", "0042")
    monkeypatch.setenv("MOCKDRILLS_SIGNING_KEY_ID", "01")

    credential = settings.get_signing_credential()

    assert credential.secret == b"0042"
    assert credential.key_id == "01"


def test_signing_credential_rejects_unquoted_yaml_secret(monkeypatch, tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("signing:\n  secret: 1.50\n")
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.chdir(tmp_path)
    settings.load_configuration(config_file=config_file)

    with pytest.raises(ConfigurationError, match="signing.secret must be text"):
        settings.get_signing_credential()


def test_get_config_without_coercion(monkeypatch):
    monkeypatch.setenv("MOCKDRILLS_SENDER_RETRIES", "007")

    assert settings.get_config("sender.retries") == 7
    assert settings.get_config("sender.retries", coerce=False) == "007"


@pytest.mark.parametrize("value, expected", [
    ("4.0,3.1", {"4.0", "3.1"}),
    (" 5.0 , ", {"5.0"}),
    (["4.0", "3.1"], {"4.0", "3.1"}),
])
def test_accepted_formats(value, expected):
    settings.set_config_for_testing({"sender.accepted_formats": value})
    assert settings.get_accepted_formats() == frozenset(expected)


def test_accepted_formats_keep_environment_text(monkeypatch):
    monkeypatch.setenv("MOCKDRILLS_SENDER_ACCEPTED_FORMATS", "4.00")

    assert settings.get_accepted_formats() == frozenset({"4.00"})


@pytest.mark.parametrize("value", [[4.0, "3.1"], 4.0])
def test_accepted_formats_rejects_numbers(value):
    settings.set_config_for_testing({"sender.accepted_formats": value})

    with pytest.raises(ConfigurationError, match="sender.accepted_formats"):
        settings.get_accepted_formats()


def test_accepted_formats_default_and_empty():
    assert settings.get_accepted_formats() == frozenset({"4.0", "3.1"})
    settings.set_config_for_testing({"sender.accepted_formats": ""})
    with pytest.raises(ConfigurationError):
        settings.get_accepted_formats()


def test_outbox_dir(monkeypatch):
    assert settings.get_outbox_dir() == Path("outbox")
    monkeypatch.setenv("MOCKDRILLS_SENDER_OUTBOX_DIR", "/tmp/out")
    assert settings.get_outbox_dir() == Path("/tmp/out")
