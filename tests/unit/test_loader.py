"""Unit tests for ConfigLoader."""
import pytest

from src.layered_config import loader as loader_module
from src.layered_config.exceptions import (
    ConfigNotFoundError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigValidationError,
    RemoteFetchError,
    RetryExhaustedError,
)
from src.layered_config.loader import ConfigLoader
from src.layered_config.remote.reader import RemoteConfigReader
from src.layered_config.settings import ConfigSource, LoaderSettings
from src.layered_config.testing import FakeRemoteConfigClient, RecordingSleep


def _loader(config_dir, profiles=(), client=None, environ=None, **kwargs):
    environ = environ if environ is not None else {}
    reader = RemoteConfigReader(
        client=client or FakeRemoteConfigClient(),
        environ=environ,
        sleep=RecordingSleep(),
    )
    settings = LoaderSettings(config_path=str(config_dir), active_profiles=list(profiles))
    return ConfigLoader(settings=settings, remote_reader=reader, environ=environ, **kwargs)


def _bootstrap(**options):
    return {"spring": {"cloud": {"config": options}}}


@pytest.mark.asyncio
async def test_dev_profile_overrides_default(config_dir, write_yaml):
    """testUrl from application-dev.yml should win with profile dev."""
    write_yaml("application.yml", {"testUrl": "http://default"})
    write_yaml("application-dev.yml", {"testUrl": "http://dev"})

    config = await _loader(config_dir, ["dev"]).load()

    assert config["testUrl"] == "http://dev"


@pytest.mark.asyncio
async def test_no_bootstrap_means_local_only(config_dir, write_yaml):
    """Without a bootstrap file the result is the local config."""
    write_yaml("application.yml", {"a": 1})
    client = FakeRemoteConfigClient([{"remote": True}])

    config = await _loader(config_dir, client=client).load()

    assert config == {"a": 1}
    assert client.calls == 0


@pytest.mark.asyncio
async def test_disabled_remote_adds_only_client_options(config_dir, write_yaml):
    """enabled: false should add the options block and nothing remote."""
    write_yaml("application.yml", {"a": 1})
    write_yaml("bootstrap.yml", _bootstrap(enabled=False, name="app"))
    client = FakeRemoteConfigClient([{"remote": True}])

    config = await _loader(config_dir, client=client).load()

    assert client.calls == 0
    assert set(config.keys()) == {"a", "spring"}
    assert set(config["spring"].keys()) == {"cloud"}
    assert config["spring"]["cloud"]["config"]["enabled"] is False


@pytest.mark.asyncio
async def test_remote_fails_once_then_succeeds(config_dir, write_yaml):
    """fail-fast with retry should resolve with the eventual document."""
    write_yaml("application.yml", {"a": "local", "b": "local"})
    write_yaml("bootstrap.yml", _bootstrap(**{
        "enabled": True,
        "name": "app",
        "fail-fast": True,
        "retry": {"enabled": True, "max-attempts": 3},
    }))
    client = FakeRemoteConfigClient([RemoteFetchError(), {"a": "remote"}])

    config = await _loader(config_dir, client=client).load()

    assert config["a"] == "remote"
    assert config["b"] == "local"
    assert client.calls == 2


@pytest.mark.asyncio
async def test_retry_exhaustion_fails_load_and_keeps_previous(config_dir, write_yaml):
    """A fatal error should leave the stored configuration untouched."""
    write_yaml("application.yml", {"a": 1})
    loader = _loader(config_dir)
    await loader.load()

    write_yaml("bootstrap.yml", _bootstrap(**{
        "enabled": True,
        "name": "app",
        "fail-fast": True,
        "retry": {"enabled": True, "max-attempts": 2},
    }))
    loader.remote_reader.client = FakeRemoteConfigClient.failing()

    with pytest.raises(RetryExhaustedError):
        await loader.load()

    assert loader.instance() == {"a": 1}


@pytest.mark.asyncio
async def test_environment_json_overrides_local(config_dir, write_yaml):
    """APPLICATION_JSON should beat local files."""
    write_yaml("application.yml", {"server": {"port": 8080, "host": "localhost"}})
    environ = {"APPLICATION_JSON": '{"server.port": 9090}'}

    config = await _loader(config_dir, environ=environ).load()

    assert config["server"] == {"port": 9090, "host": "localhost"}


@pytest.mark.asyncio
async def test_remote_beats_environment_json_by_default(config_dir, write_yaml):
    """Default precedence is local < environment JSON < remote."""
    write_yaml("application.yml", {"key": "local"})
    write_yaml("bootstrap.yml", _bootstrap(enabled=True, name="app"))
    environ = {"APPLICATION_JSON": '{"key": "json"}'}
    client = FakeRemoteConfigClient([{"key": "remote"}])

    config = await _loader(config_dir, client=client, environ=environ).load()

    assert config["key"] == "remote"


@pytest.mark.asyncio
async def test_custom_precedence(config_dir, write_yaml):
    """A custom precedence list should reorder sources."""
    write_yaml("application.yml", {"key": "local"})
    write_yaml("bootstrap.yml", _bootstrap(enabled=True, name="app"))
    environ = {"APPLICATION_JSON": '{"key": "json"}'}
    client = FakeRemoteConfigClient([{"key": "remote"}])

    loader = _loader(
        config_dir,
        client=client,
        environ=environ,
        precedence=[ConfigSource.REMOTE, ConfigSource.LOCAL, ConfigSource.ENVIRONMENT_JSON],
    )
    config = await loader.load()

    assert config["key"] == "json"


@pytest.mark.asyncio
async def test_omitted_remote_source_is_not_invoked(config_dir, write_yaml):
    """Leaving REMOTE out of the precedence skips the remote reader."""
    write_yaml("application.yml", {"key": "local"})
    write_yaml("bootstrap.yml", _bootstrap(enabled=True, name="app"))
    client = FakeRemoteConfigClient([{"key": "remote"}])

    loader = _loader(config_dir, client=client, precedence=["local", "environment_json"])
    config = await loader.load()

    assert config == {"key": "local"}
    assert client.calls == 0


@pytest.mark.asyncio
async def test_application_json_name_reaches_remote_reader(config_dir, write_yaml):
    """The remote name override should see local plus JSON config."""
    write_yaml("application.yml", {"key": "local"})
    write_yaml("bootstrap.yml", _bootstrap(enabled=True, name="bootstrap-name"))
    environ = {"APPLICATION_JSON": '{"spring.cloud.config.name": "json-name"}'}
    client = FakeRemoteConfigClient([{}])

    config = await _loader(config_dir, client=client, environ=environ).load()

    assert client.received[0].name == "json-name"
    assert config["spring"]["cloud"]["config"]["name"] == "json-name"


@pytest.mark.parametrize(
    "precedence",
    [
        [ConfigSource.LOCAL, ConfigSource.LOCAL],
        ["local", "database"],
    ],
)
def test_invalid_precedence(precedence, tmp_path):
    """Duplicate or unknown sources should be rejected."""
    with pytest.raises(ConfigValidationError):
        _loader(tmp_path, precedence=precedence)


def test_instance_before_load_raises(tmp_path):
    """instance() without a successful load should raise."""
    loader = _loader(tmp_path)

    assert not loader.is_loaded
    with pytest.raises(ConfigNotLoadedError):
        loader.instance()


@pytest.mark.asyncio
async def test_instance_returns_copy_of_last_load(config_dir, write_yaml):
    """instance() should return the stored config without exposing it."""
    write_yaml("application.yml", {"a": {"b": 1}})
    loader = _loader(config_dir)

    loaded = await loader.load()
    loaded["a"]["b"] = 99

    assert loader.is_loaded
    assert loader.instance() == {"a": {"b": 1}}
    loader.instance()["a"]["b"] = 42
    assert loader.instance() == {"a": {"b": 1}}


@pytest.mark.asyncio
async def test_reload_replaces_previous_config(config_dir, write_yaml):
    """Each load recomputes from scratch; old keys do not linger."""
    write_yaml("application.yml", {"old": True})
    loader = _loader(config_dir)
    await loader.load()

    write_yaml("application.yml", {"new": True})
    await loader.load()

    assert loader.instance() == {"new": True}


@pytest.mark.asyncio
async def test_missing_application_file_fails_load(config_dir):
    """A missing base file should fail the whole load."""
    with pytest.raises(ConfigNotFoundError):
        await _loader(config_dir).load()


@pytest.mark.asyncio
async def test_invalid_application_json_fails_load(config_dir, write_yaml):
    """A broken JSON blob should fail the whole load."""
    write_yaml("application.yml", {"a": 1})

    with pytest.raises(ConfigParseError):
        await _loader(config_dir, environ={"APPLICATION_JSON": "{"}).load()


@pytest.mark.asyncio
async def test_settings_read_from_environment(config_dir, write_yaml, monkeypatch):
    """Without injected settings the environment is read on each load."""
    write_yaml("application.yml", {"value": "base"})
    write_yaml("application-dev.yml", {"value": "dev"})
    monkeypatch.setenv("CONFIG_PATH", str(config_dir))
    monkeypatch.setenv("ACTIVE_PROFILES", "dev")

    loader = ConfigLoader(environ={})
    assert (await loader.load())["value"] == "dev"

    monkeypatch.delenv("ACTIVE_PROFILES")
    assert (await loader.load())["value"] == "base"


@pytest.mark.asyncio
async def test_missing_config_path_env(monkeypatch):
    """No CONFIG_PATH should be a not-found error."""
    with pytest.raises(ConfigNotFoundError):
        await ConfigLoader(environ={}).load()


@pytest.mark.asyncio
async def test_default_loader_accessors(config_dir, write_yaml, monkeypatch):
    """Module-level load()/instance() should share one loader."""
    write_yaml("application.yml", {"a": 1})
    monkeypatch.setenv("CONFIG_PATH", str(config_dir))
    monkeypatch.setattr(loader_module, "_default_loader", None)

    assert loader_module.get_default_loader() is loader_module.get_default_loader()
    with pytest.raises(ConfigNotLoadedError):
        loader_module.instance()

    assert await loader_module.load() == {"a": 1}
    assert loader_module.instance() == {"a": 1}


@pytest.mark.asyncio
async def test_application_json_configures_remote_client(config_dir, write_yaml):
    """Client options set through APPLICATION_JSON should be honored and kept."""
    write_yaml("application.yml", {"a": 1})
    write_yaml("bootstrap.yml", _bootstrap(name="app"))
    environ = {
        "APPLICATION_JSON": (
            '{"spring.cloud.config.enabled": true,'
            ' "spring.cloud.config.endpoint": "http://cfg:9999"}'
        ),
    }
    client = FakeRemoteConfigClient([{"remote": "value"}])

    config = await _loader(config_dir, client=client, environ=environ).load()

    assert client.calls == 1
    assert client.received[0].endpoint == "http://cfg:9999"
    assert config["remote"] == "value"
    assert config["spring"]["cloud"]["config"]["enabled"] is True
    assert config["spring"]["cloud"]["config"]["endpoint"] == "http://cfg:9999"
