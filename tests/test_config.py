"""
Tests for configuration and container discovery
"""

import pytest
import tomli

from phocus_import.config import (
    BUNDLE_ID,
    CONFIG_ENV,
    CONTAINER_ROOT_ENV,
    PREFERENCES_SUBDIR,
    STORE_SUBPATH,
    ImporterConfig,
    find_container_root,
    load_config,
)
from phocus_import.errors import ContainerNotFoundError


def _container(containers_dir, name, with_prefs=True, with_store=False):
    root = containers_dir / name
    root.mkdir(parents=True)
    if with_prefs:
        prefs = root / PREFERENCES_SUBDIR
        prefs.mkdir(parents=True)
        (prefs / f"{BUNDLE_ID}.plist").write_bytes(b"")
    if with_store:
        store = root / STORE_SUBPATH
        store.parent.mkdir(parents=True)
        store.write_bytes(b"")
    return root


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No config file or container override leaks in from the environment"""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(CONTAINER_ROOT_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


class TestImporterConfig:
    """Test derived locations"""

    def test_standard_layout(self, tmp_path):
        config = ImporterConfig.for_container(tmp_path)

        assert config.raw_dir == tmp_path / "Data" / "Documents" / "Images"
        assert config.preview_dir == tmp_path / "Data" / "Library" / "PreviewCache"
        assert config.store_path == tmp_path / "Data" / "Library" / "RealmDB" / "Album.realm"
        assert config.schema_version == 13
        assert config.bundle_id == BUNDLE_ID

    def test_ensure_dirs(self, tmp_path):
        config = ImporterConfig.for_container(tmp_path / "c")
        config.ensure_dirs()
        config.ensure_dirs()

        assert config.raw_dir.is_dir()
        assert config.preview_dir.is_dir()
        assert not config.store_path.exists()


class TestFindContainerRoot:
    """Test discovery by bundle ID"""

    def test_single_match(self, tmp_path):
        _container(tmp_path, "AAA")
        _container(tmp_path, "BBB", with_prefs=False)

        assert find_container_root(containers_dir=tmp_path) == tmp_path / "AAA"

    def test_prefers_container_with_store(self, tmp_path):
        _container(tmp_path, "AAA")
        _container(tmp_path, "BBB", with_store=True)

        assert find_container_root(containers_dir=tmp_path) == tmp_path / "BBB"

    def test_first_match_without_store(self, tmp_path):
        _container(tmp_path, "BBB")
        _container(tmp_path, "AAA")

        assert find_container_root(containers_dir=tmp_path) == tmp_path / "AAA"

    def test_other_bundle(self, tmp_path):
        _container(tmp_path, "AAA")

        with pytest.raises(ContainerNotFoundError):
            find_container_root("com.example.other", containers_dir=tmp_path)

    def test_no_containers_dir(self, tmp_path):
        with pytest.raises(ContainerNotFoundError):
            find_container_root(containers_dir=tmp_path / "missing")


class TestLoadConfig:
    """Test resolution order"""

    def test_env_container_root(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv(CONTAINER_ROOT_ENV, str(tmp_path / "env-root"))

        config = load_config()

        assert config.container_root == tmp_path / "env-root"
        assert config.log_level == "INFO"
        assert config.log_dir is None

    def test_toml_file(self, clean_env, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            '[paths]\n'
            f'container_root = "{(tmp_path / "toml-root").as_posix()}"\n'
            '[logging]\n'
            'level = "DEBUG"\n'
            f'log_dir = "{(tmp_path / "logs").as_posix()}"\n'
        )

        config = load_config(path)

        assert config.container_root == tmp_path / "toml-root"
        assert config.log_level == "DEBUG"
        assert config.log_dir == tmp_path / "logs"

    def test_env_overrides_toml(self, clean_env, monkeypatch, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(f'[paths]\ncontainer_root = "{(tmp_path / "toml-root").as_posix()}"\n')
        monkeypatch.setenv(CONTAINER_ROOT_ENV, str(tmp_path / "env-root"))

        assert load_config(path).container_root == tmp_path / "env-root"

    def test_config_env_variable(self, clean_env, monkeypatch, tmp_path):
        path = tmp_path / "elsewhere.toml"
        path.write_text(f'[paths]\ncontainer_root = "{(tmp_path / "toml-root").as_posix()}"\n')
        monkeypatch.setenv(CONFIG_ENV, str(path))

        assert load_config().container_root == tmp_path / "toml-root"

    def test_config_in_working_directory(self, clean_env, tmp_path):
        (tmp_path / "phocus-import.toml").write_text(
            f'[paths]\ncontainer_root = "{(tmp_path / "cwd-root").as_posix()}"\n'
        )

        assert load_config().container_root == tmp_path / "cwd-root"

    def test_discovery_from_toml_containers_dir(self, clean_env, tmp_path):
        containers = tmp_path / "Containers"
        _container(containers, "XYZ", with_store=True)
        path = tmp_path / "custom.toml"
        path.write_text(f'[paths]\ncontainers_dir = "{containers.as_posix()}"\n')

        config = load_config(path)

        assert config.container_root == containers / "XYZ"
        assert config.store_path.is_file()

    def test_malformed_toml(self, clean_env, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[paths\ncontainer_root = ")

        with pytest.raises(tomli.TOMLDecodeError):
            load_config(path)
