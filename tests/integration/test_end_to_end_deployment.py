"""
End-to-end tests for localization deployment.

These tests build a realistic plugins folder on disk (a language pack plugin
with translation files, regular plugins with package metadata and NLS
catalogs, a stand-alone language pack) and run the complete pipeline through
the public entry points.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from src.plugin_localization import main as sync_main
from src.plugin_localization.config.manager import ConfigManager
from src.plugin_localization.main import EXIT_OK, deploy, main
from tests.utils.test_helpers import create_plugin_dir, read_json_file, write_json_file


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create plugins, language packs and a config file below tmp_path."""
    plugins = tmp_path / "plugins"

    _ = create_plugin_dir(
        plugins,
        "vscode-language-pack-de",
        publisher="ms-ceintl",
        contributes={
            "localizations": [
                {
                    "languageId": "de",
                    "languageName": "German",
                    "localizedLanguageName": "Deutsch",
                    "translations": [
                        {"id": "acme.editor", "path": "./translations/acme.editor.i18n.json"},
                        {"id": "acme.tools", "path": "./translations/acme.tools.i18n.json"},
                    ],
                }
            ]
        },
        files={
            "translations/acme.editor.i18n.json": {
                "contents": {
                    "package": {"displayName": "Editor-Erweiterung"},
                    "out/main.js": {"open": "Öffnen"},
                }
            },
            "translations/acme.tools.i18n.json": {
                "contents": {"src/tools/run.ts": {"run": "Ausführen {0}"}}
            },
        },
    )

    _ = create_plugin_dir(
        plugins,
        "editor",
        publisher="acme",
        package_nls={
            "displayName": "Editor extension",
            "description": "Edits things",
            "command.title": {"message": "Run", "comment": ["Command"]},
        },
        files={
            "nls.metadata.json": {
                "out/main.js": {"keys": ["open", "close"], "messages": ["Open", "Close"]}
            },
            "out/ignored.nls.metadata.json": {
                "filePath": "ignored.js",
                "keys": ["x"],
                "messages": ["X"],
            },
        },
    )

    _ = create_plugin_dir(
        plugins,
        "tools",
        publisher="acme",
        package_nls={"displayName": "Tools"},
        files={
            "dist/run.nls.metadata.json": {
                "filePath": "run.ts",
                "keys": ["run"],
                "messages": ["Run {0}"],
            },
        },
    )

    _ = write_json_file(
        tmp_path / "packs" / "fr.json",
        {
            "languageId": "fr",
            "languageName": "French",
            "translations": {"acme.editor/package/displayName": "Extension d'éditeur"},
        },
    )

    config_data = {
        "paths": {
            "plugins_folder": str(plugins),
            "language_packs_folder": str(tmp_path / "packs"),
            "log_folder": str(tmp_path / "logs"),
        },
    }
    _ = (tmp_path / "config.yml").write_text(yaml.safe_dump(config_data), encoding="utf-8")
    return tmp_path


class TestEndToEndDeployment:
    """Test complete deployments."""

    @pytest.mark.asyncio
    async def test_full_deployment(self, workspace: Path) -> None:
        """Test every generated file of a full run."""
        config = ConfigManager.load_config(workspace / "config.yml")
        editor = workspace / "plugins" / "editor"
        tools = workspace / "plugins" / "tools"

        result = await deploy(config)

        assert result.failure_count == 0
        assert result.deployed_count == 3

        assert read_json_file(editor / "package.nls.de.json") == {
            "displayName": "Editor-Erweiterung",
            "description": "Edits things",
            "command.title": {"message": "Run", "comment": ["Command"]},
        }
        assert read_json_file(editor / "package.nls.fr.json") == {
            "displayName": "Extension d'éditeur",
            "description": "Edits things",
            "command.title": {"message": "Run", "comment": ["Command"]},
        }
        assert read_json_file(editor / "nls.bundle.de.json") == {"out/main.js": ["Öffnen", "Close"]}
        assert read_json_file(editor / "nls.bundle.fr.json") == {"out/main.js": ["Open", "Close"]}
        # A bundle suppresses entry catalogs under the default policy
        assert not list((editor / "out").glob("ignored.js.nls.*.json"))

        assert read_json_file(tools / "package.nls.de.json") == {"displayName": "Tools"}
        # Entry keys use the filePath, not the catalog location
        assert read_json_file(tools / "dist" / "run.ts.nls.de.json") == ["Run {0}"]

    @pytest.mark.asyncio
    async def test_entry_scope_from_file_path(self, workspace: Path) -> None:
        """Test that entry translations match on the transformed filePath."""
        config = ConfigManager.load_config(workspace / "config.yml")
        tools = workspace / "plugins" / "tools"
        _ = write_json_file(
            tools / "dist" / "run.nls.metadata.json",
            {"filePath": "src/tools/run.ts", "keys": ["run"], "messages": ["Run {0}"]},
        )
        (tools / "dist" / "src" / "tools").mkdir(parents=True)

        result = await deploy(config)

        assert result.failure_count == 0
        assert read_json_file(tools / "dist" / "src" / "tools" / "run.ts.nls.de.json") == [
            "Ausführen {0}"
        ]

    @pytest.mark.asyncio
    async def test_second_run_changes_nothing(self, workspace: Path) -> None:
        """Test that a repeated deployment leaves generated files untouched."""
        config = ConfigManager.load_config(workspace / "config.yml")
        _ = await deploy(config)
        generated = sorted(workspace.glob("plugins/**/*.nls.*.json")) + sorted(
            workspace.glob("plugins/**/nls.bundle.*.json")
        )
        snapshot = {path: path.read_bytes() for path in generated}

        result = await deploy(config)

        assert result.failure_count == 0
        assert snapshot
        assert {path: path.read_bytes() for path in generated} == snapshot
        assert sorted(workspace.glob("plugins/**/*.nls.*.json")) + sorted(
            workspace.glob("plugins/**/nls.bundle.*.json")
        ) == generated

    @pytest.mark.asyncio
    async def test_edited_translation_is_kept(self, workspace: Path) -> None:
        """Test that a hand-edited generated file survives redeployment."""
        config = ConfigManager.load_config(workspace / "config.yml")
        editor = workspace / "plugins" / "editor"
        _ = await deploy(config)
        _ = write_json_file(editor / "package.nls.de.json", {"displayName": "Eigener Name"})

        _ = await deploy(config)

        assert read_json_file(editor / "package.nls.de.json") == {"displayName": "Eigener Name"}

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("restore_root_logger")
    async def test_main_with_config_file(self, workspace: Path) -> None:
        """Test the async entry point against the saved configuration."""
        exit_code = await main(["--config-file", str(workspace / "config.yml")])

        assert exit_code == EXIT_OK
        assert (workspace / "plugins" / "editor" / "nls.bundle.de.json").exists()
        assert (workspace / "logs" / "plugin-localization.log").exists()

    @pytest.mark.usefixtures("restore_root_logger")
    def test_sync_entry_point_exit_code(self, workspace: Path) -> None:
        """Test that the console script exits with the deployment status."""
        with patch("sys.argv", ["plugin-localization", "--config-file", str(workspace / "config.yml")]):
            with pytest.raises(SystemExit) as exc_info:
                sync_main()

        assert exc_info.value.code == EXIT_OK
