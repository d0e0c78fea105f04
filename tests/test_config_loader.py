from pathlib import Path

import pytest  # type: ignore[import-not-found]

from reactome_indexer.utils.config import load_config, section


def test_load_config(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("key: value\n", encoding="utf-8")
    config = load_config(config_file)
    assert config["key"] == "value"


def test_load_config_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_section_walks_nested_mappings(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "graph:\n  neo4j:\n    uri: bolt://db:7687\nindexing: null\n",
        encoding="utf-8",
    )
    config = load_config(config_file)
    assert section(config, "graph", "neo4j") == {"uri": "bolt://db:7687"}
    assert section(config, "indexing") == {}
    assert section(config, "graph", "neo4j", "uri") == {}
    assert section(config, "absent", "deeper") == {}
